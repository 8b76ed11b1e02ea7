"""Category-specific fields the collaborator is asked to extract."""

from docintake.database.models import DocumentCategory

BASE_FIELDS: tuple[str, ...] = (
    "Location/coordinates",
    "Date/time",
    "Personnel involved",
    "Activities performed",
    "Hazards identified",
    "Safety measures",
    "Equipment used",
    "Results/outcomes",
)

CATEGORY_FIELDS: dict[DocumentCategory, tuple[str, ...]] = {
    DocumentCategory.FIELD_REPORT: (
        "Team and task identifiers",
        "Area cleared or surveyed (square metres)",
        "Items found and destroyed",
    ),
    DocumentCategory.SURVEY_FORM: (
        "Survey type (non-technical or technical)",
        "Suspected or confirmed hazardous area boundaries",
        "Informant and community information",
    ),
    DocumentCategory.SOP_MANUAL: (
        "Procedure title and version",
        "Step-by-step procedures",
        "Roles and responsibilities",
        "Referenced IMAS standards",
    ),
    DocumentCategory.DONOR_REPORT: (
        "Donor and reporting period",
        "Funding and expenditure figures",
        "Key performance indicators and achievements",
        "Beneficiaries reached",
    ),
    DocumentCategory.TRAINING_MATERIAL: (
        "Course title and target audience",
        "Learning objectives",
        "Modules and duration",
        "Assessment criteria",
    ),
    DocumentCategory.HAZARD_SURVEY: (
        "Hazard types and density",
        "Contamination evidence",
        "Risk level estimate",
        "Recommended follow-up actions",
    ),
    DocumentCategory.INCIDENT_LOG: (
        "Incident type and severity",
        "Casualties and injuries",
        "Causes and contributing factors",
        "Follow-up actions taken",
    ),
}


def focus_fields(category: DocumentCategory) -> list[str]:
    return [*BASE_FIELDS, *CATEGORY_FIELDS.get(category, ())]


def render_focus_fields(category: DocumentCategory) -> str:
    return "\n".join(f"- {field}" for field in focus_fields(category))
