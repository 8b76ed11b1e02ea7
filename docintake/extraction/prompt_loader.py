from pathlib import Path

from docintake.extraction.exceptions import ExtractionError

_DEFAULT_PROMPT_DIR = Path(__file__).parent / "prompts"


def load_prompt_template(path: Path | None = None, *, default: str = "system_prompt.txt") -> str:
    """Load an extraction prompt template from a file.

    Args:
        path: Path to the prompt template file.
              Defaults to the bundled template named by ``default``.
        default: File name inside the bundled prompts directory.

    Returns:
        The raw template string with placeholders.

    Raises:
        ExtractionError: if the file cannot be read.
    """
    if path is None:
        path = _DEFAULT_PROMPT_DIR / default
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ExtractionError(f"Failed to load prompt template: {exc}") from exc
