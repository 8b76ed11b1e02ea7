from docintake.extraction.base import BaseExtractor
from docintake.extraction.extractor import Extractor
from docintake.extraction.factory import ExtractorFactory
from docintake.extraction.models import ExtractionResult

__all__ = ["BaseExtractor", "ExtractionResult", "Extractor", "ExtractorFactory"]
