"""
QuaiDirect Workers - contact import processing for the QuaiDirect marketplace

This package provides the import pipeline used by fishermen to load their
customer contacts:
- Multi-format parsing (CSV, vCard, JSON, Excel)
- French email/phone/SIRET/GPS validation
- Duplicate detection against existing contacts
- Background job processing with Celery/Redis
"""

__version__ = "1.0.0"
__author__ = "QuaiDirect Team"

from .models.contact import ImportStats, ParsedContact
from .parsers import FileFormat, detect_file_format
from .validation.import_pipeline import ContactImportPipeline, ImportReport

__all__ = [
    "ContactImportPipeline",
    "FileFormat",
    "ImportReport",
    "ImportStats",
    "ParsedContact",
    "detect_file_format",
]
