"""
Contact import pipeline

Format detection, parsing, duplicate detection and statistics for one
uploaded contact file.
"""

from .import_pipeline import (
    ContactImportPipeline,
    ImportReport,
    contact_import_pipeline,
    decode_content,
)

__all__ = [
    'ContactImportPipeline',
    'ImportReport',
    'contact_import_pipeline',
    'decode_content',
]
