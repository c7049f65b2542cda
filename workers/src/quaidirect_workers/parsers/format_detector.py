"""
File format detection for contact imports
"""
from enum import Enum


class FileFormat(str, Enum):
    """Contact file formats understood by the import pipeline"""
    CSV = "csv"
    VCF = "vcf"
    JSON = "json"
    EXCEL = "excel"
    UNKNOWN = "unknown"


EXTENSION_FORMATS = {
    "csv": FileFormat.CSV,
    "vcf": FileFormat.VCF,
    "vcard": FileFormat.VCF,
    "json": FileFormat.JSON,
    "xlsx": FileFormat.EXCEL,
    "xls": FileFormat.EXCEL,
}

VCARD_MARKER = "BEGIN:VCARD"


def detect_file_format(filename: str, content: str = "") -> FileFormat:
    """
    Detect file format based on filename and content
    
    The extension wins when it is known; otherwise the content is sniffed
    for a vCard marker or a JSON opening bracket. Anything else is read as
    CSV, so UNKNOWN is never returned.
    """
    ext = (filename or "").rsplit(".", 1)[-1].lower()
    
    if ext in EXTENSION_FORMATS:
        return EXTENSION_FORMATS[ext]
    
    # Detection by content
    if VCARD_MARKER in content:
        return FileFormat.VCF
    
    trimmed = content.strip()
    if trimmed.startswith("[") or trimmed.startswith("{"):
        return FileFormat.JSON
    
    return FileFormat.CSV
