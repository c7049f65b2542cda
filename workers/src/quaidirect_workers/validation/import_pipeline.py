"""
Contact Import Pipeline

Orchestrates one import from raw upload to an annotated report:
- File checks (empty, size limit)
- Format detection by extension, then by content
- Encoding detection for text formats
- Format-specific parsing
- Duplicate detection against existing contacts and batch statistics

Nothing is persisted here; the caller decides what to store.
"""
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

import chardet
import structlog

from ..config import settings
from ..exceptions import EmptyFileError, ExcelTextImportError, FileTooLargeError
from ..models.contact import ImportStats, ParsedContact
from ..parsers import (
    FileFormat,
    csv_contact_parser,
    detect_file_format,
    excel_contact_parser,
    json_contact_parser,
    vcard_parser,
)
from ..utils.deduplication import get_import_stats, validate_contacts_batch
from ..utils.files import FileSource, read_file_bytes

logger = structlog.get_logger(__name__)


@dataclass
class ImportReport:
    """Result of one contact import"""
    filename: str
    format: FileFormat
    contacts: List[ParsedContact] = field(default_factory=list)
    stats: ImportStats = field(default_factory=ImportStats)
    separator: Optional[str] = None  # CSV only
    processing_time_ms: int = 0
    
    def to_dict(self) -> Dict[str, Any]:
        return {
            "filename": self.filename,
            "format": self.format.value,
            "separator": self.separator,
            "stats": self.stats.to_dict(),
            "contacts": [contact.to_dict() for contact in self.contacts],
            "processing_time_ms": self.processing_time_ms,
        }


def decode_content(data: bytes) -> str:
    """Decode uploaded text, trying UTF-8 first, then chardet's guess, then latin-1"""
    try:
        return data.decode("utf-8-sig")  # Handle BOM
    except UnicodeDecodeError:
        pass
    
    # Sample first 50KB for encoding detection
    detected = chardet.detect(data[:50000])
    encoding = detected.get("encoding")
    
    if encoding:
        try:
            return data.decode(encoding)
        except (UnicodeDecodeError, LookupError):
            logger.warning("Detected encoding failed", encoding=encoding)
    
    return data.decode("latin-1")


class ContactImportPipeline:
    """
    Main coordinator for contact imports
    
    Mirrors the importer screen: Excel files are routed on their extension
    alone, everything else is decoded and routed on extension plus content.
    """
    
    def __init__(
        self,
        max_file_size_mb: Optional[int] = None,
        canonical_phones: Optional[bool] = None,
        phone_region: Optional[str] = None
    ):
        self.max_file_size_mb = max_file_size_mb or settings.max_file_size_mb
        self.max_file_size_bytes = self.max_file_size_mb * 1024 * 1024
        self.canonical_phones = (
            settings.canonical_phone_dedup if canonical_phones is None else canonical_phones
        )
        self.phone_region = phone_region or settings.default_phone_region
    
    def import_text(
        self,
        filename: str,
        content: str,
        existing_contacts: Optional[Sequence[Any]] = None
    ) -> ImportReport:
        """
        Import already-decoded text (CSV, vCard or JSON)
        
        Raises:
            ExcelTextImportError: if the file name is an Excel workbook;
                workbooks go through import_file
        """
        start_time = time.time()
        file_format = detect_file_format(filename, content)
        
        if file_format == FileFormat.EXCEL:
            logger.warning("Excel file passed as text", filename=filename)
            raise ExcelTextImportError()
        
        logger.info("Starting contact import", filename=filename, format=file_format.value)
        
        separator = None
        if file_format == FileFormat.VCF:
            contacts = vcard_parser.parse(content)
        elif file_format == FileFormat.JSON:
            contacts = json_contact_parser.parse(content)
        else:
            csv_result = csv_contact_parser.parse(content)
            contacts = csv_result.contacts
            separator = csv_result.separator
            file_format = FileFormat.CSV
        
        return self._finish(filename, file_format, contacts, existing_contacts, start_time, separator)
    
    async def import_file(
        self,
        filename: str,
        source: FileSource,
        existing_contacts: Optional[Sequence[Any]] = None
    ) -> ImportReport:
        """
        Import an uploaded file
        
        Args:
            filename: Original file name, used for format detection
            source: Path, raw bytes or binary file object
            existing_contacts: Stored contacts to check duplicates against
            
        Raises:
            ContactImportError: on structural failures (unreadable, malformed,
                empty or oversized files)
        """
        data = await read_file_bytes(source)
        self._check_size(filename, data)
        
        if detect_file_format(filename, "") == FileFormat.EXCEL:
            start_time = time.time()
            logger.info("Starting contact import", filename=filename, format=FileFormat.EXCEL.value)
            contacts = await excel_contact_parser.parse(data)
            return self._finish(filename, FileFormat.EXCEL, contacts, existing_contacts, start_time)
        
        return self.import_text(filename, decode_content(data), existing_contacts)
    
    def _check_size(self, filename: str, data: bytes) -> None:
        if not data:
            logger.warning("Empty contact file rejected", filename=filename)
            raise EmptyFileError()
        
        if len(data) > self.max_file_size_bytes:
            logger.warning(
                "Contact file too large",
                filename=filename,
                size_bytes=len(data),
                max_file_size_mb=self.max_file_size_mb
            )
            raise FileTooLargeError(self.max_file_size_mb)
    
    def _finish(
        self,
        filename: str,
        file_format: FileFormat,
        contacts: List[ParsedContact],
        existing_contacts: Optional[Sequence[Any]],
        start_time: float,
        separator: Optional[str] = None
    ) -> ImportReport:
        validated = validate_contacts_batch(
            contacts,
            existing_contacts,
            canonical_phones=self.canonical_phones,
            region=self.phone_region
        )
        stats = get_import_stats(validated)
        processing_time_ms = int((time.time() - start_time) * 1000)
        
        logger.info(
            "Contact import completed",
            filename=filename,
            format=file_format.value,
            processing_time_ms=processing_time_ms,
            **stats.to_dict()
        )
        
        return ImportReport(
            filename=filename,
            format=file_format,
            contacts=validated,
            stats=stats,
            separator=separator,
            processing_time_ms=processing_time_ms,
        )


# Global pipeline instance
contact_import_pipeline = ContactImportPipeline()
