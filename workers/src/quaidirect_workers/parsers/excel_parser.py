"""
Excel parser for contact files (.xlsx, .xls)

The first worksheet is read positionally with the same column order as CSV
(email, phone, first_name, last_name, contact_group); row 0 is the header.
pandas picks openpyxl for XLSX and xlrd for legacy XLS.
"""
import asyncio
import io
from typing import Any, List, Sequence

import pandas as pd
import structlog

from ..exceptions import ExcelParseError
from ..models.contact import ParsedContact
from ..utils.files import FileSource, read_file_bytes

logger = structlog.get_logger(__name__)


def _cell_to_text(value: Any) -> str:
    """Render a cell the way it reads in the sheet"""
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return ""
    # Phone numbers typed as numbers come back as floats
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


class ExcelContactParser:
    """Positional Excel parser for contact imports"""
    
    async def parse(self, source: FileSource) -> List[ParsedContact]:
        """
        Read a workbook and parse its first sheet into contacts
        
        Rows with neither email nor phone are dropped.
        
        Args:
            source: Path, raw bytes or binary file object
            
        Raises:
            FileReadError: if the file cannot be read
            ExcelParseError: if the content is not a readable workbook
        """
        data = await read_file_bytes(source)
        
        try:
            rows = await asyncio.to_thread(self._read_first_sheet, data)
        except Exception as e:
            logger.warning("Excel workbook could not be decoded", error=str(e))
            raise ExcelParseError() from e
        
        contacts = self.parse_rows(rows)
        
        logger.info(
            "Excel contacts parsed",
            rows=len(rows),
            total=len(contacts),
            valid=sum(1 for c in contacts if c.is_valid)
        )
        
        return contacts
    
    def parse_rows(self, rows: Sequence[Sequence[Any]]) -> List[ParsedContact]:
        """Turn decoded sheet rows (header included) into contacts"""
        contacts = []
        
        # Skip header row (index 0)
        for row in rows[1:]:
            if not row:
                continue
            
            cells = [_cell_to_text(cell) for cell in list(row)[:5]]
            cells += [""] * (5 - len(cells))
            
            contact = ParsedContact.build(*cells)
            if contact.has_channel:
                contacts.append(contact)
        
        return contacts
    
    @staticmethod
    def _read_first_sheet(data: bytes) -> List[List[Any]]:
        # Text such as "NA" or "null" is a value, not a missing cell
        frame = pd.read_excel(
            io.BytesIO(data),
            sheet_name=0,
            header=None,
            dtype=object,
            keep_default_na=False,
            na_filter=False,
        )
        return frame.values.tolist()


# Global Excel parser instance
excel_contact_parser = ExcelContactParser()
