"""
CSV parser for contact files

Expected layout, header row first (its content is not checked):

    email,phone,first_name,last_name,contact_group

Supports:
- Comma or semicolon separators, detected from the header line
- One layer of surrounding quotes per field
- Export back to a quoted CSV
"""
import re
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Optional

import structlog

from ..models.contact import DEFAULT_CONTACT_GROUP, ParsedContact, contact_value

logger = structlog.get_logger(__name__)

CSV_COLUMNS = ["email", "phone", "first_name", "last_name", "contact_group"]

_SURROUNDING_QUOTES = re.compile(r'^["\']|["\']$')


@dataclass
class CSVParseResult:
    """Contacts read from a CSV file with their counts"""
    contacts: List[ParsedContact] = field(default_factory=list)
    valid_count: int = 0
    invalid_count: int = 0
    separator: str = ","


def detect_csv_separator(csv_text: str) -> str:
    """Semicolon if it is strictly more frequent than comma on the first line"""
    first_line = csv_text.split("\n")[0]
    return ";" if first_line.count(";") > first_line.count(",") else ","


class CSVContactParser:
    """Positional CSV parser for contact imports"""
    
    def parse(self, csv_text: str, separator: Optional[str] = None) -> CSVParseResult:
        """
        Parse CSV text into contacts
        
        Rows with neither email nor phone are kept and flagged invalid, so
        the caller can show them in the import report.
        
        Args:
            csv_text: Decoded file content
            separator: Column separator; detected from the header line if omitted
            
        Returns:
            CSVParseResult with contacts in file order
        """
        detected_separator = separator or detect_csv_separator(csv_text)
        lines = csv_text.strip().split("\n")
        result = CSVParseResult(separator=detected_separator)
        
        # Skip header line (index 0)
        for line in lines[1:]:
            line = line.strip()
            if not line:
                continue
            
            parts = [
                _SURROUNDING_QUOTES.sub("", part.strip())
                for part in line.split(detected_separator)
            ]
            values = parts[:len(CSV_COLUMNS)]
            values += [None] * (len(CSV_COLUMNS) - len(values))
            
            contact = ParsedContact.build(*values)
            result.contacts.append(contact)
            
            if contact.is_valid:
                result.valid_count += 1
            else:
                result.invalid_count += 1
        
        logger.info(
            "CSV contacts parsed",
            separator=detected_separator,
            total=len(result.contacts),
            valid=result.valid_count,
            invalid=result.invalid_count
        )
        
        return result


def _quote(value: Any) -> str:
    text = "" if value is None else str(value)
    return '"' + text.replace('"', '""') + '"'


def export_contacts_to_csv(contacts: Iterable[Any]) -> str:
    """
    Export contacts to CSV
    
    Accepts ParsedContact objects or mappings such as stored contact rows.
    Every field is double-quoted with internal quotes doubled; the header
    line is left bare.
    """
    rows = [",".join(CSV_COLUMNS)]
    
    for contact in contacts:
        values = [contact_value(contact, column) or "" for column in CSV_COLUMNS[:-1]]
        values.append(contact_value(contact, "contact_group") or DEFAULT_CONTACT_GROUP)
        rows.append(",".join(_quote(value) for value in values))
    
    return "\n".join(rows)


# Global CSV parser instance
csv_contact_parser = CSVContactParser()
