"""
Parser module initialization

Format detection plus one parser per supported contact file format.
"""

from .format_detector import FileFormat, detect_file_format
from .csv_parser import (
    CSVContactParser,
    CSVParseResult,
    csv_contact_parser,
    detect_csv_separator,
    export_contacts_to_csv,
)
from .vcf_parser import VCardParser, vcard_parser
from .json_parser import JSONContactParser, json_contact_parser
from .excel_parser import ExcelContactParser, excel_contact_parser

# Function-style entry points
parse_csv_contacts = csv_contact_parser.parse
parse_vcf = vcard_parser.parse
parse_json = json_contact_parser.parse
parse_excel = excel_contact_parser.parse

__all__ = [
    'FileFormat',
    'detect_file_format',
    'detect_csv_separator',
    'export_contacts_to_csv',
    'CSVContactParser',
    'CSVParseResult',
    'VCardParser',
    'JSONContactParser',
    'ExcelContactParser',
    'csv_contact_parser',
    'vcard_parser',
    'json_contact_parser',
    'excel_contact_parser',
    'parse_csv_contacts',
    'parse_vcf',
    'parse_json',
    'parse_excel',
]
