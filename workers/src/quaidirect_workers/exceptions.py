"""
Structural import errors

Per-record validation problems are never raised; they are collected on each
ParsedContact. These exceptions cover failures that stop a whole import.
The messages are shown to fishermen as-is, hence French.
"""
from enum import Enum


class ErrorCategory(Enum):
    """Error categories for import failures"""
    FILE_FORMAT_ERROR = "file_format_error"
    FILE_READ_ERROR = "file_read_error"
    FILE_SIZE_ERROR = "file_size_error"


class ContactImportError(Exception):
    """Base class for errors that abort a contact import"""

    category = ErrorCategory.FILE_FORMAT_ERROR
    default_message = "Erreur lors de l'import des contacts"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidJSONFormatError(ContactImportError):
    default_message = "Format JSON invalide"


class ExcelParseError(ContactImportError):
    default_message = "Erreur lors de la lecture du fichier Excel"


class ExcelTextImportError(ContactImportError):
    """An Excel file name was given decoded text instead of the workbook bytes"""
    default_message = "Les fichiers Excel ne peuvent pas être importés comme texte"


class FileReadError(ContactImportError):
    category = ErrorCategory.FILE_READ_ERROR
    default_message = "Erreur lors de la lecture du fichier"


class EmptyFileError(ContactImportError):
    category = ErrorCategory.FILE_READ_ERROR
    default_message = "Le fichier est vide"


class FileTooLargeError(ContactImportError):
    category = ErrorCategory.FILE_SIZE_ERROR

    def __init__(self, max_size_mb: int):
        self.max_size_mb = max_size_mb
        super().__init__(f"Fichier trop volumineux (max {max_size_mb} Mo)")
