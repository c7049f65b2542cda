from .contact import (
    CONTACT_GROUPS,
    CUSTOM_CONTACT_GROUP,
    DEFAULT_CONTACT_GROUP,
    ImportStats,
    ParsedContact,
    contact_value,
)

__all__ = [
    "CONTACT_GROUPS",
    "CUSTOM_CONTACT_GROUP",
    "DEFAULT_CONTACT_GROUP",
    "ImportStats",
    "ParsedContact",
    "contact_value",
]
