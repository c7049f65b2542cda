"""
Contact records produced by the import parsers
"""
from collections.abc import Mapping
from dataclasses import dataclass, field, asdict, replace
from typing import Any, Dict, List, Optional

from ..utils.validation import collect_contact_errors

DEFAULT_CONTACT_GROUP = "general"
CUSTOM_CONTACT_GROUP = "custom"

# Predefined contact groups offered when importing a batch
CONTACT_GROUPS: Dict[str, str] = {
    "general": "Général",
    "reguliers": "Clients réguliers",
    "occasionnels": "Clients occasionnels",
    "professionnels": "Professionnels (restos, poissonniers)",
    "vip": "VIP",
    CUSTOM_CONTACT_GROUP: "Autre (personnalisé)",
}


@dataclass
class ParsedContact:
    """A prospective contact with its validation outcome"""
    email: Optional[str] = None
    phone: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    contact_group: str = DEFAULT_CONTACT_GROUP
    is_valid: bool = False
    errors: List[str] = field(default_factory=list)
    is_duplicate: Optional[bool] = None  # set by the dedup stage
    
    @classmethod
    def build(
        cls,
        email: Optional[str] = None,
        phone: Optional[str] = None,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
        contact_group: Optional[str] = None,
    ) -> "ParsedContact":
        """Create a validated contact; empty strings become None"""
        email = email or None
        phone = phone or None
        errors = collect_contact_errors(email, phone)
        
        return cls(
            email=email,
            phone=phone,
            first_name=first_name or None,
            last_name=last_name or None,
            contact_group=contact_group or DEFAULT_CONTACT_GROUP,
            is_valid=len(errors) == 0,
            errors=errors,
        )
    
    @property
    def has_channel(self) -> bool:
        """True if the contact can be reached by email or phone"""
        return bool(self.email or self.phone)
    
    @property
    def is_importable(self) -> bool:
        return self.is_valid and not self.is_duplicate
    
    def with_duplicate_flag(self, duplicate: bool) -> "ParsedContact":
        return replace(self, errors=list(self.errors), is_duplicate=duplicate)
    
    def with_group(self, contact_group: str) -> "ParsedContact":
        return replace(self, errors=list(self.errors), contact_group=contact_group)
    
    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class ImportStats:
    """Aggregate counts over an import batch"""
    total: int = 0
    valid: int = 0
    invalid: int = 0
    duplicates: int = 0
    importable: int = 0
    
    def to_dict(self) -> Dict[str, int]:
        return asdict(self)


def contact_value(record: Any, key: str) -> Any:
    """Read a field from a mapping (database row, JSON payload) or an object"""
    if isinstance(record, Mapping):
        return record.get(key)
    return getattr(record, key, None)
