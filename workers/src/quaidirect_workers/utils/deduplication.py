"""
Duplicate detection against a fisherman's existing contacts

A parsed contact is a duplicate when it shares an email (case-insensitive)
or a phone number with any existing contact. Phones are compared after
removing spaces, dots and hyphens only, so "+33612345678" and
"0612345678" are different numbers unless canonical comparison is enabled.
"""
import re
from typing import Any, Iterable, List, Optional, Sequence

import structlog

from ..models.contact import (
    CUSTOM_CONTACT_GROUP,
    DEFAULT_CONTACT_GROUP,
    ImportStats,
    ParsedContact,
    contact_value,
)
from .validation import to_e164

logger = structlog.get_logger(__name__)

_PHONE_SEPARATORS = re.compile(r'[\s.-]')


def normalize_phone(phone: str) -> str:
    """Normalize phone number by removing spaces, dashes and dots"""
    return _PHONE_SEPARATORS.sub('', phone)


def _phone_key(phone: str, canonical_phones: bool, region: str) -> str:
    if canonical_phones:
        e164 = to_e164(phone, region)
        if e164:
            return e164
    return normalize_phone(phone)


def is_duplicate(
    contact: Any,
    existing_contacts: Optional[Iterable[Any]],
    canonical_phones: bool = False,
    region: str = "FR"
) -> bool:
    """
    Check if a contact is a duplicate of existing contacts
    
    Args:
        contact: ParsedContact or mapping with email/phone
        existing_contacts: Stored contacts (mappings or objects)
        canonical_phones: Compare phones in E.164 form when they parse
        region: Default region for canonical phone parsing
    """
    if not existing_contacts:
        return False
    
    email = contact_value(contact, "email")
    phone = contact_value(contact, "phone")
    email_key = email.lower() if email else None
    phone_key = _phone_key(phone, canonical_phones, region) if phone else None
    
    for existing in existing_contacts:
        existing_email = contact_value(existing, "email")
        if email_key and existing_email and email_key == existing_email.lower():
            return True
        
        existing_phone = contact_value(existing, "phone")
        if phone_key and existing_phone:
            if phone_key == _phone_key(existing_phone, canonical_phones, region):
                return True
    
    return False


def validate_contacts_batch(
    contacts: Sequence[ParsedContact],
    existing_contacts: Optional[Sequence[Any]],
    canonical_phones: bool = False,
    region: str = "FR"
) -> List[ParsedContact]:
    """
    Mark duplicates in a batch of parsed contacts
    
    Returns new records with is_duplicate set; validity and errors are
    carried over unchanged.
    """
    existing_contacts = list(existing_contacts or [])
    
    validated = [
        contact.with_duplicate_flag(
            is_duplicate(contact, existing_contacts, canonical_phones, region)
        )
        for contact in contacts
    ]
    
    logger.info(
        "Duplicate detection completed",
        total=len(validated),
        existing=len(existing_contacts),
        duplicates=sum(1 for c in validated if c.is_duplicate),
        canonical_phones=canonical_phones
    )
    
    return validated


def get_import_stats(contacts: Sequence[ParsedContact]) -> ImportStats:
    """Get import statistics for a batch of contacts"""
    total = len(contacts)
    valid = sum(1 for c in contacts if c.is_valid)
    
    return ImportStats(
        total=total,
        valid=valid,
        invalid=total - valid,
        duplicates=sum(1 for c in contacts if c.is_duplicate),
        importable=sum(1 for c in contacts if c.is_valid and not c.is_duplicate),
    )


def resolve_import_group(
    group: Optional[str],
    custom_group_name: Optional[str] = None
) -> Optional[str]:
    """
    Group name to apply to an imported batch
    
    "custom" takes the trimmed custom name, falling back to the default
    group when it is blank. None means each contact keeps its own group.
    """
    if group == CUSTOM_CONTACT_GROUP:
        return (custom_group_name or "").strip() or DEFAULT_CONTACT_GROUP
    return group


def select_importable(
    contacts: Sequence[ParsedContact],
    group: Optional[str] = None,
    custom_group_name: Optional[str] = None
) -> List[ParsedContact]:
    """Valid, non-duplicate contacts, re-tagged with the batch group if one is chosen"""
    group_name = resolve_import_group(group, custom_group_name)
    
    selected = [c for c in contacts if c.is_importable]
    if group_name:
        selected = [c.with_group(group_name) for c in selected]
    
    return selected
