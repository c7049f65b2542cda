"""
Validation utilities for French business and contact data

This module provides the field-level checks used across the import pipeline:
- Email format validation
- French phone number validation and formatting
- SIRET validation and formatting
- France (mainland + overseas) GPS bounding checks
- Per-record contact validation with ordered error messages
"""
import math
import re
from dataclasses import dataclass
from typing import List, Optional, Tuple

import phonenumbers
from phonenumbers import NumberParseException
import structlog

logger = structlog.get_logger(__name__)

# Per-record error messages, in check order
ERROR_CONTACT_REQUIRED = "Email ou téléphone requis"
ERROR_INVALID_EMAIL = "Email invalide"
ERROR_INVALID_PHONE = "Téléphone invalide"

EMAIL_REGEX = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')
# 0612345678 or +33612345678
FRENCH_PHONE_REGEX = re.compile(r'^(0[1-9]\d{8}|\+33[1-9]\d{8})$')
SIRET_REGEX = re.compile(r'^\d{14}$')

_PHONE_SEPARATORS = re.compile(r'[\s.-]')
_WHITESPACE = re.compile(r'\s')

# (name, lat_min, lat_max, lng_min, lng_max)
FRANCE_REGIONS: Tuple[Tuple[str, float, float, float, float], ...] = (
    ("mainland", 41.3, 51.1, -5.1, 9.6),  # includes Corsica
    ("caribbean", 14.0, 18.5, -64.0, -59.0),  # Guadeloupe, Martinique, ...
    ("reunion", -21.5, -20.8, 55.2, 55.9),
    ("mayotte", -13.1, -12.6, 45.0, 45.3),
    ("guiana", 2.0, 6.0, -55.0, -51.5),
)


@dataclass
class ValidationResult:
    """Uniform result of a single-field validator"""
    is_valid: bool
    error: Optional[str] = None


def is_valid_siret(siret: str) -> bool:
    """SIRET: exactly 14 digits once spaces are removed"""
    cleaned = _WHITESPACE.sub('', siret)
    return bool(SIRET_REGEX.match(cleaned))


def format_siret(siret: str) -> str:
    """Format as XXX XXX XXX XXXXX"""
    cleaned = _WHITESPACE.sub('', siret)
    return re.sub(r'(\d{3})(\d{3})(\d{3})(\d{5})', r'\1 \2 \3 \4', cleaned, count=1)


def is_valid_french_phone(phone: str) -> bool:
    cleaned = _PHONE_SEPARATORS.sub('', phone)
    return bool(FRENCH_PHONE_REGEX.match(cleaned))


def format_french_phone(phone: str) -> str:
    """Format as XX XX XX XX XX, folding a +33 prefix back to a leading 0"""
    cleaned = _PHONE_SEPARATORS.sub('', phone)
    if cleaned.startswith('+33'):
        cleaned = '0' + cleaned[3:]
    return re.sub(
        r'(\d{2})(\d{2})(\d{2})(\d{2})(\d{2})', r'\1 \2 \3 \4 \5', cleaned, count=1
    )


def is_valid_email(email: str) -> bool:
    return bool(EMAIL_REGEX.match(email.strip()))


def is_valid_france_gps(lat: float, lng: float) -> bool:
    """True if the coordinates fall in mainland France, Corsica or an overseas region"""
    return any(
        lat_min <= lat <= lat_max and lng_min <= lng <= lng_max
        for _, lat_min, lat_max, lng_min, lng_max in FRANCE_REGIONS
    )


def validate_siret(siret: Optional[str]) -> ValidationResult:
    if not siret or siret.strip() == '':
        return ValidationResult(False, 'Le SIRET est requis')
    if not is_valid_siret(siret):
        return ValidationResult(False, 'Le SIRET doit contenir exactement 14 chiffres')
    return ValidationResult(True)


def validate_french_phone(phone: Optional[str]) -> ValidationResult:
    if not phone or phone.strip() == '':
        return ValidationResult(True)  # Phone is optional
    if not is_valid_french_phone(phone):
        return ValidationResult(False, 'Format de téléphone invalide (ex: 06 12 34 56 78)')
    return ValidationResult(True)


def validate_email(email: Optional[str]) -> ValidationResult:
    if not email or email.strip() == '':
        return ValidationResult(True)  # Email is optional
    if not is_valid_email(email):
        return ValidationResult(False, "Format d'email invalide")
    return ValidationResult(True)


def validate_gps_coordinates(lat: Optional[float], lng: Optional[float]) -> ValidationResult:
    if lat is None or lng is None:
        return ValidationResult(True)  # Coordinates are optional
    if math.isnan(lat) or math.isnan(lng):
        return ValidationResult(False, 'Coordonnées GPS invalides')
    if not is_valid_france_gps(lat, lng):
        return ValidationResult(False, 'Les coordonnées doivent être en France')
    return ValidationResult(True)


def collect_contact_errors(email: Optional[str], phone: Optional[str]) -> List[str]:
    """
    Validate the contact channels of one record
    
    Order is fixed: missing both channels, then email, then phone. The
    "required" check only fires when both are absent, so a record carries
    at most two errors.
    """
    errors = []
    
    if not email and not phone:
        errors.append(ERROR_CONTACT_REQUIRED)
    
    if email and not validate_email(email).is_valid:
        errors.append(ERROR_INVALID_EMAIL)
    
    if phone and not validate_french_phone(phone).is_valid:
        errors.append(ERROR_INVALID_PHONE)
    
    return errors


def to_e164(phone: Optional[str], region: str = "FR") -> Optional[str]:
    """Canonical E.164 form of a phone number, or None if it does not parse as valid"""
    if not phone:
        return None
    
    try:
        parsed = phonenumbers.parse(phone, region)
    except NumberParseException as e:
        logger.debug("Phone number not parseable", region=region, error=str(e))
        return None
    
    if not phonenumbers.is_valid_number(parsed):
        return None
    
    return phonenumbers.format_number(parsed, phonenumbers.PhoneNumberFormat.E164)
