"""
Tests for the field validators.
Covers predicates, formatters, ValidationResult wrappers and the ordered
per-record contact rules.
"""

import math

import pytest

from quaidirect_workers.utils.validation import (
    ERROR_CONTACT_REQUIRED,
    ERROR_INVALID_EMAIL,
    ERROR_INVALID_PHONE,
    ValidationResult,
    collect_contact_errors,
    format_french_phone,
    format_siret,
    is_valid_email,
    is_valid_france_gps,
    is_valid_french_phone,
    is_valid_siret,
    to_e164,
    validate_email,
    validate_french_phone,
    validate_gps_coordinates,
    validate_siret,
)


# ─────────────────────────────────────────────────────────────────────────────
# Email
# ─────────────────────────────────────────────────────────────────────────────


class TestEmail:
    @pytest.mark.parametrize("email", [
        "jean@example.com",
        "  jean.dupont@peche.fr  ",
        "a@b.co",
    ])
    def test_valid_emails(self, email):
        assert is_valid_email(email) is True

    @pytest.mark.parametrize("email", [
        "not-an-email",
        "jean@example",
        "jean dupont@example.com",
        "@example.com",
        "",
    ])
    def test_invalid_emails(self, email):
        assert is_valid_email(email) is False

    def test_wrapper_treats_empty_as_valid(self):
        assert validate_email("") == ValidationResult(True)
        assert validate_email(None).is_valid is True
        assert validate_email("   ").is_valid is True

    def test_wrapper_reports_error_message(self):
        result = validate_email("nope")
        assert result.is_valid is False
        assert result.error == "Format d'email invalide"


# ─────────────────────────────────────────────────────────────────────────────
# French phone
# ─────────────────────────────────────────────────────────────────────────────


class TestFrenchPhone:
    @pytest.mark.parametrize("phone", [
        "0612345678",
        "06 12 34 56 78",
        "06.12.34.56.78",
        "06-12-34-56-78",
        "+33612345678",
        "+33 6 12 34 56 78",
        "0123456789",
    ])
    def test_valid_phones(self, phone):
        assert is_valid_french_phone(phone) is True

    @pytest.mark.parametrize("phone", [
        "123",
        "0012345678",  # no zero after the leading 0
        "+33012345678",
        "061234567",
        "06123456789",
        "+44612345678",
        "06 12 34 56 7a",
    ])
    def test_invalid_phones(self, phone):
        assert is_valid_french_phone(phone) is False

    def test_format_groups_pairs(self):
        assert format_french_phone("0612345678") == "06 12 34 56 78"

    def test_format_converts_international_prefix(self):
        assert format_french_phone("+33 6 12 34 56 78") == "06 12 34 56 78"

    def test_format_strips_separators(self):
        assert format_french_phone("06.12-34 56.78") == "06 12 34 56 78"

    def test_wrapper_treats_empty_as_valid(self):
        assert validate_french_phone("").is_valid is True
        assert validate_french_phone(None).is_valid is True

    def test_wrapper_reports_error_message(self):
        result = validate_french_phone("123")
        assert result.is_valid is False
        assert result.error == "Format de téléphone invalide (ex: 06 12 34 56 78)"


# ─────────────────────────────────────────────────────────────────────────────
# SIRET
# ─────────────────────────────────────────────────────────────────────────────


class TestSiret:
    def test_valid_siret(self):
        assert is_valid_siret("12345678901234") is True

    def test_valid_siret_with_spaces(self):
        assert is_valid_siret("123 456 789 01234") is True

    @pytest.mark.parametrize("siret", ["1234567890123", "123456789012345", "1234567890123a"])
    def test_invalid_siret(self, siret):
        assert is_valid_siret(siret) is False

    def test_format_siret(self):
        assert format_siret("12345678901234") == "123 456 789 01234"

    def test_format_leaves_short_values_untouched(self):
        assert format_siret("12 34") == "1234"

    def test_siret_is_required(self):
        assert validate_siret("") == ValidationResult(False, "Le SIRET est requis")
        assert validate_siret("   ").error == "Le SIRET est requis"

    def test_siret_shape_error(self):
        result = validate_siret("123")
        assert result.is_valid is False
        assert result.error == "Le SIRET doit contenir exactement 14 chiffres"

    def test_siret_valid_result(self):
        assert validate_siret("123 456 789 01234").is_valid is True


# ─────────────────────────────────────────────────────────────────────────────
# GPS
# ─────────────────────────────────────────────────────────────────────────────


class TestFranceGPS:
    @pytest.mark.parametrize("lat,lng", [
        (43.2965, 5.3698),    # Marseille
        (48.3904, -4.4861),   # Brest
        (41.9192, 8.7386),    # Ajaccio
        (16.2650, -61.5510),  # Guadeloupe
        (-21.1151, 55.5364),  # Réunion
        (-12.8275, 45.1662),  # Mayotte
        (4.9224, -52.3135),   # Cayenne
    ])
    def test_points_in_france(self, lat, lng):
        assert is_valid_france_gps(lat, lng) is True

    @pytest.mark.parametrize("lat,lng", [
        (51.5074, -0.1278),   # London
        (40.4168, -3.7038),   # Madrid
        (0.0, 0.0),
    ])
    def test_points_outside_france(self, lat, lng):
        assert is_valid_france_gps(lat, lng) is False

    def test_region_bounds_are_inclusive(self):
        assert is_valid_france_gps(41.3, -5.1) is True
        assert is_valid_france_gps(51.1, 9.6) is True

    def test_missing_coordinates_are_valid(self):
        assert validate_gps_coordinates(None, 5.0).is_valid is True
        assert validate_gps_coordinates(43.0, None).is_valid is True

    def test_nan_coordinates(self):
        result = validate_gps_coordinates(math.nan, 5.0)
        assert result == ValidationResult(False, "Coordonnées GPS invalides")

    def test_coordinates_outside_france(self):
        result = validate_gps_coordinates(51.5074, -0.1278)
        assert result.error == "Les coordonnées doivent être en France"


# ─────────────────────────────────────────────────────────────────────────────
# Per-record rules
# ─────────────────────────────────────────────────────────────────────────────


class TestCollectContactErrors:
    def test_valid_contact_has_no_errors(self):
        assert collect_contact_errors("jean@test.fr", "0612345678") == []

    def test_missing_both_channels_only_reports_required(self):
        assert collect_contact_errors(None, None) == [ERROR_CONTACT_REQUIRED]
        assert collect_contact_errors("", "") == [ERROR_CONTACT_REQUIRED]

    def test_email_error_comes_before_phone_error(self):
        assert collect_contact_errors("bad", "123") == [ERROR_INVALID_EMAIL, ERROR_INVALID_PHONE]

    def test_only_email_checked_when_phone_absent(self):
        assert collect_contact_errors("bad", None) == [ERROR_INVALID_EMAIL]

    def test_only_phone_checked_when_email_absent(self):
        assert collect_contact_errors(None, "123") == [ERROR_INVALID_PHONE]


class TestToE164:
    def test_national_and_international_forms_agree(self):
        assert to_e164("06 12 34 56 78") == "+33612345678"
        assert to_e164("+33612345678") == "+33612345678"

    def test_unparseable_number(self):
        assert to_e164("abc") is None

    def test_empty_number(self):
        assert to_e164(None) is None
        assert to_e164("") is None
