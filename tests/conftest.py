"""
Root conftest.py: shared fixtures and helpers for the entire test suite.

Provides:
- ParsedContact / stored-contact factory helpers
- In-memory workbook builder for Excel tests
- Sample file contents for each supported format
"""

import io
from typing import Any, List, Optional, Sequence

import pytest
from openpyxl import Workbook

from quaidirect_workers.models.contact import ParsedContact


# ─────────────────────────────────────────────────────────────────────────────
# Domain object factories
# ─────────────────────────────────────────────────────────────────────────────


def make_contact(
    email: Optional[str] = "jean@example.com",
    phone: Optional[str] = "0612345678",
    first_name: Optional[str] = "Jean",
    last_name: Optional[str] = "Dupont",
    contact_group: str = "general",
    is_valid: bool = True,
    errors: Optional[List[str]] = None,
    is_duplicate: Optional[bool] = None,
) -> ParsedContact:
    """Create a ParsedContact with sensible test defaults (no validation run)."""
    return ParsedContact(
        email=email,
        phone=phone,
        first_name=first_name,
        last_name=last_name,
        contact_group=contact_group,
        is_valid=is_valid,
        errors=list(errors or []),
        is_duplicate=is_duplicate,
    )


def make_stored_contact(
    email: Optional[str] = "existing@example.com",
    phone: Optional[str] = "0612345678",
    contact_id: str = "1",
) -> dict:
    """A stored contact row as returned by the database."""
    return {
        "id": contact_id,
        "email": email,
        "phone": phone,
        "first_name": "Existing",
        "last_name": "User",
        "contact_group": "general",
        "fisherman_id": "1",
        "created_at": "2024-01-01",
    }


def make_workbook_bytes(rows: Sequence[Sequence[Any]], sheet_title: str = "Contacts") -> bytes:
    """Build an .xlsx file in memory; rows include the header."""
    workbook = Workbook()
    sheet = workbook.active
    sheet.title = sheet_title
    for row in rows:
        sheet.append(list(row))
    buffer = io.BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


# ─────────────────────────────────────────────────────────────────────────────
# Sample file contents
# ─────────────────────────────────────────────────────────────────────────────


CSV_HEADER = "email,phone,first_name,last_name,contact_group"


@pytest.fixture
def sample_csv() -> str:
    return (
        f"{CSV_HEADER}\n"
        "jean@test.fr,0612345678,Jean,Dupont,reguliers\n"
        "marie@test.fr,,Marie,Curie,\n"
        "not-an-email,123,Bad,Row,general\n"
    )


@pytest.fixture
def sample_vcf() -> str:
    return (
        "BEGIN:VCARD\n"
        "VERSION:3.0\n"
        "FN:Jean Dupont\n"
        "TEL;TYPE=CELL:06 12 34 56 78\n"
        "EMAIL;TYPE=INTERNET:jean@example.com\n"
        "END:VCARD\n"
        "BEGIN:VCARD\n"
        "VERSION:3.0\n"
        "N:Martin;Marie\n"
        "TEL:0687654321\n"
        "ORG:Restaurant du Port\n"
        "END:VCARD\n"
    )


@pytest.fixture
def sample_workbook() -> bytes:
    return make_workbook_bytes([
        ["email", "phone", "first_name", "last_name", "contact_group"],
        ["jean@example.com", "0612345678", "Jean", "Dupont", "vip"],
        [None, None, "Sans", "Contact", None],
        ["bad-email", None, "Paul", None, None],
    ])
