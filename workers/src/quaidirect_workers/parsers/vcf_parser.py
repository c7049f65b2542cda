"""
vCard (VCF) parser for contact files

Handles vCard 2.1/3.0 exports from iPhone, Android and Outlook. Only the
properties needed for a contact record are read: FN, N, TEL, EMAIL, ORG.
Property groups (``item1.TEL``) and parameters (``TEL;TYPE=CELL``) are
accepted and ignored.
"""
import re
from typing import Dict, List, Optional

import structlog

from ..models.contact import DEFAULT_CONTACT_GROUP, ParsedContact
from .format_detector import VCARD_MARKER

logger = structlog.get_logger(__name__)

PROFESSIONAL_CONTACT_GROUP = "professionnels"

# Optional group prefix, property name, optional parameters, value
_PROPERTY_LINE = re.compile(r'^(?:[A-Za-z0-9-]+\.)?([A-Za-z-]+)(?:;[^:]*)?:(.*)$')
_STRUCTURED_NAME = re.compile(r'^([^;]*);([^;]*)')


class VCardParser:
    """Line-oriented vCard parser"""

    def parse(self, content: str) -> List[ParsedContact]:
        """
        Parse vCard content into contacts

        Cards with neither email nor phone are dropped.
        """
        contacts = []
        dropped = 0

        for card in content.split(VCARD_MARKER):
            if not card.strip():
                continue

            contact = self._parse_card(card)

            if contact.has_channel:
                contacts.append(contact)
            else:
                dropped += 1

        logger.info(
            "vCard contacts parsed",
            total=len(contacts),
            valid=sum(1 for c in contacts if c.is_valid),
            dropped=dropped
        )

        return contacts

    def _parse_card(self, card: str) -> ParsedContact:
        properties = self._read_properties(card)

        first_name, last_name = None, None

        full_name = properties.get("FN")
        if full_name:
            names = full_name.split(" ")
            first_name = names[0] or None
            last_name = " ".join(names[1:]) or None

        # Structured name, used when FN gave nothing
        if not first_name and "N" in properties:
            match = _STRUCTURED_NAME.match(properties["N"])
            if match:
                last_name = match.group(1).strip() or None
                first_name = match.group(2).strip() or None

        contact_group = DEFAULT_CONTACT_GROUP
        if "ORG" in properties:
            contact_group = PROFESSIONAL_CONTACT_GROUP

        return ParsedContact.build(
            email=self._last_colon_value(properties.get("EMAIL")),
            phone=self._last_colon_value(properties.get("TEL")),
            first_name=first_name,
            last_name=last_name,
            contact_group=contact_group,
        )

    def _read_properties(self, card: str) -> Dict[str, str]:
        """First non-empty value of each property in the card"""
        properties = {}

        for line in card.splitlines():
            match = _PROPERTY_LINE.match(line.strip())
            if not match:
                continue

            name, value = match.groups()
            name = name.upper()
            value = value.replace("\r", "").strip()

            if value and name not in properties:
                properties[name] = value

        return properties

    @staticmethod
    def _last_colon_value(value: Optional[str]) -> Optional[str]:
        """Unwrap URI values such as "tel:+33612345678" """
        if not value:
            return None
        return value.rsplit(":", 1)[-1].strip() or None


# Global vCard parser instance
vcard_parser = VCardParser()
