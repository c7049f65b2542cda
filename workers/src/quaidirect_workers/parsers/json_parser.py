"""
JSON parser for contact files

Accepts a single object or an array of objects. Field names are matched
case-sensitively against a fixed list of aliases, first non-empty wins.
"""
import json
from collections.abc import Mapping
from typing import Any, Dict, List, Optional, Tuple

import structlog

from ..exceptions import InvalidJSONFormatError
from ..models.contact import ParsedContact

logger = structlog.get_logger(__name__)

FIELD_ALIASES: Dict[str, Tuple[str, ...]] = {
    "email": ("email", "Email", "mail"),
    "phone": ("phone", "Phone", "tel", "telephone"),
    "first_name": ("first_name", "firstName", "prenom", "Prénom"),
    "last_name": ("last_name", "lastName", "nom", "Nom"),
    "contact_group": ("contact_group", "group", "groupe"),
}


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Invalid JSON constant: {name}")


class JSONContactParser:
    """Alias-driven JSON contact parser"""
    
    def parse(self, content: str) -> List[ParsedContact]:
        """
        Parse JSON content into contacts
        
        Every object yields a contact, including objects without email or
        phone, which come out flagged invalid.
        
        Raises:
            InvalidJSONFormatError: if the content is not valid JSON
        """
        try:
            data = json.loads(content, parse_constant=_reject_constant)
        except (TypeError, ValueError) as e:
            logger.warning("JSON contact file rejected", error=str(e))
            raise InvalidJSONFormatError() from e
        
        items = data if isinstance(data, list) else [data]
        contacts = [self._parse_item(item) for item in items]
        
        logger.info(
            "JSON contacts parsed",
            total=len(contacts),
            valid=sum(1 for c in contacts if c.is_valid)
        )
        
        return contacts
    
    def _parse_item(self, item: Any) -> ParsedContact:
        if not isinstance(item, Mapping):
            item = {}
        
        values = {
            target: self._resolve(item, aliases)
            for target, aliases in FIELD_ALIASES.items()
        }
        return ParsedContact.build(**values)
    
    @staticmethod
    def _resolve(item: Mapping, aliases: Tuple[str, ...]) -> Optional[str]:
        for alias in aliases:
            value = item.get(alias)
            if value:
                return value if isinstance(value, str) else str(value)
        return None


# Global JSON parser instance
json_contact_parser = JSONContactParser()
