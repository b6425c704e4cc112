import logging
from pathlib import Path
from typing import Dict, Optional, Union

import orjson

from .schema import Category
from .stores import extract_asin, short_link_id

logger = logging.getLogger(__name__)

_TREE = {
    "name": "Garvee Pre-lit Artificial Christmas Tree with Warm White Lights, "
            "Green Full Christmas Tree 4.5 ft with 8 Light-Modes",
    "price": "$71.99",
    "original_price": "$89.99",
    "category": "garden",
    "asin": "B0BQST5XMT",
    "description": "Pre-lit artificial Christmas tree with warm white LED lights and multiple lighting modes",
}
_ECHO_DOT = {
    "name": "Amazon Echo Dot (5th Gen) Smart Speaker with Alexa - Charcoal",
    "price": "$29.99",
    "original_price": "$49.99",
    "category": "electronics",
    "description": "Smart speaker with Alexa voice control and improved sound quality",
}
_FIRE_HD = {
    "name": "Fire HD 8 Tablet - Black, 32GB",
    "price": "$59.99",
    "original_price": "$89.99",
    "category": "electronics",
    "asin": "B0CVDN4QS6",
    "description": "Amazon Fire HD 8 tablet with vibrant 8\" HD display, 32GB storage, and all-day battery life",
}

# Keys are amzn.to link ids or ASINs.
DEFAULT_ENTRIES: Dict[str, dict] = {
    "3WFDHTc": _TREE,
    "43KgV08": _ECHO_DOT,
    "B0BQST5XMT": _TREE,
    "B0CVDN4QS6": _FIRE_HD,
}


CATEGORIES = {c.value for c in Category}


def check_entry(key: str, entry) -> None:
    if not isinstance(entry, dict) or not entry.get("name"):
        raise ValueError(f"known product {key}: expected an object with a name")
    category = entry.get("category")
    if category and category not in CATEGORIES:
        raise ValueError(f"known product {key}: unknown category '{category}'")


class KnownProductCatalog:
    """Manually verified products, matched by short-link id first, then ASIN."""

    def __init__(self, entries: Optional[Dict[str, dict]] = None):
        self.entries: Dict[str, dict] = dict(entries or {})
        for key, entry in self.entries.items():
            check_entry(key, entry)

    @classmethod
    def default(cls) -> "KnownProductCatalog":
        return cls(DEFAULT_ENTRIES)

    @classmethod
    def from_file(cls, path: Union[str, Path], include_defaults: bool = True) -> "KnownProductCatalog":
        entries = dict(DEFAULT_ENTRIES) if include_defaults else {}
        data = orjson.loads(Path(path).read_bytes())
        if not isinstance(data, dict):
            raise ValueError(f"{path}: expected an object keyed by link id or ASIN")
        for key, entry in data.items():
            try:
                check_entry(key, entry)
            except ValueError as exc:
                raise ValueError(f"{path}: {exc}") from None
        entries.update(data)
        logger.info("Loaded %d known products from %s", len(data), path)
        return cls(entries)

    def lookup(self, url: str) -> Optional[dict]:
        for key in (short_link_id(url), extract_asin(url)):
            if key and key in self.entries:
                return self.entries[key]
        return None

    def __len__(self):
        return len(self.entries)
