import re
from typing import Optional

from .schema import Store

# Order matters: first match wins.
STORE_PATTERNS = [
    (Store.AMAZON, re.compile(r"amzn\.to|amazon\.(com|ca|co\.uk)", re.I)),
    (Store.WALMART, re.compile(r"walmart\.com", re.I)),
    (Store.TARGET, re.compile(r"target\.com", re.I)),
    (Store.HOMEDEPOT, re.compile(r"homedepot\.com", re.I)),
    (Store.EBAY, re.compile(r"ebay\.(com|ca|co\.uk|de|us)", re.I)),
]

DISPLAY_NAMES = {
    Store.AMAZON: "Amazon",
    Store.WALMART: "Walmart",
    Store.TARGET: "Target",
    Store.HOMEDEPOT: "Home Depot",
    Store.EBAY: "eBay",
    Store.UNKNOWN: "Online Store",
}

ASIN_PATTERNS = [
    re.compile(r"/dp/([A-Z0-9]{10})(?:[/?#]|$)", re.I),
    re.compile(r"/gp/product/([A-Z0-9]{10})(?:[/?#]|$)", re.I),
    re.compile(r"[?&]asin=([A-Z0-9]{10})(?:[&#]|$)", re.I),
]
SHORT_LINK = re.compile(r"amzn\.to/([A-Za-z0-9]+)")
EBAY_ITEM = re.compile(r"/itm/(?:[^/?#]+/)?(\d{9,15})(?:[/?#]|$)")


def detect_store(url: str) -> Store:
    if not url:
        return Store.UNKNOWN
    for store, pattern in STORE_PATTERNS:
        if pattern.search(url):
            return store
    return Store.UNKNOWN


def store_display_name(store: Store) -> str:
    return DISPLAY_NAMES.get(store, DISPLAY_NAMES[Store.UNKNOWN])


def extract_asin(url: str) -> Optional[str]:
    for pattern in ASIN_PATTERNS:
        m = pattern.search(url or "")
        if m:
            return m.group(1).upper()
    return None


def short_link_id(url: str) -> Optional[str]:
    m = SHORT_LINK.search(url or "")
    return m.group(1) if m else None


def is_short_link(url: str) -> bool:
    return short_link_id(url) is not None


def extract_ebay_item_id(url: str) -> Optional[str]:
    m = EBAY_ITEM.search(url or "")
    return m.group(1) if m else None
