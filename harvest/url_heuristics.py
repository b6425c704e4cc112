import re
from typing import Dict, Optional
from urllib.parse import unquote, urlparse

from .normalizer import humanize_slug
from .schema import Store
from .stores import extract_asin, extract_ebay_item_id

# (slug pattern, product id pattern) per store
STORE_URL_PATTERNS = {
    Store.AMAZON: (re.compile(r"/([^/?#]+)/(?:dp|gp/product)/[A-Z0-9]{10}", re.I), None),
    Store.WALMART: (re.compile(r"/ip/([^/?#]+)/\d+", re.I), re.compile(r"/ip/(?:[^/?#]+/)?(\d+)", re.I)),
    Store.TARGET: (re.compile(r"/p/([^/?#]+)/-/A-\d+|/p/([^/?#]+)/A-\d+", re.I), re.compile(r"/A-(\d+)", re.I)),
    Store.HOMEDEPOT: (re.compile(r"/p/([^/?#]+)/\d+", re.I), re.compile(r"/p/(?:[^/?#]+/)?(\d{6,})", re.I)),
    Store.EBAY: (re.compile(r"/itm/([^/?#]*[A-Za-z][^/?#]*)/\d+", re.I), None),
}

IGNORED_SEGMENTS = {"www", "com", "dp", "gp", "product", "products", "p", "ip", "itm", "item", "shop", "s"}


def _slug_name(slug: Optional[str]) -> Optional[str]:
    if not slug:
        return None
    name = humanize_slug(unquote(slug))
    if len(name) <= 3 or not any(c.isalpha() for c in name):
        return None
    return name


def _generic_slug(url: str) -> Optional[str]:
    path = urlparse(url).path
    segments = [s for s in path.split("/") if len(s) > 3 and "." not in s]
    segments = [s for s in segments if s.lower() not in IGNORED_SEGMENTS and not s.isdigit()]
    # last descriptive segment is usually the product slug
    for seg in reversed(segments):
        if re.search(r"[A-Za-z]{3,}", seg):
            return seg
    return None


def extract_from_url(url: str, store: Store) -> Dict[str, Optional[str]]:
    """
    What the URL alone says about the product: a name from the path slug and
    any product id (ASIN, retailer item number). Fields that cannot be
    derived come back as None.
    """
    fields: Dict[str, Optional[str]] = {"name": None, "asin": None, "product_id": None}

    if store == Store.AMAZON:
        fields["asin"] = extract_asin(url)
    elif store == Store.EBAY:
        fields["product_id"] = extract_ebay_item_id(url)

    path = urlparse(url).path
    slug_re, id_re = STORE_URL_PATTERNS.get(store, (None, None))
    if slug_re is not None:
        m = slug_re.search(path)
        if m:
            fields["name"] = _slug_name(next((g for g in m.groups() if g), None))
    if id_re is not None and not fields["product_id"]:
        m = id_re.search(path)
        if m:
            fields["product_id"] = m.group(1)

    if fields["name"] is None and store == Store.UNKNOWN:
        fields["name"] = _slug_name(_generic_slug(url))
    return fields
