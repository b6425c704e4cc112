import math
import re
from typing import Optional
from urllib.parse import quote_plus, urlencode, urljoin, urlparse

import tldextract
from slugify import slugify

from .schema import Store
from .stores import store_display_name

# Bundled public-suffix snapshot only; never hit the network for ids.
_tld = tldextract.TLDExtract(suffix_list_urls=())

_NUMBER = re.compile(r"\d[\d,]*(?:\.\d+)?|\.\d+")
AMAZON_IMAGE = "https://images-na.ssl-images-amazon.com/images/P/{asin}.01.L.jpg"
PLACEHOLDER_IMAGE = "https://via.placeholder.com/400x300/f8f9fa/718096?text={label}"


def clean_price(text) -> Optional[float]:
    """
    Parse a raw price string ("$1,299.99", "USD 24.50", "19.99") into a
    2-decimal float. Returns None when nothing numeric is found or the value
    is not positive.
    """
    if text is None:
        return None
    if isinstance(text, (int, float)):
        value = float(text)
    else:
        m = _NUMBER.search(str(text).replace("\xa0", " "))
        if not m:
            return None
        try:
            value = float(m.group(0).replace(",", ""))
        except ValueError:
            return None
    if math.isnan(value) or math.isinf(value) or value <= 0:
        return None
    return round(value, 2)


def format_price(value: Optional[float]) -> str:
    if value is None:
        return "n/a"
    return f"${value:,.2f}"


def compute_discount(price: Optional[float], original_price: Optional[float]) -> Optional[int]:
    if price is None or original_price is None:
        return None
    if price <= 0 or original_price <= price:
        return None
    pct = int(round(100 * (original_price - price) / original_price))
    return max(0, min(100, pct))


def resolve_image_url(src: Optional[str], base_url: str) -> Optional[str]:
    if not src:
        return None
    src = src.strip()
    if not src or src.startswith("data:"):
        return None
    try:
        resolved = urljoin(base_url, src)
    except ValueError:
        return None
    parts = urlparse(resolved)
    if parts.scheme not in ("http", "https") or not parts.netloc:
        return None
    return resolved


def humanize_slug(slug: str) -> str:
    words = re.sub(r"[-_+]+", " ", slug or "")
    words = re.sub(r"\s+", " ", words).strip()
    return " ".join(w[:1].upper() + w[1:] for w in words.split(" ") if w)


def registered_domain(url: str) -> str:
    ext = _tld(url)
    return ".".join(p for p in (ext.domain, ext.suffix) if p) or urlparse(url).netloc


def make_id(url: str, name: str = None):
    dom = registered_domain(url)
    base = slugify((name or url)[0:80])
    return f"{dom}-{base}" if base else dom


def placeholder_image(store: Store, asin: Optional[str] = None) -> str:
    if asin:
        return AMAZON_IMAGE.format(asin=asin)
    return PLACEHOLDER_IMAGE.format(label=quote_plus(f"{store_display_name(store)} Product"))


def affiliate_link(url: str, store: Store, settings=None) -> str:
    """Attach eBay Partner Network parameters when a campaign id is configured."""
    if store != Store.EBAY or settings is None or not settings.ebay_campaign_id:
        return url
    params = urlencode({
        "campid": settings.ebay_campaign_id,
        "customid": settings.ebay_affiliate_id or "",
        "toolid": "10001",
        "mkevt": "1",
        "mkcid": "1",
    })
    return f"{url}&{params}" if "?" in url else f"{url}?{params}"
