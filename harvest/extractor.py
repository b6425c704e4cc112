import json
import logging
import re
from typing import Any, Dict, List, Optional

from bs4 import BeautifulSoup
from soupsieve import SelectorSyntaxError

from .adapters import (
    adapter_amazon,
    adapter_ebay,
    adapter_generic,
    adapter_homedepot,
    adapter_target,
    adapter_walmart,
)
from .adapters.fields import FieldSelectors
from .normalizer import clean_price
from .schema import Store

logger = logging.getLogger(__name__)

ADAPTERS: Dict[Store, FieldSelectors] = {
    Store.AMAZON: adapter_amazon.SELECTORS,
    Store.WALMART: adapter_walmart.SELECTORS,
    Store.TARGET: adapter_target.SELECTORS,
    Store.HOMEDEPOT: adapter_homedepot.SELECTORS,
    Store.EBAY: adapter_ebay.SELECTORS,
    Store.UNKNOWN: adapter_generic.SELECTORS,
}

MIN_NAME_LENGTH = 4
MIN_PRICE = 1.0
MAX_PRICE = 10000.0

TEXT_PRICE_PATTERNS = [
    re.compile(r"Price:\s*\$\s?[\d,]+\.\d{2}", re.I),
    re.compile(r"\$\s?[\d,]+\.\d{2}"),
    re.compile(r"USD\s*[\d,]+\.\d{2}"),
]

TITLE_NOISE = [
    re.compile(r"^\s*Amazon\.(com|ca|co\.uk)\s*:\s*", re.I),
    re.compile(r"\s*[:|-]\s*Amazon\.(com|ca|co\.uk).*$", re.I),
    re.compile(r"\s*[|-]\s*Walmart\.com\s*$", re.I),
    re.compile(r"\s*:\s*Target\s*$", re.I),
    re.compile(r"\s*[|-]\s*The Home Depot\s*$", re.I),
    re.compile(r"\s*\|\s*eBay\s*$", re.I),
]


def _clean_text(text: Optional[str]) -> Optional[str]:
    if text is None:
        return None
    text = re.sub(r"\s+", " ", text).strip()
    return text or None


def _node_text(node) -> Optional[str]:
    for attr in ("content", "value", "data-price"):
        val = node.get(attr)
        if isinstance(val, str) and val.strip():
            return _clean_text(val)
    return _clean_text(node.get_text(" ", strip=True))


def plausible_name(text: Optional[str]) -> bool:
    return bool(text) and len(text) >= MIN_NAME_LENGTH and any(c.isalpha() for c in text)


def plausible_price(text: Optional[str]) -> bool:
    return bool(text) and re.search(r"\d", text) is not None and clean_price(text) is not None


def _select(soup: BeautifulSoup, selector: str) -> List:
    try:
        return soup.select(selector)
    except SelectorSyntaxError:
        logger.warning("Selector failed to parse: %s", selector)
        return []


def first_text(soup: BeautifulSoup, selectors: List[str], check) -> Optional[str]:
    for sel in selectors:
        for node in _select(soup, sel):
            text = _node_text(node)
            if check(text):
                return text
        logger.debug("selector miss: %s", sel)
    return None


def first_attr(soup: BeautifulSoup, rules) -> Optional[str]:
    for sel, attr in rules:
        for node in _select(soup, sel):
            val = node.get(attr)
            if isinstance(val, str) and len(val.strip()) > 1 and not val.startswith("data:"):
                return val.strip()
        logger.debug("selector miss: %s[%s]", sel, attr)
    return None


def _meta(soup: BeautifulSoup, *keys: str) -> Optional[str]:
    for key in keys:
        node = soup.find("meta", attrs={"property": key}) or soup.find("meta", attrs={"name": key})
        if node and node.get("content"):
            val = _clean_text(node["content"])
            if val:
                return val
    return None


def _safe_json_loads(text: str):
    try:
        return json.loads(text)
    except (ValueError, TypeError):
        return None


def _is_product(node: Any) -> bool:
    if not isinstance(node, dict):
        return False
    t = node.get("@type")
    return t == "Product" or (isinstance(t, list) and "Product" in t)


def _pick_product_node(data: Any) -> Optional[Dict[str, Any]]:
    """
    Given parsed JSON-LD data (dict or list), try to find a node
    that looks like a schema.org Product.
    """
    if isinstance(data, dict):
        # Some sites use @graph
        for node in data.get("@graph", []) or []:
            if _is_product(node):
                return node
        if _is_product(data):
            return data
    if isinstance(data, list):
        for node in data:
            if _is_product(node):
                return node
    return None


def extract_ld_json(soup: BeautifulSoup) -> Dict[str, Optional[str]]:
    """Name, description, image and price from the first JSON-LD Product node."""
    result: Dict[str, Optional[str]] = {"name": None, "description": None, "image_url": None, "price_text": None}
    for script in soup.find_all("script", type="application/ld+json"):
        data = _safe_json_loads(script.string or "")
        prod = _pick_product_node(data)
        if not prod:
            continue

        name = prod.get("name")
        if isinstance(name, str):
            result["name"] = _clean_text(name)
        desc = prod.get("description")
        if isinstance(desc, str):
            result["description"] = _clean_text(desc)

        img = prod.get("image")
        if isinstance(img, list) and img:
            img = img[0]
        if isinstance(img, dict):
            img = img.get("url")
        if isinstance(img, str):
            result["image_url"] = img.strip()

        offers = prod.get("offers")
        if isinstance(offers, list) and offers:
            offers = offers[0]
        if isinstance(offers, dict):
            price = offers.get("price") or offers.get("lowPrice")
            if isinstance(price, (str, int, float)):
                result["price_text"] = str(price)
        break
    return result


def extract_title(soup: BeautifulSoup) -> Optional[str]:
    node = soup.find("title")
    if not node:
        return None
    title = _clean_text(node.get_text())
    if not title:
        return None
    for pattern in TITLE_NOISE:
        title = pattern.sub("", title)
    title = title.strip()
    return title if plausible_name(title) else None


def extract_price_from_text(soup: BeautifulSoup) -> Optional[str]:
    body = soup.body or soup
    text = body.get_text(" ", strip=True)
    for pattern in TEXT_PRICE_PATTERNS:
        for match in pattern.finditer(text):
            value = clean_price(match.group(0))
            if value is not None and MIN_PRICE < value < MAX_PRICE:
                return f"${value:.2f}"
    return None


def _amazon_asin(soup: BeautifulSoup) -> Optional[str]:
    node = soup.select_one("input#ASIN, input[name='ASIN']")
    if node and node.get("value"):
        return node["value"].strip().upper()
    node = soup.select_one("[data-asin]")
    if node and re.fullmatch(r"[A-Z0-9]{10}", (node.get("data-asin") or "").upper()):
        return node["data-asin"].upper()
    return None


def extract_fields(html: str, store: Store) -> Dict[str, Optional[str]]:
    """
    Best-effort field extraction from a product page.

    Tiers, per field: the store's selector table, then meta tags, then the
    JSON-LD Product node, then the page <title> (name only) and finally a
    scan of the body text for a plausible price. Missing fields come back
    as None; nothing here raises for absent data.
    """
    soup = BeautifulSoup(html, "lxml")
    table = ADAPTERS.get(store, adapter_generic.SELECTORS)

    name = first_text(soup, table.name, plausible_name)
    price = first_text(soup, table.price, plausible_price)
    original = first_text(soup, table.original_price, plausible_price)
    image = first_attr(soup, table.image)

    ld = None
    if not (name and price and image):
        ld = extract_ld_json(soup)

    if not name:
        name = _meta(soup, "og:title", "twitter:title", "title")
        if name and not plausible_name(name):
            name = None
    if not name and ld and plausible_name(ld["name"]):
        name = ld["name"]
    if not name:
        name = extract_title(soup)

    if not price:
        meta_price = _meta(soup, "product:price:amount", "og:price:amount")
        price = meta_price if plausible_price(meta_price) else None
    if not price and ld and plausible_price(ld["price_text"]):
        price = ld["price_text"]
    if not price:
        price = extract_price_from_text(soup)

    if not image:
        image = _meta(soup, "og:image", "og:image:secure_url", "twitter:image")
    if not image and ld:
        image = ld["image_url"]

    description = _meta(soup, "og:description", "description")
    if not description:
        ld = ld or extract_ld_json(soup)
        description = ld["description"]

    fields = {
        "name": name,
        "price_text": price,
        "original_price_text": original,
        "image_url": image,
        "description": description,
        "asin": _amazon_asin(soup) if store == Store.AMAZON else None,
    }
    logger.debug("extracted %s fields: %s", store.value, {k: v for k, v in fields.items() if v})
    return fields
