"""
Product extraction pipeline: URL in, FinishedProduct out.

    detect store -> known catalogue -> (eBay API) -> fetch -> extract
        -> normalize -> classify -> done

Fetch failures and sparse pages divert to the degraded path, which works
from the URL text alone. Only a URL that yields no usable name at all ends
in ExtractionFailed.
"""
import logging
from typing import Optional, Union
from urllib.parse import urlparse

from .categories import classify, map_ebay_category
from .config import Settings
from .ebay import EbayBrowseClient
from .errors import ExtractionFailed, ExtractionIncomplete, FetchExhausted
from .extractor import extract_fields
from .fetcher import ContentFetcher, default_sources
from .known_products import KnownProductCatalog
from .normalizer import (
    affiliate_link,
    clean_price,
    compute_discount,
    format_price,
    make_id,
    placeholder_image,
    resolve_image_url,
)
from .schema import (
    PLACEHOLDER_PRICE,
    Category,
    FinishedProduct,
    PipelineState,
    ProductCandidate,
    QualityTag,
    Store,
)
from .stores import detect_store, extract_asin, store_display_name
from .tokens import EbayTokenRefresher, TokenCache
from .url_heuristics import extract_from_url

logger = logging.getLogger(__name__)


def validate_url(url: str) -> str:
    url = (url or "").strip()
    if not url:
        raise ExtractionFailed("Please provide a product URL.", url=url)
    parts = urlparse(url)
    if parts.scheme not in ("http", "https") or not parts.netloc:
        raise ExtractionFailed("Invalid URL format.", url=url)
    return url


def parse_category(category: Optional[Union[Category, str]], url: str) -> Optional[Category]:
    if not category:
        return None
    try:
        return Category(category)
    except ValueError:
        raise ExtractionFailed(f"Unknown category '{category}'.", url=url) from None


def check_page_fields(candidate: ProductCandidate) -> None:
    missing = [f for f in ("name", "price_text") if getattr(candidate, f) is None]
    if missing:
        raise ExtractionIncomplete(missing)


class ProductPipeline:
    def __init__(self, fetcher: ContentFetcher, catalog: Optional[KnownProductCatalog] = None,
                 ebay: Optional[EbayBrowseClient] = None, settings: Optional[Settings] = None):
        self.fetcher = fetcher
        self.catalog = catalog
        self.ebay = ebay
        self.settings = settings

    async def extract(self, url: str, category: Optional[Union[Category, str]] = None) -> FinishedProduct:
        url = validate_url(url)
        candidate = ProductCandidate(source_url=url)
        override = parse_category(category, url)

        candidate.advance(PipelineState.DETECTING)
        candidate.store = detect_store(url)
        logger.info("Extracting %s (store: %s)", url, candidate.store.value)

        known = self.catalog.lookup(url) if self.catalog is not None else None
        if known:
            logger.info("Known product match for %s: %s", url, known["name"])
            self._apply_known(candidate, known)
            return self._finish(candidate, override)

        candidate.advance(PipelineState.FETCHING)
        if self.ebay is not None and candidate.store == Store.EBAY:
            item = await self.ebay.fetch_item(url)
            if item and item.get("name") and clean_price(item.get("price_text")) is not None:
                candidate.offer_all(item)
                candidate.category = map_ebay_category(item.get("category_hint")) or Category.OTHER
                candidate.assign_quality(QualityTag.REAL_TIME_SCRAPE)
                return self._finish(candidate, override)

        try:
            result = await self.fetcher.fetch(url)
        except FetchExhausted as exc:
            logger.warning("%s; falling back to URL heuristics", exc)
            return self._degrade(candidate, override)

        candidate.raw_html = result.html
        candidate.final_url = result.final_url
        candidate.advance(PipelineState.EXTRACTING)
        candidate.offer_all(extract_fields(result.html, candidate.store))
        if candidate.store == Store.AMAZON:
            candidate.offer("asin", extract_asin(result.final_url) or extract_asin(url))
        try:
            check_page_fields(candidate)
        except ExtractionIncomplete as exc:
            logger.warning("%s for %s (via %s)", exc, url, result.source)
            return self._degrade(candidate, override)

        candidate.assign_quality(QualityTag.PROXY_SCRAPE if result.via_proxy else QualityTag.REAL_TIME_SCRAPE)
        return self._finish(candidate, override)

    def _apply_known(self, candidate: ProductCandidate, entry: dict) -> None:
        candidate.offer_all({
            "name": entry.get("name"),
            "price_text": entry.get("price"),
            "original_price_text": entry.get("original_price"),
            "image_url": entry.get("image"),
            "description": entry.get("description"),
            "asin": entry.get("asin") or extract_asin(candidate.source_url),
        })
        if entry.get("category"):
            candidate.category = Category(entry["category"])
        candidate.assign_quality(QualityTag.KNOWN_DATABASE)

    def _degrade(self, candidate: ProductCandidate, override: Optional[Category]) -> FinishedProduct:
        candidate.advance(PipelineState.DEGRADED)
        # redirects (amzn.to -> amazon.com/dp/...) can reveal an ASIN or slug
        url_fields = extract_from_url(candidate.source_url, candidate.store)
        if candidate.final_url and candidate.final_url != candidate.source_url:
            for key, value in extract_from_url(candidate.final_url, candidate.store).items():
                url_fields[key] = url_fields[key] or value
        candidate.offer_all(url_fields)

        label = store_display_name(candidate.store)
        if candidate.name:
            candidate.assign_quality(QualityTag.URL_HEURISTIC)
        elif candidate.asin or candidate.product_id:
            candidate.offer("name", f"{label} Product ({candidate.asin or candidate.product_id})")
            candidate.assign_quality(QualityTag.URL_HEURISTIC)
        elif candidate.store != Store.UNKNOWN:
            candidate.offer("name", f"{label} Product")
            candidate.assign_quality(QualityTag.BASIC_FALLBACK)
        else:
            candidate.advance(PipelineState.FAILED)
            raise ExtractionFailed(
                f"Unable to extract product details from {candidate.source_url}.", url=candidate.source_url,
            )
        logger.info("Degraded result for %s: %r [%s]", candidate.source_url, candidate.name, candidate.quality_tag.value)
        return self._finish(candidate, override)

    def _finish(self, candidate: ProductCandidate, override: Optional[Category]) -> FinishedProduct:
        candidate.advance(PipelineState.NORMALIZING)
        store = candidate.store
        base_url = candidate.final_url or candidate.source_url

        price = clean_price(candidate.price_text)
        original = clean_price(candidate.original_price_text)
        placeholder = price is None
        if placeholder:
            price = PLACEHOLDER_PRICE
            original = None
        if original is not None and original <= price:
            original = None
        discount = compute_discount(price, original)

        image = resolve_image_url(candidate.image_url, base_url) or placeholder_image(store, candidate.asin)

        candidate.advance(PipelineState.CLASSIFYING)
        if override is not None:
            candidate.category = override
        elif candidate.category == Category.OTHER:
            # page/API text only; the generated description names the store
            candidate.category = classify(candidate.name, candidate.description)
        description = candidate.description or f"Great deal on {candidate.name} from {store_display_name(store)}!"

        product = FinishedProduct(
            id=make_id(candidate.source_url, candidate.name),
            name=candidate.name,
            price=price,
            original_price=original,
            discount_percent=discount,
            image=image,
            store=store,
            category=candidate.category,
            description=description,
            quality_tag=candidate.quality_tag,
            url=affiliate_link(candidate.source_url, store, self.settings),
            asin=candidate.asin,
            product_id=candidate.product_id,
            placeholder_price=placeholder,
        )
        candidate.advance(PipelineState.DONE)
        logger.info(
            "[DONE] %s | %s | %s (was %s) | %s | %s",
            product.id, product.name, format_price(product.price), format_price(product.original_price),
            product.category.value, product.quality_tag.value,
        )
        return product


def build_pipeline(client, settings: Settings, catalog: Optional[KnownProductCatalog] = None) -> ProductPipeline:
    """Wire a pipeline from settings, sharing one httpx client across fetch and API calls."""
    fetcher = ContentFetcher(client, default_sources(settings), min_length=settings.min_content_length)
    ebay = None
    if settings.ebay_enabled:
        refresher = EbayTokenRefresher(client, settings.ebay_app_id, settings.ebay_cert_id, settings.ebay_oauth_url)
        ebay = EbayBrowseClient(client, TokenCache(refresher), settings.ebay_browse_url)
        logger.info("[INIT] eBay Browse API enabled")
    return ProductPipeline(fetcher, catalog if catalog is not None else KnownProductCatalog.default(), ebay, settings)
