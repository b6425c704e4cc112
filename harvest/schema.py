from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

PLACEHOLDER_PRICE = 0.0


class Store(str, Enum):
    AMAZON = "amazon"
    WALMART = "walmart"
    TARGET = "target"
    HOMEDEPOT = "homedepot"
    EBAY = "ebay"
    UNKNOWN = "unknown"


class Category(str, Enum):
    ELECTRONICS = "electronics"
    FASHION = "fashion"
    HOME = "home"
    KITCHEN = "kitchen"
    SPORTS_OUTDOORS = "sports-outdoors"
    HEALTH_WELLNESS = "health-wellness"
    TOOLS_HARDWARE = "tools-hardware"
    GARDEN = "garden"
    AUTOMOTIVE = "automotive"
    BOOKS = "books"
    TOYS_GAMES = "toys-games"
    BEAUTY = "beauty"
    JEWELRY = "jewelry"
    OFFICE = "office"
    BABY = "baby"
    PETS = "pets"
    OTHER = "other"


class QualityTag(str, Enum):
    KNOWN_DATABASE = "known-database"
    REAL_TIME_SCRAPE = "real-time-scrape"
    PROXY_SCRAPE = "proxy-scrape"
    URL_HEURISTIC = "url-heuristic"
    BASIC_FALLBACK = "basic-fallback"

    @property
    def rank(self) -> int:
        # higher is more trusted
        return _QUALITY_RANK[self]


_QUALITY_RANK = {
    QualityTag.KNOWN_DATABASE: 4,
    QualityTag.REAL_TIME_SCRAPE: 3,
    QualityTag.PROXY_SCRAPE: 2,
    QualityTag.URL_HEURISTIC: 1,
    QualityTag.BASIC_FALLBACK: 0,
}


class PipelineState(str, Enum):
    INIT = "init"
    DETECTING = "detecting"
    FETCHING = "fetching"
    EXTRACTING = "extracting"
    DEGRADED = "degraded"
    NORMALIZING = "normalizing"
    CLASSIFYING = "classifying"
    DONE = "done"
    FAILED = "failed"


# Degraded sits beside Extracting: Fetching/Extracting may jump to it, and it
# rejoins the main line at Normalizing.
_STATE_ORDER = {
    PipelineState.INIT: 0,
    PipelineState.DETECTING: 1,
    PipelineState.FETCHING: 2,
    PipelineState.EXTRACTING: 3,
    PipelineState.DEGRADED: 4,
    PipelineState.NORMALIZING: 5,
    PipelineState.CLASSIFYING: 6,
    PipelineState.DONE: 7,
    PipelineState.FAILED: 7,
}

_WRITE_ONCE = ("name", "price_text", "original_price_text", "image_url", "description", "asin", "product_id")


class ProductCandidate(BaseModel):
    """
    Mutable accumulator for a single pipeline run.

    Extracted fields are write-once: the first non-empty value offered for a
    field is kept and later offers are ignored, so callers can feed values in
    selector-priority order without checking what is already there.
    """

    source_url: str
    store: Store = Store.UNKNOWN
    final_url: Optional[str] = None
    raw_html: Optional[str] = None
    name: Optional[str] = None
    price_text: Optional[str] = None
    original_price_text: Optional[str] = None
    image_url: Optional[str] = None
    description: Optional[str] = None
    asin: Optional[str] = None
    product_id: Optional[str] = None
    category: Category = Category.OTHER
    quality_tag: Optional[QualityTag] = None
    state: PipelineState = PipelineState.INIT

    def offer(self, field: str, value: Optional[str]) -> bool:
        if field not in _WRITE_ONCE:
            raise KeyError(f"{field} is not an extractable field")
        if value is None:
            return False
        if isinstance(value, str):
            value = value.strip()
            if not value:
                return False
        if getattr(self, field) is not None:
            return False
        setattr(self, field, value)
        return True

    def offer_all(self, fields: dict) -> None:
        for key, value in fields.items():
            if key in _WRITE_ONCE:
                self.offer(key, value)

    def assign_quality(self, tag: QualityTag) -> QualityTag:
        if self.quality_tag is None or tag.rank > self.quality_tag.rank:
            self.quality_tag = tag
        return self.quality_tag

    def advance(self, state: PipelineState) -> None:
        if _STATE_ORDER[state] < _STATE_ORDER[self.state]:
            raise ValueError(f"cannot move from {self.state.value} back to {state.value}")
        if self.state in (PipelineState.DONE, PipelineState.FAILED):
            raise ValueError(f"pipeline already finished ({self.state.value})")
        self.state = state


class FinishedProduct(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    name: str
    price: float
    original_price: Optional[float] = Field(default=None, alias="originalPrice")
    discount_percent: Optional[int] = Field(default=None, alias="discountPercent", ge=0, le=100)
    image: str
    store: Store
    category: Category = Category.OTHER
    description: str = ""
    quality_tag: QualityTag = Field(alias="qualityTag")
    url: str = Field(alias="affiliateLink")
    asin: Optional[str] = None
    product_id: Optional[str] = Field(default=None, alias="productId")
    placeholder_price: bool = Field(default=False, alias="placeholderPrice")

    @model_validator(mode="after")
    def _check_discount(self):
        if self.discount_percent is None:
            return self
        if self.original_price is None or self.original_price <= self.price or self.price <= 0:
            raise ValueError("discountPercent requires originalPrice > price > 0")
        return self

    def to_record(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)
