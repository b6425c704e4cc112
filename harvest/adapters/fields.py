from dataclasses import dataclass, field
from typing import List, Tuple

ImageRule = Tuple[str, str]


@dataclass(frozen=True)
class FieldSelectors:
    """Ordered selector candidates per field, most reliable first."""
    name: List[str] = field(default_factory=list)
    price: List[str] = field(default_factory=list)
    original_price: List[str] = field(default_factory=list)
    # (css selector, attribute) pairs
    image: List[ImageRule] = field(default_factory=list)
