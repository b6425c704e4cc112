# adapter_walmart.py
from .fields import FieldSelectors

SELECTORS = FieldSelectors(
    name=[
        "h1[itemprop='name']",
        "h1[data-testid='product-title']",
        "[data-automation-id='product-title']",
        ".prod-ProductTitle",
        "h1.heading",
    ],
    price=[
        "[itemprop='price']",
        "[data-testid='price-wrap'] [itemprop='price']",
        "[data-testid='price-current']",
        "[data-automation-id='product-price']",
        ".price-characteristic",
        ".price-group .visuallyhidden",
        ".price-display",
    ],
    original_price=[
        "[data-testid='strike-through-price']",
        "[data-testid='price-was']",
        ".price-characteristic.price-comparison",
        ".strikethrough",
    ],
    image=[
        ("[data-testid='hero-image-container'] img", "src"),
        ("[data-testid='product-image'] img", "src"),
        ("[data-automation-id='product-image'] img", "src"),
        (".prod-hero-image img", "src"),
        (".hover-zoom-hero-image img", "src"),
    ],
)
