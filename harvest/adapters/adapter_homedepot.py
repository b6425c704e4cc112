# adapter_homedepot.py
from .fields import FieldSelectors

SELECTORS = FieldSelectors(
    name=[
        "h1[data-testid='product-title']",
        ".product-details__title",
        ".product-title h1",
        ".product-title",
    ],
    price=[
        "[data-testid='price']",
        ".price-format__main-price",
        ".price-detailed",
        ".price__dollars",
    ],
    original_price=[
        "[data-testid='was-price']",
        ".price-format__strike",
        ".was-price",
        ".price__was",
    ],
    image=[
        ("[data-testid='product-image'] img", "src"),
        (".mediagallery__mainimage img", "src"),
        (".product-image img", "src"),
    ],
)
