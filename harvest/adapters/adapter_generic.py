# adapter_generic.py
from .fields import FieldSelectors

# Used for stores without a dedicated table.
SELECTORS = FieldSelectors(
    name=[
        "[itemprop='name']",
        "h1.product-title",
        "h1.product_title",
        ".product-name h1",
        "h1",
    ],
    price=[
        "[itemprop='price']",
        "[data-price]",
        ".product-price",
        ".current-price",
        ".price",
    ],
    original_price=[
        ".was-price",
        ".compare-at-price",
        ".price--compare",
        "del .amount",
        "del",
        "s",
    ],
    image=[
        ("[itemprop='image']", "content"),
        ("[itemprop='image']", "src"),
        ("img#main-product-image", "src"),
        (".product-image img", "data-src"),
        (".product-image img", "src"),
    ],
)
