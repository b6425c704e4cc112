# adapter_target.py
from .fields import FieldSelectors

SELECTORS = FieldSelectors(
    name=[
        "h1[data-test='product-title']",
        "[data-test='product-title']",
        ".pdp-product-name h1",
    ],
    price=[
        "[data-test='product-price']",
        "[data-test='product-price'] span",
        "[data-test='current-price'] span",
    ],
    original_price=[
        "[data-test='product-regular-price']",
        "[data-test='product-price-reg']",
        ".h-text-strikethrough",
    ],
    image=[
        ("[data-test='product-image'] img", "src"),
        ("[data-test='image-gallery-item-0'] img", "src"),
        (".ProductImages img", "src"),
        (".CarouselImage img", "src"),
    ],
)
