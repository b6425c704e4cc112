# adapter_ebay.py
from .fields import FieldSelectors

SELECTORS = FieldSelectors(
    name=[
        "h1.x-item-title__mainTitle span.ux-textspans",
        "h1.x-item-title__mainTitle",
        "#itemTitle",
    ],
    price=[
        ".x-price-primary span.ux-textspans",
        ".x-price-primary",
        "#prcIsum",
        "#mm-saleDscPrc",
    ],
    original_price=[
        ".x-additional-info .ux-textspans--STRIKETHROUGH",
        ".ux-textspans--STRIKETHROUGH",
        "#orgPrc",
    ],
    image=[
        (".ux-image-carousel-item.active img", "data-zoom-src"),
        (".ux-image-carousel-item.active img", "src"),
        (".ux-image-carousel-item img", "src"),
        ("#icImg", "src"),
    ],
)
