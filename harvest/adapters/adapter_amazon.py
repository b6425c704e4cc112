# adapter_amazon.py
from .fields import FieldSelectors

SELECTORS = FieldSelectors(
    name=[
        "#productTitle",
        "span#productTitle",
        "h1.a-size-large.a-spacing-none.a-color-base",
        "h1[data-testid='product-title']",
        "h1 span.a-size-large",
        ".a-size-large.product-title-word-break",
    ],
    price=[
        "#corePrice_feature_div .a-offscreen",
        "#corePriceDisplay_desktop_feature_div .priceToPay .a-offscreen",
        ".a-price.priceToPay .a-offscreen",
        ".a-price-current .a-offscreen",
        ".a-price:not(.a-text-price) .a-offscreen",
        "#priceblock_dealprice",
        "#priceblock_ourprice",
        "#priceblock_saleprice",
        "span.a-offscreen:not(.a-text-price .a-offscreen)",
        "span.a-price-whole",
    ],
    original_price=[
        ".a-price.a-text-price.a-size-base.a-color-secondary .a-offscreen",
        ".basisPrice .a-text-price .a-offscreen",
        ".a-text-price .a-offscreen",
        ".a-text-strike .a-offscreen",
        ".a-text-strike",
        "[data-testid='price-was']",
    ],
    image=[
        ("#landingImage", "data-old-hires"),
        ("#landingImage", "src"),
        ("#imgTagWrapperId img", "src"),
        ("#imgBlkFront", "src"),
        (".a-dynamic-image.a-stretch-horizontal", "src"),
        (".a-dynamic-image", "src"),
        (".a-dynamic-image", "data-src"),
    ],
)
