"""
Keyword category classifier.

The table is scanned top to bottom and the first category with any keyword
found in the text wins, so narrow categories sit above broad ones ("garden"
above "home", "kitchen" above "home", "toys-games" above "electronics").
Retailer names are blanked out first. Keywords are plain substrings of the
lower-cased text, which is padded with a space on each side; a keyword
written as " tv " therefore only matches the whole word.
"""
from typing import Dict, List, Optional, Tuple

from .schema import Category
from .stores import DISPLAY_NAMES

# Retailer names never decide a category ("Home Depot" is not "home").
STORE_NAMES = tuple(name.lower() for name in DISPLAY_NAMES.values())

CATEGORY_KEYWORDS: List[Tuple[Category, Tuple[str, ...]]] = [
    (Category.BABY, (
        "baby", "infant", "toddler", "newborn", "diaper", "stroller", "crib", "pacifier",
        "car seat", "onesie", "nursery",
    )),
    (Category.PETS, (
        " pet ", " pets ", "dog ", "dogs", "puppy", "cat food", "cat litter", "cat toy", "kitten",
        "leash", "aquarium", "bird feeder", "chew toy",
    )),
    (Category.JEWELRY, (
        "jewelry", "jewellery", "necklace", "bracelet", "earring", "pendant", " ring ",
        "diamond", "sterling silver", "14k", "18k",
    )),
    (Category.BEAUTY, (
        "beauty", "makeup", "mascara", "lipstick", "eyeliner", "perfume", "fragrance", "cologne",
        "nail polish", "hair dryer", "curling iron", "skincare", "serum", "moisturizer",
    )),
    (Category.BOOKS, (
        " book", "paperback", "hardcover", "novel", "textbook", "cookbook", "biography",
        "audiobook", "kindle edition",
    )),
    (Category.TOYS_GAMES, (
        " toy", "toys", "lego", "puzzle", " doll", "action figure", "board game", "card game",
        "playstation", "xbox", "nintendo", "pokemon", "video game",
    )),
    (Category.GARDEN, (
        "garden", "lawn", "plant", " seed", "fertilizer", " hose", "sprinkler", "pruning",
        "mower", "trimmer", "shovel", " rake", "patio", "christmas tree", "pre-lit",
        "artificial tree", "christmas", "xmas", "ornament", "garland", "wreath",
    )),
    (Category.KITCHEN, (
        "kitchen", "cooking", "cookware", "mixer", "blender", "coffee", "espresso", "air fryer",
        "fryer", "instant pot", "microwave", "toaster", "knife set", "cutting board", "spatula",
        "whisk", "skillet", " pan ", " pot ", "kettle",
    )),
    (Category.TOOLS_HARDWARE, (
        "drill", "hammer", "screwdriver", "wrench", "pliers", "tape measure", "socket set",
        "bit set", "multimeter", "clamp", "circular saw", "jigsaw", "sander", "tool", "hardware",
    )),
    (Category.AUTOMOTIVE, (
        "automotive", "vehicle", " car ", "motor oil", " tire", "brake", "spark plug",
        "windshield", "dash cam", "seat cover", "jump starter",
    )),
    (Category.OFFICE, (
        "office", "stapler", "printer paper", "notebook", "planner", "desk organizer",
        "whiteboard", " pens ", "highlighter", "label maker", "shredder",
    )),
    (Category.HEALTH_WELLNESS, (
        "health", "vitamin", "supplement", "medical", "wellness", "protein", "toothbrush",
        "sunscreen", "thermometer", "blood pressure", "massager", "first aid",
    )),
    (Category.SPORTS_OUTDOORS, (
        "fitness", "exercise", "outdoor", "camping", "sports", " gym", "yoga", "running",
        " bike", "bicycle", " tent", "backpack", "hiking", "fishing", "golf", "basketball",
        "soccer", "dumbbell", "weights",
    )),
    (Category.ELECTRONICS, (
        "laptop", "phone", "tablet", "computer", "headphone", "earbuds", "airpods", "speaker",
        "camera", " tv ", "television", "monitor", "gaming", "echo dot", "alexa", "iphone",
        "ipad", "macbook", "kindle", "fire hd", "smart watch", "smartwatch", "wireless",
        "bluetooth", "charger", "usb", "hdmi", "mouse", "keyboard", "processor", "graphics card",
        " ssd", " ram ", "router", "power bank",
    )),
    (Category.FASHION, (
        "shirt", "shoes", " dress ", "dresses", "pants", "clothing", "fashion", "apparel", "jeans", "jacket",
        "sweater", "hoodie", "boots", "sneakers", "handbag", "wallet", "sunglasses", "watch",
    )),
    (Category.HOME, (
        "home", "furniture", "chair", " table", "sofa", "couch", "mattress", "pillow", "lamp",
        "bedding", "blanket", "curtain", " rug", "shelf", "bookshelf", "dresser", "nightstand",
        "vacuum", "decor",
    )),
]

# eBay top-level category names (Browse API) to taxonomy.
EBAY_CATEGORY_MAP: Dict[str, Category] = {
    "Cell Phones & Smartphones": Category.ELECTRONICS,
    "Cell Phones & Accessories": Category.ELECTRONICS,
    "Computers, Tablets & Networking": Category.ELECTRONICS,
    "Consumer Electronics": Category.ELECTRONICS,
    "Video Games & Consoles": Category.TOYS_GAMES,
    "Clothing, Shoes & Accessories": Category.FASHION,
    "Jewelry & Watches": Category.JEWELRY,
    "Home & Garden": Category.HOME,
    "Health & Beauty": Category.BEAUTY,
    "Sporting Goods": Category.SPORTS_OUTDOORS,
    "Toys & Hobbies": Category.TOYS_GAMES,
    "eBay Motors": Category.AUTOMOTIVE,
    "Books & Magazines": Category.BOOKS,
    "Books": Category.BOOKS,
    "Baby": Category.BABY,
    "Pet Supplies": Category.PETS,
    "Business & Industrial": Category.TOOLS_HARDWARE,
}


def classify(name: Optional[str], description: Optional[str] = "") -> Category:
    text = f" {name or ''} {description or ''} ".lower()
    for store_name in STORE_NAMES:
        text = text.replace(store_name, " ")
    if not text.strip():
        return Category.OTHER
    for category, keywords in CATEGORY_KEYWORDS:
        if any(k in text for k in keywords):
            return category
    return Category.OTHER


def map_ebay_category(name: Optional[str]) -> Optional[Category]:
    if not name:
        return None
    return EBAY_CATEGORY_MAP.get(name.strip())
