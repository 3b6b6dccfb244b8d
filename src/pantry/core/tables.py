"""Built-in product tables used when no taxonomy is configured."""

from typing import Dict, List

COOKIE_BRANDS = ["oreo", "chips ahoy", "nutter butter", "keebler", "pepperidge farm"]
SODA_BRANDS = ["coca cola", "coke", "pepsi", "sprite", "dr pepper", "mountain dew"]
CHIP_BRANDS = ["lay's", "lays", "doritos", "cheetos", "pringles", "ruffles", "tostitos"]

# Generic term -> known brand names, most common first.
DEFAULT_GENERIC_TO_BRANDS: Dict[str, List[str]] = {
    "cereal": [
        "cheerios", "frosted flakes", "lucky charms", "froot loops", "special k",
        "raisin bran", "honey bunches of oats", "cinnamon toast crunch",
    ],
    "cookies": COOKIE_BRANDS,
    "soda": SODA_BRANDS,
    "chips": CHIP_BRANDS,
    "cheese": ["kraft", "sargento", "tillamook", "philadelphia"],
    "detergent": ["tide", "persil", "gain", "arm & hammer"],
    "dish soap": ["dawn", "joy", "palmolive"],
    "soap": ["dove", "ivory", "dial", "olay"],
    "milk": ["horizon", "fairlife", "lactaid"],
    "yogurt": ["chobani", "yoplait", "dannon", "fage", "oikos"],
    "peanut butter": ["jif", "skippy", "peter pan"],
    "paper towels": ["bounty", "brawny", "viva"],
    "toilet paper": ["charmin", "cottonelle", "angel soft"],
    "coffee": ["folgers", "maxwell house", "starbucks", "dunkin"],
    "ketchup": ["heinz", "hunt's"],
    # Singular and synonym spellings the keyword fallback also recognizes.
    "cookie": COOKIE_BRANDS,
    "chip": CHIP_BRANDS,
    "soft drink": SODA_BRANDS,
}

# Broad category -> generic terms it contains.
DEFAULT_CATEGORY_MEMBERS: Dict[str, List[str]] = {
    "breakfast": ["cereal", "oatmeal", "granola", "breakfast bars", "pancake mix", "syrup"],
    "dairy": ["milk", "cheese", "yogurt", "butter", "cream cheese", "sour cream"],
    "meat": [
        "chicken", "beef", "pork", "turkey", "ground beef", "ground turkey", "ground chicken",
    ],
    "cleaning": ["detergent", "fabric softener", "bleach", "dish soap", "all purpose cleaner"],
}
