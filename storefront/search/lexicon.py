"""
Keyword lexicon used to interpret free-text jewelry searches.

The tables are process-wide constants: read-only mappings of frozen
``KeywordGroup`` entries whose keyword lists are tuples.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Tuple


@dataclass(frozen=True)
class KeywordGroup:
    """Surface forms that all point at one concept (a material or a product type)."""

    types: Tuple[str, ...]
    variations: Tuple[str, ...]
    synonyms: Tuple[str, ...]

    @property
    def all_keywords(self) -> Tuple[str, ...]:
        return self.types + self.variations + self.synonyms


# Price qualifier and connector words
PRICE_KEYWORDS: Mapping[str, Tuple[str, ...]] = MappingProxyType({
    "under": (
        "under", "below", "less than", "upto", "maximum", "max", "not more than",
        "within", "within budget of", "budget", "cheaper than", "lower than",
    ),
    "above": (
        "above", "more than", "minimum", "min", "starting from", "from", "at least",
        "higher than", "costlier than", "expensive than",
    ),
    "between": (
        "between", "from", "range", "ranging", "in range", "price range", "cost range",
        "budget range", "priced between", "costing between",
    ),
    "and": ("and", "to", "-", "till", "until", "up to"),
})

# Every price word, flattened once for free-term filtering
ALL_PRICE_KEYWORDS = frozenset(
    keyword for keywords in PRICE_KEYWORDS.values() for keyword in keywords
)

MATERIAL_KEYWORDS: Mapping[str, KeywordGroup] = MappingProxyType({
    "gold": KeywordGroup(
        types=("gold", "golden", "yellow gold", "white gold", "rose gold", "pink gold",
               "red gold", "green gold", "black gold"),
        variations=("golden jewelry", "gold jewelry", "gold items", "gold products",
                    "gold pieces", "gold collection", "gold ornaments", "gold accessories"),
        synonyms=("golden", "golden colored", "gold plated", "gold filled", "gold tone",
                  "golden tone", "golden shade"),
    ),
    "silver": KeywordGroup(
        types=("silver", "sterling silver", "pure silver", "fine silver", "silver plated",
               "silver filled"),
        variations=("silver jewelry", "silver items", "silver products", "silver pieces",
                    "silver collection", "silver ornaments", "silver accessories"),
        synonyms=("silvery", "silver colored", "silver tone", "silver shade"),
    ),
    "platinum": KeywordGroup(
        types=("platinum", "platinum plated", "platinum filled"),
        variations=("platinum jewelry", "platinum items", "platinum products",
                    "platinum pieces", "platinum collection", "platinum ornaments"),
        synonyms=("platinum colored", "platinum tone", "platinum shade"),
    ),
    "diamond": KeywordGroup(
        types=("diamond", "diamonds", "diamond cut", "diamond studded", "diamond encrusted"),
        variations=("diamond jewelry", "diamond items", "diamond products", "diamond pieces",
                    "diamond collection", "diamond ornaments"),
        synonyms=("diamond like", "diamond look", "diamond style"),
    ),
    "pearl": KeywordGroup(
        types=("pearl", "pearls", "freshwater pearl", "south sea pearl", "tahitian pearl"),
        variations=("pearl jewelry", "pearl items", "pearl products", "pearl pieces",
                    "pearl collection", "pearl ornaments"),
        synonyms=("pearly", "pearl like", "pearl look"),
    ),
    "ruby": KeywordGroup(
        types=("ruby", "rubies", "ruby stone", "ruby gem"),
        variations=("ruby jewelry", "ruby items", "ruby products", "ruby pieces",
                    "ruby collection", "ruby ornaments"),
        synonyms=("ruby colored", "ruby red", "ruby tone"),
    ),
    "sapphire": KeywordGroup(
        types=("sapphire", "sapphires", "sapphire stone", "sapphire gem"),
        variations=("sapphire jewelry", "sapphire items", "sapphire products",
                    "sapphire pieces", "sapphire collection", "sapphire ornaments"),
        synonyms=("sapphire blue", "sapphire colored", "sapphire tone"),
    ),
    "emerald": KeywordGroup(
        types=("emerald", "emeralds", "emerald stone", "emerald gem"),
        variations=("emerald jewelry", "emerald items", "emerald products",
                    "emerald pieces", "emerald collection", "emerald ornaments"),
        synonyms=("emerald green", "emerald colored", "emerald tone"),
    ),
})

PRODUCT_TYPE_KEYWORDS: Mapping[str, KeywordGroup] = MappingProxyType({
    "ring": KeywordGroup(
        types=("ring", "rings", "band", "bands", "finger ring", "finger rings"),
        variations=("ring collection", "ring set", "ring piece", "ring design", "ring style"),
        synonyms=("ring like", "ring shaped", "ring style"),
    ),
    "necklace": KeywordGroup(
        types=("necklace", "necklaces", "chain", "chains", "pendant", "pendants",
               "neck piece", "neck pieces", "choker", "chokers"),
        variations=("necklace collection", "necklace set", "necklace piece",
                    "necklace design", "necklace style"),
        synonyms=("neck piece", "neck wear", "neck accessory"),
    ),
    "bracelet": KeywordGroup(
        types=("bracelet", "bracelets", "bangle", "bangles", "wrist band", "wrist bands",
               "wristlet", "wristlets"),
        variations=("bracelet collection", "bracelet set", "bracelet piece",
                    "bracelet design", "bracelet style"),
        synonyms=("wrist piece", "wrist wear", "wrist accessory"),
    ),
    "earring": KeywordGroup(
        types=("earring", "earrings", "stud", "studs", "ear piece", "ear pieces",
               "ear drop", "ear drops"),
        variations=("earring collection", "earring set", "earring pair", "earring design",
                    "earring style"),
        synonyms=("ear piece", "ear wear", "ear accessory"),
    ),
    "anklet": KeywordGroup(
        types=("anklet", "anklets", "ankle chain", "ankle chains", "ankle bracelet",
               "ankle bracelets"),
        variations=("anklet collection", "anklet set", "anklet piece", "anklet design",
                    "anklet style"),
        synonyms=("ankle piece", "ankle wear", "ankle accessory"),
    ),
    "brooch": KeywordGroup(
        types=("brooch", "brooches", "pin", "pins", "clasp", "clasps"),
        variations=("brooch collection", "brooch set", "brooch piece", "brooch design",
                    "brooch style"),
        synonyms=("pin piece", "pin wear", "pin accessory"),
    ),
    "jewelry": KeywordGroup(
        types=("jewelry", "jewellery", "jewels", "jewel", "ornaments", "ornament",
               "accessories", "accessory"),
        variations=("jewelry collection", "jewelry set", "jewelry piece", "jewelry design",
                    "jewelry style"),
        synonyms=("ornament", "adornment", "decoration", "accessory"),
    ),
})
