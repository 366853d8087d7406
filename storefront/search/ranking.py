"""
Relevance ranking of already-filtered search results.
"""

import re
from functools import lru_cache
from types import MappingProxyType
from typing import List, Mapping, NamedTuple, Sequence

from .lexicon import MATERIAL_KEYWORDS
from .repository import ProductRecord

# Points per whole-word hit in a product's name or description
RELEVANCE_WEIGHTS: Mapping[str, int] = MappingProxyType({
    "material": 1000,
    "type": 500,
    "variation": 250,
})


class RankedProduct(NamedTuple):
    product: ProductRecord
    score: int


@lru_cache(maxsize=512)
def _word_pattern(phrase: str) -> "re.Pattern[str]":
    return re.compile(rf"\b{re.escape(phrase)}\b", re.IGNORECASE)


def _has_word(phrase: str, *texts: str) -> bool:
    pattern = _word_pattern(phrase)
    return any(pattern.search(text or "") for text in texts)


def material_score(product: ProductRecord, materials: Sequence[str]) -> int:
    """
    Sum the relevance weights of every material keyword found in the product.

    Each keyword counts once whether it appears in the name, the description
    or both; hits across materials add up without a cap.
    """
    score = 0
    for material in materials:
        group = MATERIAL_KEYWORDS.get(material)
        if not group:
            continue
        if _has_word(material, product.name, product.description):
            score += RELEVANCE_WEIGHTS["material"]
        for keyword in group.types:
            if _has_word(keyword, product.name, product.description):
                score += RELEVANCE_WEIGHTS["type"]
        for keyword in group.variations:
            if _has_word(keyword, product.name, product.description):
                score += RELEVANCE_WEIGHTS["variation"]
    return score


def rank_products(products: Sequence[ProductRecord], materials: Sequence[str]) -> List[RankedProduct]:
    """
    Order products by material relevance, then material-in-name, then price.

    Without materials the order is price ascending. The sort is stable, so
    full ties keep the order the repository returned them in.
    """
    if not materials:
        ranked = [RankedProduct(product, 0) for product in products]
        return sorted(ranked, key=lambda item: item.product.price)

    def sort_key(item: RankedProduct):
        name_has_material = any(_has_word(material, item.product.name) for material in materials)
        return (-item.score, not name_has_material, item.product.price)

    ranked = [RankedProduct(product, material_score(product, materials)) for product in products]
    return sorted(ranked, key=sort_key)
