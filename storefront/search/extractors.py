"""
Extraction of structured search parameters from free text.

- Price ranges ("under 5000", "between 2000 and 8000", "2000-8000")
- Materials and product types, matched against the lexicon tables
- Free terms, i.e. the words left once price vocabulary is removed
"""

import re
from typing import Iterable, List, Mapping, Optional, Tuple

from ..schemas import PriceRange
from .lexicon import (
    ALL_PRICE_KEYWORDS,
    MATERIAL_KEYWORDS,
    PRICE_KEYWORDS,
    PRODUCT_TYPE_KEYWORDS,
    KeywordGroup,
)

# Partial matches shorter than this are ignored ("a" would match everything)
MIN_PARTIAL_MATCH_LENGTH = 3


def _alternation(keywords: Iterable[str]) -> str:
    return "|".join(re.escape(keyword) for keyword in keywords)


# Tried in this order, first match wins
PRICE_PATTERNS: Tuple[Tuple[str, "re.Pattern[str]"], ...] = (
    ("under", re.compile(
        rf"(?:{_alternation(PRICE_KEYWORDS['under'])})\s+(\d+)", re.IGNORECASE)),
    ("above", re.compile(
        rf"(?:{_alternation(PRICE_KEYWORDS['above'])})\s+(\d+)", re.IGNORECASE)),
    ("between", re.compile(
        rf"(?:{_alternation(PRICE_KEYWORDS['between'])})\s+(\d+)\s+"
        rf"(?:{_alternation(PRICE_KEYWORDS['and'])})\s+(\d+)", re.IGNORECASE)),
    ("range", re.compile(
        rf"(\d+)\s*(?:{_alternation(PRICE_KEYWORDS['and'])})\s*(\d+)", re.IGNORECASE)),
)


def extract_price_range(query: str) -> Optional[PriceRange]:
    """
    Parse a price range out of a natural-language query.

    Bounds are inclusive and taken in the order they appear, so
    "between 8000 and 2000" yields min=8000, max=2000.

    Args:
        query (str): Raw search text

    Returns:
        Optional[PriceRange]: The first matching range, or None
    """
    for kind, pattern in PRICE_PATTERNS:
        match = pattern.search(query)
        if not match:
            continue
        if kind == "under":
            return PriceRange(max=int(match.group(1)))
        if kind == "above":
            return PriceRange(min=int(match.group(1)))
        return PriceRange(min=int(match.group(1)), max=int(match.group(2)))
    return None


def tokenize(query: str) -> List[str]:
    return query.lower().split()


def _partial_match(word: str, token: str) -> bool:
    shorter, longer = sorted((word, token), key=len)
    if len(shorter) < MIN_PARTIAL_MATCH_LENGTH:
        return False
    return longer.startswith(shorter)


def _group_matches(group: KeywordGroup, query_lower: str, tokens: List[str]) -> bool:
    for keyword in group.all_keywords:
        if keyword in tokens or keyword in query_lower:
            return True
        if any(_partial_match(word, token) for word in keyword.split() for token in tokens):
            return True
    # Run-together variations, e.g. "goldjewelry"
    return any(variation.replace(" ", "") in query_lower for variation in group.variations)


def extract_concepts(query: str, table: Mapping[str, KeywordGroup]) -> Tuple[str, ...]:
    """
    Return the concept tags of ``table`` mentioned in ``query``.

    Each concept appears at most once, in table order, however many of its
    surface forms matched.
    """
    query_lower = query.lower()
    tokens = tokenize(query)
    return tuple(
        concept for concept, group in table.items()
        if _group_matches(group, query_lower, tokens)
    )


def extract_materials(query: str) -> Tuple[str, ...]:
    return extract_concepts(query, MATERIAL_KEYWORDS)


def extract_product_types(query: str) -> Tuple[str, ...]:
    return extract_concepts(query, PRODUCT_TYPE_KEYWORDS)


def free_terms(query: str, exclude: Iterable[str] = ()) -> List[str]:
    """Lowercased query words minus price vocabulary and any ``exclude`` words."""
    excluded = ALL_PRICE_KEYWORDS | {word.lower() for word in exclude}
    return [token for token in tokenize(query) if token not in excluded]
