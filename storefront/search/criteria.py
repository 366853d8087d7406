"""
Search criteria: a small predicate tree handed to the product repository.

Leaves:
- FieldMatch: case-insensitive substring match of a term on a text field
- PriceBetween: inclusive price bounds
- CategoryIn: product category must be one of the given ids

Nodes:
- AllOf: every clause must hold
- AnyOf: at least one clause must hold (an empty AnyOf matches nothing)
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple, Union

from ..schemas import PriceRange
from .extractors import free_terms
from .lexicon import MATERIAL_KEYWORDS, PRODUCT_TYPE_KEYWORDS

TEXT_FIELDS = ("name", "description")


@dataclass(frozen=True)
class FieldMatch:
    field: str
    term: str

    def to_dict(self) -> Dict[str, Any]:
        return {self.field: {"contains": self.term}}


@dataclass(frozen=True)
class PriceBetween:
    min: Optional[float] = None
    max: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        bounds = {}
        if self.min is not None:
            bounds["gte"] = self.min
        if self.max is not None:
            bounds["lte"] = self.max
        return {"price": bounds}


@dataclass(frozen=True)
class CategoryIn:
    ids: Tuple[int, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {"category": {"in": list(self.ids)}}


@dataclass(frozen=True)
class AnyOf:
    clauses: Tuple["Criterion", ...]

    def to_dict(self) -> Dict[str, Any]:
        return {"or": [clause.to_dict() for clause in self.clauses]}


@dataclass(frozen=True)
class AllOf:
    clauses: Tuple["Criterion", ...]

    def to_dict(self) -> Dict[str, Any]:
        return {"and": [clause.to_dict() for clause in self.clauses]}

    def extend(self, clause: "Criterion") -> "AllOf":
        return AllOf(self.clauses + (clause,))


Criterion = Union[FieldMatch, PriceBetween, CategoryIn, AnyOf, AllOf]


def text_matches(terms: Iterable[str]) -> List[FieldMatch]:
    """One name match and one description match per term."""
    return [FieldMatch(field, term) for term in terms for field in TEXT_FIELDS]


def _material_terms(materials: Sequence[str]) -> List[str]:
    terms = []
    for material in materials:
        group = MATERIAL_KEYWORDS.get(material)
        if group:
            terms.extend((material, *group.types, *group.variations))
    return terms


def _product_type_terms(product_types: Sequence[str]) -> List[str]:
    terms = []
    for product_type in product_types:
        group = PRODUCT_TYPE_KEYWORDS.get(product_type)
        if group:
            terms.extend((product_type, *group.variations))
    return terms


def _as_bound(value: Optional[int]) -> Optional[float]:
    return None if value is None else float(value)


def build_search_criteria(
    query: str,
    price_range: Optional[PriceRange],
    materials: Sequence[str],
    product_types: Sequence[str],
) -> AllOf:
    """
    Translate extracted search parameters into a criteria tree.

    With materials, every present group is mandatory: the material terms,
    the remaining free terms, the product-type terms and the price bound.
    Without materials, free terms and product-type terms share a single
    AnyOf, and only the price bound is added alongside it.
    """
    if materials:
        material_types = [
            keyword
            for material in materials
            if material in MATERIAL_KEYWORDS
            for keyword in MATERIAL_KEYWORDS[material].types
        ]
        clauses: List[Criterion] = [AnyOf(tuple(text_matches(_material_terms(materials))))]

        terms = free_terms(query, exclude=material_types)
        if terms:
            clauses.append(AnyOf(tuple(text_matches(terms))))

        if product_types:
            clauses.append(AnyOf(tuple(text_matches(_product_type_terms(product_types)))))
    else:
        terms = free_terms(query) + _product_type_terms(product_types)
        clauses = [AnyOf(tuple(text_matches(terms)))]

    if price_range:
        # Float bounds match the price column; digit runs of any length stay bindable
        clauses.append(PriceBetween(min=_as_bound(price_range.min), max=_as_bound(price_range.max)))

    return AllOf(tuple(clauses))


def with_category_restriction(criteria: AllOf, category_ids: Sequence[int]) -> AllOf:
    """Add a mandatory category conjunct; no ids means no restriction."""
    if not category_ids:
        return criteria
    return criteria.extend(CategoryIn(tuple(category_ids)))
