from storefront.schemas import PriceRange
from storefront.search.criteria import (
    AllOf,
    AnyOf,
    CategoryIn,
    FieldMatch,
    PriceBetween,
    build_search_criteria,
    text_matches,
    with_category_restriction,
)
from storefront.search.lexicon import MATERIAL_KEYWORDS, PRODUCT_TYPE_KEYWORDS

def terms_of(node: AnyOf):
    """Distinct terms of an AnyOf of text matches, in order"""
    return list(dict.fromkeys(leaf.term for leaf in node.clauses))

class TestMaterialShape:
    def test_gold_ring_under_5000(self):
        criteria = build_search_criteria(
            "gold ring under 5000", PriceRange(max=5000), ("gold",), ("ring",)
        )

        material, free, product_type, price = criteria.clauses
        gold = MATERIAL_KEYWORDS["gold"]
        assert terms_of(material) == list(dict.fromkeys(("gold", *gold.types, *gold.variations)))
        assert terms_of(free) == ["ring", "5000"]
        assert terms_of(product_type) == ["ring", *PRODUCT_TYPE_KEYWORDS["ring"].variations]
        assert price == PriceBetween(min=None, max=5000)

    def test_every_term_matches_name_and_description(self):
        criteria = build_search_criteria("silver", None, ("silver",), ())
        leaves = criteria.clauses[0].clauses
        assert leaves[0] == FieldMatch("name", "silver")
        assert leaves[1] == FieldMatch("description", "silver")

    def test_free_term_clause_omitted_when_nothing_left(self):
        criteria = build_search_criteria("gold", None, ("gold",), ())
        assert len(criteria.clauses) == 1

class TestGeneralShape:
    def test_unknown_words_reduce_to_text_match(self):
        criteria = build_search_criteria("xyz123", None, (), ())
        assert criteria == AllOf((
            AnyOf((FieldMatch("name", "xyz123"), FieldMatch("description", "xyz123"))),
        ))

    def test_product_types_fold_into_free_terms(self):
        criteria = build_search_criteria("necklace under 900", PriceRange(max=900), (), ("necklace",))

        free, price = criteria.clauses
        assert terms_of(free) == ["necklace", "900", *PRODUCT_TYPE_KEYWORDS["necklace"].variations]
        assert isinstance(price, PriceBetween)

    def test_only_price_words_gives_empty_any_of(self):
        criteria = build_search_criteria("under", None, (), ())
        assert criteria == AllOf((AnyOf(()),))

class TestCategoryRestriction:
    def test_adds_conjunct(self):
        criteria = build_search_criteria("ring", None, (), ("ring",))
        restricted = with_category_restriction(criteria, [3, 7])

        assert restricted.clauses[-1] == CategoryIn((3, 7))
        assert len(restricted.clauses) == len(criteria.clauses) + 1

    def test_no_ids_means_no_restriction(self):
        criteria = build_search_criteria("ring", None, (), ("ring",))
        assert with_category_restriction(criteria, []) is criteria

def test_to_dict_renders_tree():
    criteria = AllOf((AnyOf(tuple(text_matches(["ruby"]))), PriceBetween(min=100, max=200)))
    assert criteria.to_dict() == {
        "and": [
            {"or": [{"name": {"contains": "ruby"}}, {"description": {"contains": "ruby"}}]},
            {"price": {"gte": 100, "lte": 200}},
        ]
    }

def test_price_bounds_are_floats():
    criteria = build_search_criteria(
        "ring under 99999999999999999999", PriceRange(max=99999999999999999999), (), ("ring",)
    )
    price = criteria.clauses[-1]
    assert isinstance(price.max, float)
    assert price.min is None
