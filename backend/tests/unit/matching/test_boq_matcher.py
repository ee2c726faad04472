"""Unit tests for BOQMatcher ranking, auto-match and manual assignment"""

import pytest

from config import MatchingConfig
from domain.boq.models import BOQLineItem, CatalogProduct
from matching.boq_matcher import (
    BOQMatcher,
    auto_match_boq_items,
    clear_match,
    find_product_matches,
    get_best_match,
    summarize,
)
from matching.ports import MatcherError


@pytest.fixture
def matcher():
    return BOQMatcher()


class TestFindMatches:
    """Test candidate ranking"""

    def test_best_candidate_ranked_first(self, matcher, plywood_item, catalog_products):
        matches = matcher.find_matches(plywood_item, catalog_products)

        assert matches[0].product_id == 1
        assert matches[0].confidence == 100.0
        assert matches[0].matched_fields == (
            "Name: 125%",
            "Thickness: 100%",
            "Brand: 100%",
            "Unit: 100%",
        )

    def test_sorted_by_confidence_descending(self, matcher, plywood_item, catalog_products):
        confidences = [m.confidence for m in matcher.find_matches(plywood_item, catalog_products)]

        assert confidences == sorted(confidences, reverse=True)

    def test_single_product_catalog(self, matcher, plywood_item, plywood):
        matches = matcher.find_matches(plywood_item, [plywood])

        assert len(matches) == 1
        assert matches[0].confidence > 70
        assert any(f.startswith("Name:") for f in matches[0].matched_fields)
        assert any(f.startswith("Thickness:") for f in matches[0].matched_fields)

    def test_repeatable(self, matcher, hinge_item, catalog_products):
        assert matcher.find_matches(hinge_item, catalog_products) == matcher.find_matches(hinge_item, catalog_products)

    def test_results_are_hashable_value_objects(self, matcher, plywood_item, catalog_products):
        matches = matcher.find_matches(plywood_item, catalog_products)
        annotated = matcher.auto_match([plywood_item], catalog_products)[0]

        assert len({*matches, *matcher.find_matches(plywood_item, catalog_products)}) == len(matches)
        assert hash(annotated) == hash(matcher.auto_match([plywood_item], catalog_products)[0])

    def test_pairs_below_min_confidence_excluded(self, matcher, weak_item, catalog_products):
        # laminate scores 26.25; plywood 23.75 and hinge 0 are dropped
        matches = matcher.find_matches(weak_item, catalog_products)

        assert [m.product_id for m in matches] == [3]
        assert matches[0].confidence == pytest.approx(26.25)

    def test_unit_only_agreement_never_qualifies(self, matcher, catalog_products):
        item = BOQLineItem(description="Qzx Vvv", unit="sheets")

        assert matcher.find_matches(item, catalog_products) == []

    def test_empty_catalog(self, matcher, plywood_item):
        assert matcher.find_matches(plywood_item, []) == []

    def test_empty_item(self, matcher, catalog_products):
        assert matcher.find_matches(BOQLineItem(description=""), catalog_products) == []

    def test_ties_keep_catalog_order(self, matcher):
        products = [
            CatalogProduct(id="b", name="Laminate Sheet", category="Laminates"),
            CatalogProduct(id="a", name="Laminate Sheet", category="Laminates"),
        ]

        matches = matcher.find_matches(BOQLineItem(description="Laminate Sheet"), products)

        assert [m.product_id for m in matches] == ["b", "a"]
        assert matches[0].confidence == matches[1].confidence == pytest.approx(62.5)

    def test_confidence_bounded(self, matcher, catalog_products, plywood_item, weak_item, hinge_item):
        for item in (plywood_item, weak_item, hinge_item):
            for match in matcher.find_matches(item, catalog_products):
                assert 0.0 <= match.confidence <= 100.0
                assert match.matched_fields

    def test_scoring_failure_wrapped(self, matcher):
        broken = CatalogProduct(id=1, name=12345, category="Plywood")

        with pytest.raises(MatcherError):
            matcher.find_matches(BOQLineItem(description="Plywood"), [broken])


class TestBestMatch:
    def test_best_match(self, matcher, hinge_item, catalog_products):
        best = matcher.best_match(hinge_item, catalog_products)

        assert best.product_id == 2
        assert best.confidence == pytest.approx(((1 - 11 / 24) * 100 + 25) * 0.5 + 15)

    def test_no_match(self, matcher, catalog_products):
        assert matcher.best_match(BOQLineItem(description="Qzx Vvv"), catalog_products) is None

    def test_candidates_limited(self, matcher):
        products = [
            CatalogProduct(id=i, name="Laminate Sheet", category="Laminates")
            for i in range(1, 8)
        ]
        item = BOQLineItem(description="Laminate Sheet")

        assert len(matcher.candidates(item, products)) == 5
        assert [m.product_id for m in matcher.candidates(item, products, limit=2)] == [1, 2]


class TestAutoMatch:
    """Test document-level auto-match"""

    def test_annotates_items_above_threshold(self, matcher, plywood_item, weak_item, hinge_item, catalog_products):
        items = [plywood_item, weak_item, hinge_item]

        annotated = matcher.auto_match(items, catalog_products)

        assert len(annotated) == 3
        assert annotated[0].matched_product_id == 1
        assert annotated[0].confidence == 100.0
        assert annotated[0].matched_fields[0] == "Name: 125%"

        # 26.25 qualifies as a candidate but not for auto-match
        assert annotated[1] == weak_item
        assert annotated[1].matched_product_id is None

        assert annotated[2].matched_product_id == 2
        assert annotated[2].matched_fields == ("Name: 79%", "Brand: 100%", "Unit: 100%")

    def test_preserves_order_and_other_fields(self, matcher, plywood_item, hinge_item, catalog_products):
        annotated = matcher.auto_match([hinge_item, plywood_item], catalog_products)

        assert [i.description for i in annotated] == ["Hettich Hinge", "Century Plywood 12mm"]
        assert annotated[1].quantity == plywood_item.quantity
        assert annotated[1].amount == plywood_item.amount

    def test_input_items_not_mutated(self, matcher, plywood_item, catalog_products):
        matcher.auto_match([plywood_item], catalog_products)

        assert plywood_item.matched_product_id is None

    def test_empty_document(self, matcher, catalog_products):
        assert matcher.auto_match([], catalog_products) == []

    def test_idempotent(self, matcher, plywood_item, weak_item, hinge_item, catalog_products):
        once = matcher.auto_match([plywood_item, weak_item, hinge_item], catalog_products)

        assert matcher.auto_match(once, catalog_products) == once

    def test_configurable_threshold(self, weak_item, catalog_products):
        lenient = BOQMatcher(MatchingConfig(auto_match_threshold=25.0))

        annotated = lenient.auto_match([weak_item], catalog_products)

        assert annotated[0].matched_product_id == 3
        assert annotated[0].confidence == pytest.approx(26.25)

    def test_preparsed_fields_used(self, matcher, plywood):
        item = BOQLineItem(
            description="zzz",
            product_name="Century Plywood",
            thickness="12mm",
            brand="Century",
        )

        annotated = matcher.auto_match([item], [plywood])

        assert annotated[0].matched_product_id == 1
        assert annotated[0].confidence == pytest.approx(97.5)
        assert annotated[0].matched_fields == ("Name: 125%", "Thickness: 100%", "Brand: 100%")


class TestAssignAndSummary:
    def test_assign_scores_the_pair(self, matcher, plywood_item, catalog_products):
        item = matcher.assign_product(plywood_item, 1, catalog_products)

        assert item.matched_product_id == 1
        assert item.confidence == 100.0

    def test_assign_non_qualifying_pair(self, matcher, weak_item, catalog_products):
        item = matcher.assign_product(weak_item, 2, catalog_products)

        assert item.matched_product_id == 2
        assert item.confidence is None
        assert item.matched_fields is None

    def test_assign_matches_id_by_string_form(self, matcher, plywood_item, catalog_products):
        item = matcher.assign_product(plywood_item, "1", catalog_products)

        assert item.matched_product_id == 1
        assert item.confidence == 100.0

    def test_assign_unknown_product(self, matcher, plywood_item, catalog_products):
        with pytest.raises(KeyError):
            matcher.assign_product(plywood_item, 99, catalog_products)

    def test_assign_none_clears(self, matcher, plywood_item, catalog_products):
        matched = matcher.auto_match([plywood_item], catalog_products)[0]

        cleared = matcher.assign_product(matched, None, catalog_products)

        assert cleared == clear_match(matched) == plywood_item

    def test_summary(self, matcher, plywood_item, weak_item, hinge_item, catalog_products):
        annotated = matcher.auto_match([plywood_item, weak_item, hinge_item], catalog_products)

        summary = summarize(annotated)

        assert summary.total_items == 3
        assert summary.matched_items == 2
        assert summary.unmatched_items == 1
        assert summary.total_value == 28100


class TestModuleFunctions:
    """Default-configured convenience functions"""

    def test_find_product_matches(self, plywood_item, catalog_products):
        assert find_product_matches(plywood_item, catalog_products)[0].product_id == 1

    def test_get_best_match(self, weak_item, catalog_products):
        assert get_best_match(weak_item, catalog_products).product_id == 3

    def test_auto_match_boq_items(self, weak_item, hinge_item, catalog_products):
        annotated = auto_match_boq_items([weak_item, hinge_item], catalog_products)

        assert [i.matched_product_id for i in annotated] == [None, 2]
