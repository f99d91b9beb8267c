"""Unit tests for filter predicate evaluation.

Covers:
- ALL / ANY combination and short-circuiting
- Empty specs
- RANGE (exclusive bounds, open sides), LIST and EQUALS clauses
- Missing properties and incomparable values
- Raw mapping specs normalised on the fly
"""

from __future__ import annotations

import itertools

import pytest

from gis_engine.core.exceptions import MalformedFilterClauseError
from gis_engine.models.feature import Feature
from gis_engine.models.filters import ClauseType, FilterClause, FilterSpec, MatchMode
from gis_engine.operations.evaluate import (
    clause_match,
    feature_match,
    in_list,
    in_range,
    matches,
    strict_equals,
)


def _feature(**properties: object) -> Feature:
    return Feature(properties=dict(properties))


# ===========================================================================
# Combination modes
# ===========================================================================


class TestMatchModes:
    """ALL / ANY semantics and the empty-spec results."""

    def test_all_requires_every_clause(self) -> None:
        spec = FilterSpec(
            clauses=(FilterClause.equals("ZONING", "R1"), FilterClause.between("ACRES", min=1)),
        )
        assert feature_match(_feature(ZONING="R1", ACRES=2), spec) is True
        assert feature_match(_feature(ZONING="R1", ACRES=0.5), spec) is False

    def test_any_requires_one_clause(self) -> None:
        spec = FilterSpec(
            clauses=(FilterClause.equals("ZONING", "R1"), FilterClause.between("ACRES", min=100)),
            mode=MatchMode.ANY,
        )
        assert feature_match(_feature(ZONING="R1", ACRES=2), spec) is True
        assert feature_match(_feature(ZONING="C2", ACRES=200), spec) is True
        assert feature_match(_feature(ZONING="C2", ACRES=2), spec) is False

    def test_empty_all_is_true(self) -> None:
        assert feature_match(_feature(A=1), FilterSpec()) is True

    def test_empty_any_is_false(self) -> None:
        assert feature_match(_feature(A=1), FilterSpec(mode=MatchMode.ANY)) is False

    def test_matches_alias(self) -> None:
        assert matches is feature_match


class TestShortCircuit:
    """Evaluation stops at the deciding clause."""

    def test_all_stops_at_first_failure(self) -> None:
        seen: list[str] = []

        class Props(dict):
            def get(self, key: str, default: object = None) -> object:
                seen.append(key)
                return super().get(key, default)

        feature = Feature(properties=Props(A=1, B=2, C=3))
        spec = FilterSpec(
            clauses=(
                FilterClause.equals("A", 1),
                FilterClause.equals("B", 99),
                FilterClause.equals("C", 3),
            )
        )
        assert feature_match(feature, spec) is False
        assert seen == ["A", "B"]

    def test_any_stops_at_first_success(self) -> None:
        seen: list[str] = []

        class Props(dict):
            def get(self, key: str, default: object = None) -> object:
                seen.append(key)
                return super().get(key, default)

        feature = Feature(properties=Props(A=1, B=2, C=3))
        spec = FilterSpec(
            clauses=(
                FilterClause.equals("A", 0),
                FilterClause.equals("B", 2),
                FilterClause.equals("C", 3),
            ),
            mode=MatchMode.ANY,
        )
        assert feature_match(feature, spec) is True
        assert seen == ["A", "B"]


class TestCompositionProperties:
    """ALL is the conjunction and ANY the disjunction of single-clause results."""

    CLAUSES = (
        FilterClause.equals("ZONING", "R1"),
        FilterClause.one_of("ZONING", ["R1", "R2"]),
        FilterClause.between("ACRES", min=5),
        FilterClause.between("ACRES", max=5),
        FilterClause.equals("MISSING", 1),
    )
    FEATURES = (
        Feature(properties={"ZONING": "R1", "ACRES": 2.0}),
        Feature(properties={"ZONING": "R2", "ACRES": 12.0}),
        Feature(properties={"ZONING": "AG"}),
    )

    @pytest.mark.parametrize(("a", "b"), list(itertools.product(CLAUSES, repeat=2)))
    def test_all_is_conjunction(self, a: FilterClause, b: FilterClause) -> None:
        for feature in self.FEATURES:
            combined = feature_match(feature, FilterSpec(clauses=(a, b)))
            assert combined == (
                feature_match(feature, FilterSpec(clauses=(a,))) and feature_match(feature, FilterSpec(clauses=(b,)))
            )

    @pytest.mark.parametrize(("a", "b"), list(itertools.product(CLAUSES, repeat=2)))
    def test_any_is_disjunction(self, a: FilterClause, b: FilterClause) -> None:
        for feature in self.FEATURES:
            combined = feature_match(feature, FilterSpec(clauses=(a, b), mode=MatchMode.ANY))
            assert combined == (
                feature_match(feature, FilterSpec(clauses=(a,), mode=MatchMode.ANY))
                or feature_match(feature, FilterSpec(clauses=(b,), mode=MatchMode.ANY))
            )

    def test_clause_order_does_not_change_result(self) -> None:
        for feature in self.FEATURES:
            for mode in MatchMode:
                results = {
                    feature_match(feature, FilterSpec(clauses=perm, mode=mode))
                    for perm in itertools.permutations(self.CLAUSES[:4])
                }
                assert len(results) == 1


# ===========================================================================
# Clause semantics
# ===========================================================================


class TestRange:
    """Exclusive bounds with open sides."""

    def test_both_bounds_exclusive(self) -> None:
        assert in_range(5, 1, 10) is True
        assert in_range(1, 1, 10) is False
        assert in_range(10, 1, 10) is False

    def test_min_only(self) -> None:
        assert in_range(5, min=1) is True
        assert in_range(1, min=1) is False

    def test_max_only(self) -> None:
        assert in_range(5, max=10) is True
        assert in_range(10, max=10) is False

    def test_no_bounds_is_vacuously_true(self) -> None:
        assert in_range(-1e9) is True

    def test_none_value_is_out_of_bounded_range(self) -> None:
        assert in_range(None, 0, 10) is False
        assert in_range(None, min=0) is False

    def test_null_property_passes_unbounded_range(self) -> None:
        feature = Feature(properties={"OWNER": None})
        assert feature_match(feature, FilterSpec((FilterClause.between("OWNER"),))) is True

    def test_missing_property_fails_unbounded_range(self) -> None:
        assert feature_match(Feature(properties={}), FilterSpec((FilterClause.between("OWNER"),))) is False

    def test_incomparable_value_is_out_of_range(self) -> None:
        assert in_range("abc", 0, 10) is False

    def test_string_ranges_compare_lexically(self) -> None:
        assert in_range("m", "a", "z") is True


class TestListAndEquals:
    """Membership and strict equality."""

    def test_in_list(self) -> None:
        assert in_list("R1", ("R1", "R2")) is True
        assert in_list("C2", ("R1", "R2")) is False

    def test_strict_equals_distinguishes_bool_and_number(self) -> None:
        assert strict_equals(True, 1) is False
        assert strict_equals(0, False) is False
        assert strict_equals(True, True) is True

    def test_strict_equals_does_not_coerce_strings(self) -> None:
        assert strict_equals("1", 1) is False

    def test_int_and_float_are_equal(self) -> None:
        assert strict_equals(2, 2.0) is True

    def test_list_membership_is_strict(self) -> None:
        assert in_list(1, (True, "1")) is False

    def test_null_property_equals_none(self) -> None:
        clause = FilterClause.equals("VACANT", None)
        assert clause_match({"VACANT": None}, clause) is True


class TestMissingProperties:
    """A property absent from the feature fails every clause type."""

    @pytest.mark.parametrize(
        "clause",
        [
            FilterClause.equals("NOPE", None),
            FilterClause.one_of("NOPE", [None]),
            FilterClause.between("NOPE"),
            FilterClause(field="NOPE", type=ClauseType.RANGE, min=0, max=1),
        ],
    )
    def test_missing_field_fails(self, clause: FilterClause) -> None:
        assert clause_match({"OTHER": 1}, clause) is False


# ===========================================================================
# Raw mapping specs
# ===========================================================================


class TestRawSpecs:
    """Mapping filters are normalised before evaluation."""

    def test_shorthand_equals(self) -> None:
        assert feature_match(_feature(PIN="123456"), {"PIN": "123456"}) is True

    def test_shorthand_list(self) -> None:
        assert feature_match(_feature(ZONING="R2"), {"ZONING": ["R1", "R2"]}) is True

    def test_typed_range(self) -> None:
        spec = {"ACRES": {"type": "range", "min": 10, "max": 50}}
        assert feature_match(_feature(ACRES=40), spec) is True
        assert feature_match(_feature(ACRES=50), spec) is False

    def test_match_any_key(self) -> None:
        spec = {"ZONING": "R1", "ACRES": {"type": "range", "min": 100}, "match": "any"}
        assert feature_match(_feature(ZONING="R1", ACRES=1), spec) is True

    def test_default_mode_applies_when_unstated(self) -> None:
        spec = {"ZONING": "R1", "ACRES": {"type": "range", "min": 100}}
        assert feature_match(_feature(ZONING="R1", ACRES=1), spec, default_mode="any") is True
        assert feature_match(_feature(ZONING="R1", ACRES=1), spec) is False

    def test_malformed_clause_raises(self) -> None:
        with pytest.raises(MalformedFilterClauseError):
            feature_match(_feature(A=1), {"A": {"min": 1}})
