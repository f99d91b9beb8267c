"""Filter predicate evaluation.

Decides whether one feature's properties satisfy a ``FilterSpec``.

Combination semantics:
- ``ALL``: true iff every clause is true; stops at the first false clause.
  An empty spec is true.
- ``ANY``: true iff some clause is true; stops at the first true clause.
  An empty spec is false.

Clause semantics:
- ``RANGE``: ``min < value < max``; a ``None`` bound is unbounded on that
  side, and with both bounds absent any present value (null included) is
  in range.
- ``LIST``: membership, using the same strict equality as ``EQUALS``.
- ``EQUALS``: strict equality; booleans never equal numbers.

A property missing from the feature fails every clause type, and values
that cannot be ordered against a bound are out of range.  Evaluation
never raises for a well-formed spec.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING

from gis_engine.models.filters import ClauseType, FilterSpec, MatchMode

if TYPE_CHECKING:
    from gis_engine.models.feature import Feature
    from gis_engine.models.filters import FilterClause

_MISSING = object()


def feature_match(
    feature: Feature,
    spec: FilterSpec | Mapping[str, object],
    *,
    default_mode: MatchMode | str = MatchMode.ALL,
) -> bool:
    """Check whether *feature* satisfies *spec*.

    Args:
        feature: The feature to test.
        spec: A canonical spec, or a raw filter mapping that is normalised
            first (``default_mode`` applies when it names no mode).

    Raises:
        MalformedFilterClauseError: If a raw mapping cannot be normalised.
    """
    if not isinstance(spec, FilterSpec):
        spec = FilterSpec.from_dict(spec, default_mode=default_mode)

    match_all = spec.mode is MatchMode.ALL
    for clause in spec.clauses:
        result = clause_match(feature.properties, clause)
        if result and not match_all:
            return True
        if not result and match_all:
            return False

    # Reaching here: ALL saw no miss, ANY saw no hit
    return match_all


matches = feature_match


def clause_match(properties: Mapping[str, object], clause: FilterClause) -> bool:
    """Evaluate a single canonical clause against a property mapping."""
    value = properties.get(clause.field, _MISSING)
    if value is _MISSING:
        return False

    if clause.type is ClauseType.RANGE:
        return in_range(value, clause.min, clause.max)
    if clause.type is ClauseType.LIST:
        return in_list(value, clause.value)  # type: ignore[arg-type]
    return strict_equals(value, clause.value)


def in_range(value: object, min: object = None, max: object = None) -> bool:  # noqa: A002
    """Return whether *value* lies strictly between the given bounds.

    ``None`` bounds are unbounded; with no bounds at all every value,
    ``None`` included, is in range.  Otherwise ``None`` values and values
    that cannot be compared with a bound are out of range.
    """
    if min is None and max is None:
        return True
    if value is None:
        return False
    try:
        if min is not None and not min < value:  # type: ignore[operator]
            return False
        if max is not None and not value < max:  # type: ignore[operator]
            return False
    except TypeError:
        return False
    return True


def in_list(value: object, values: Iterable[object]) -> bool:
    """Return whether *value* strictly equals any member of *values*."""
    return any(strict_equals(value, candidate) for candidate in values)


def strict_equals(a: object, b: object) -> bool:
    """Equality that never equates a boolean with a number."""
    if isinstance(a, bool) is not isinstance(b, bool):
        return False
    return a == b
