"""Feature set operations: select, exclude, bulk-edit and retype features.

Every operation returns a freshly built list and leaves the input
sequence and its Feature objects untouched.  Input order is preserved.

A filter may be given as a ``FilterSpec``, a raw filter mapping
(normalised up front, so malformed clauses fail before any feature is
visited) or any callable predicate ``Feature -> bool`` compiled
elsewhere.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable, Mapping, Sequence
from typing import TYPE_CHECKING, Union

from gis_engine.models.filters import FilterSpec, MatchMode
from gis_engine.operations.evaluate import feature_match
from gis_engine.utils.helpers import parse_boolean

if TYPE_CHECKING:
    from gis_engine.models.contracts import Scalar
    from gis_engine.models.feature import Feature

logger = logging.getLogger("gis_engine.operations.feature_set")

FeaturePredicate = Callable[["Feature"], bool]
FilterLike = Union[FilterSpec, Mapping[str, object], FeaturePredicate]

# Property type transforms
TRANSFORM_STRING = "string"
TRANSFORM_NUMBER = "number"
TRANSFORM_BOOLEAN = "boolean"


def compile_filter(
    spec: FilterLike,
    *,
    default_mode: MatchMode | str = MatchMode.ALL,
) -> FeaturePredicate:
    """Turn any accepted filter form into a predicate.

    Raises:
        MalformedFilterClauseError: If a raw mapping cannot be normalised.
    """
    if isinstance(spec, Mapping):
        spec = FilterSpec.from_dict(spec, default_mode=default_mode)
    if isinstance(spec, FilterSpec):
        canonical = spec
        return lambda feature: feature_match(feature, canonical)
    return spec


def filter_features(
    features: Sequence[Feature],
    spec: FilterLike,
    inverse: bool = True,
    *,
    default_mode: MatchMode | str = MatchMode.ALL,
) -> list[Feature]:
    """Keep each feature whose match result differs from *inverse*.

    Args:
        features: Input features (not modified).
        spec: Filter to apply.
        inverse: When ``True`` (default) matching features are removed;
            when ``False`` only matching features are kept.

    Returns:
        A new list in input order.
    """
    predicate = compile_filter(spec, default_mode=default_mode)
    kept = [feature for feature in features if bool(predicate(feature)) != inverse]
    logger.debug(
        "Features filtered | input=%d | kept=%d | inverse=%s",
        len(features),
        len(kept),
        inverse,
    )
    return kept


def match_features(
    features: Sequence[Feature],
    spec: FilterLike | None,
    *,
    default_mode: MatchMode | str = MatchMode.ALL,
) -> Sequence[Feature]:
    """Return the features matching *spec*.

    With no filter (``None`` or ``False``) the input sequence itself is
    returned, not a copy.
    """
    if spec is None or spec is False:
        return features
    return filter_features(features, spec, inverse=False, default_mode=default_mode)


def change_features(
    features: Sequence[Feature],
    spec: FilterSpec | Mapping[str, object],
    patch: Mapping[str, Scalar],
    *,
    default_mode: MatchMode | str = MatchMode.ALL,
) -> list[Feature]:
    """Overwrite properties on every matching feature.

    Matching features are replaced by copies whose properties are the
    existing ones overridden by *patch*; geometry is shared unchanged.
    Non-matching features are carried over as-is.
    """
    if not isinstance(spec, FilterSpec):
        spec = FilterSpec.from_dict(spec, default_mode=default_mode)

    changed = 0
    result: list[Feature] = []
    for feature in features:
        if feature_match(feature, spec):
            result.append(feature.with_properties(patch))
            changed += 1
        else:
            result.append(feature)

    logger.debug("Features changed | input=%d | changed=%d | keys=%s", len(features), changed, sorted(patch))
    return result


def transform_features(transforms: object, features: Sequence[Feature]) -> Sequence[Feature]:
    """Coerce property types according to *transforms*.

    Args:
        transforms: ``{field: "string" | "number" | "boolean"}``.  Any
            non-mapping value disables the transform and returns the
            input sequence itself.
        features: Input features (not modified).

    Returns:
        New features with coerced values.  Unknown transform names and
        properties absent from a feature are left alone; ``"number"``
        yields ``nan`` for values that do not parse.
    """
    if not isinstance(transforms, Mapping):
        return features

    result: list[Feature] = []
    for feature in features:
        patch = {
            prop: _coerce(feature.properties[prop], kind)
            for prop, kind in transforms.items()
            if prop in feature.properties
        }
        result.append(feature.with_properties(patch) if patch else feature)
    return result


def _coerce(value: Scalar, kind: object) -> Scalar:
    if kind == TRANSFORM_STRING:
        return "" if value is None else str(value)
    if kind == TRANSFORM_NUMBER:
        try:
            return float(value)  # type: ignore[arg-type]
        except (TypeError, ValueError):
            return math.nan
    if kind == TRANSFORM_BOOLEAN:
        return parse_boolean(value)
    return value
