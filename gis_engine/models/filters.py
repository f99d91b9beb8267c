"""Declarative feature filter model.

Layer configuration describes filters as loosely-shaped JSON.  Two
clause shapes are accepted:

- *typed*: ``{"type": "range" | "list" | "equals", "min", "max", "value"}``
- *shorthand*: a bare scalar (equals) or an array (list membership)

``FilterSpec.from_dict`` lowers every clause into the canonical typed
``FilterClause`` at construction time, so the evaluator only ever sees
one shape and configuration errors surface before any feature is
evaluated.

Accepted documents::

    {"PIN": "123456", "ACRES": {"type": "range", "min": 5}, "match": "any"}

    {"mode": "any", "clauses": [{"field": "PIN", "type": "equals", "value": "123456"}]}

A document is the explicit form only when its ``clauses`` member is a list
of clause mappings; otherwise ``clauses`` is an ordinary property name.
"""

from __future__ import annotations

import enum
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from gis_engine.core.exceptions import MalformedFilterClauseError

# Reserved key that selects the combination mode in the mapping form
MATCH_KEY = "match"
MODE_KEY = "mode"
CLAUSES_KEY = "clauses"

_COLLECTION_TYPES = (list, tuple, set, frozenset)


class MatchMode(enum.Enum):
    """How clause results are combined.

    Values:
        ALL: Every clause must match (short-circuits on the first miss).
        ANY: One matching clause suffices (short-circuits on the first hit).
    """

    ALL = "all"
    ANY = "any"

    @classmethod
    def parse(cls, value: object) -> MatchMode:
        """Parse a mode name (case-insensitive) or pass a ``MatchMode`` through.

        Raises:
            MalformedFilterClauseError: If *value* is not a known mode.
        """
        if isinstance(value, MatchMode):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        raise MalformedFilterClauseError("", f"unknown match mode {value!r}")


class ClauseType(enum.Enum):
    """Comparison performed by a clause."""

    RANGE = "range"
    LIST = "list"
    EQUALS = "equals"


@dataclass(frozen=True, slots=True)
class FilterClause:
    """A single canonical filter clause.

    Attributes:
        field: Feature property the clause reads.
        type: Comparison to perform.
        value: Expected value (EQUALS) or tuple of accepted values (LIST).
        min: Exclusive lower bound (RANGE); ``None`` means unbounded.
        max: Exclusive upper bound (RANGE); ``None`` means unbounded.
    """

    field: str
    type: ClauseType
    value: object = None
    min: object = None
    max: object = None

    @classmethod
    def equals(cls, field: str, value: object) -> FilterClause:
        return cls(field=field, type=ClauseType.EQUALS, value=value)

    @classmethod
    def one_of(cls, field: str, values: Sequence[object] | set[object] | frozenset[object]) -> FilterClause:
        return cls(field=field, type=ClauseType.LIST, value=tuple(values))

    @classmethod
    def between(cls, field: str, min: object = None, max: object = None) -> FilterClause:  # noqa: A002
        return cls(field=field, type=ClauseType.RANGE, min=min, max=max)

    @classmethod
    def from_definition(cls, field: str, definition: object) -> FilterClause:
        """Normalise one clause definition for *field*.

        Raises:
            MalformedFilterClauseError: If the definition has no recognisable shape.
        """
        if not isinstance(field, str) or not field:
            raise MalformedFilterClauseError("", "clause has no field name")

        if isinstance(definition, _COLLECTION_TYPES):
            return cls.one_of(field, definition)

        if isinstance(definition, Mapping):
            return _typed_clause(field, definition)

        return cls.equals(field, definition)

    def to_dict(self) -> dict[str, object]:
        """Serialise to the explicit typed clause form."""
        payload: dict[str, object] = {"field": self.field, "type": self.type.value}
        if self.type is ClauseType.RANGE:
            payload["min"] = self.min
            payload["max"] = self.max
        elif self.type is ClauseType.LIST:
            payload["value"] = list(self.value)  # type: ignore[call-overload]
        else:
            payload["value"] = self.value
        return payload


@dataclass(frozen=True, slots=True)
class FilterSpec:
    """An ordered set of clauses plus a combination mode.

    Clause order is evaluation order; it affects only when evaluation
    short-circuits, never the result.

    Attributes:
        clauses: Canonical clauses in evaluation order.
        mode: How clause results are combined.
    """

    clauses: tuple[FilterClause, ...] = ()
    mode: MatchMode = MatchMode.ALL

    @classmethod
    def from_dict(
        cls,
        data: Mapping[str, object],
        *,
        default_mode: MatchMode | str = MatchMode.ALL,
    ) -> FilterSpec:
        """Build a spec from either accepted JSON form.

        Args:
            data: Mapping form (``{field: definition, ..., "match": mode}``)
                or explicit form (``{"mode": mode, "clauses": [...]}``).
            default_mode: Mode used when the document does not name one.

        Raises:
            MalformedFilterClauseError: If a clause or the mode is unrecognisable.
        """
        if not isinstance(data, Mapping):
            raise MalformedFilterClauseError("", f"filter must be a mapping, got {type(data).__name__}")

        if _is_explicit(data):
            return _from_explicit(data, default_mode)

        mode = MatchMode.parse(data.get(MATCH_KEY, default_mode))
        clauses = tuple(
            FilterClause.from_definition(field, definition)
            for field, definition in data.items()
            if field != MATCH_KEY
        )
        return cls(clauses=clauses, mode=mode)

    def to_dict(self) -> dict[str, object]:
        """Serialise to the explicit form."""
        return {
            MODE_KEY: self.mode.value,
            CLAUSES_KEY: [clause.to_dict() for clause in self.clauses],
        }


# ---------------------------------------------------------------------------
# Normalisation helpers
# ---------------------------------------------------------------------------


def _is_explicit(data: Mapping[str, object]) -> bool:
    """Whether *data* is the explicit form.

    ``clauses`` selects it only when it holds a list of clause mappings;
    any other value is a shorthand clause on a property named ``clauses``.
    """
    raw_clauses = data.get(CLAUSES_KEY)
    return isinstance(raw_clauses, list | tuple) and all(isinstance(raw, Mapping) for raw in raw_clauses)


def _from_explicit(data: Mapping[str, object], default_mode: MatchMode | str) -> FilterSpec:
    clauses = []
    for raw in data[CLAUSES_KEY]:  # type: ignore[attr-defined]
        field = raw.get("field")
        if not isinstance(field, str) or not field:
            raise MalformedFilterClauseError("", "clause has no field name")
        if "type" in raw:
            clauses.append(_typed_clause(field, raw))
        elif "value" in raw:
            clauses.append(FilterClause.from_definition(field, raw["value"]))
        else:
            raise MalformedFilterClauseError(field, "clause has neither a type nor a value")

    mode = MatchMode.parse(data.get(MODE_KEY, data.get(MATCH_KEY, default_mode)))
    return FilterSpec(clauses=tuple(clauses), mode=mode)


def _typed_clause(field: str, definition: Mapping[str, object]) -> FilterClause:
    """Lower a ``{"type": ...}`` definition, validating the members its type needs."""
    raw_type = definition.get("type")
    if raw_type is None:
        raise MalformedFilterClauseError(field, "mapping definition has no 'type'")
    try:
        clause_type = ClauseType(str(raw_type).strip().lower())
    except ValueError:
        raise MalformedFilterClauseError(field, f"unknown clause type {raw_type!r}") from None

    if clause_type is ClauseType.RANGE:
        return FilterClause.between(field, definition.get("min"), definition.get("max"))

    if "value" not in definition:
        raise MalformedFilterClauseError(field, f"{clause_type.value} clause requires a 'value'")
    value = definition["value"]

    if clause_type is ClauseType.LIST:
        if not isinstance(value, _COLLECTION_TYPES):
            raise MalformedFilterClauseError(field, f"list clause value must be a list, got {type(value).__name__}")
        return FilterClause.one_of(field, value)

    return FilterClause.equals(field, value)
