"""Unified engine exception taxonomy.

Every domain exception inherits from ``EngineError`` and carries
structured context fields (stage, code) so callers can report failures
consistently without parsing messages.

Taxonomy categories
-------------------
- ``ValidationError``     : caller supplied a value outside a closed domain
  (unknown unit symbol, malformed snapshot).
- ``ConfigurationError``  : declarative configuration cannot be understood
  (malformed filter clause, bad environment settings).
- ``LookupFailure``       : a referenced entity does not exist
  (missing map source, unknown projection id).

Non-matching features, unset extent bounds and unsupported geometry
kinds are normal outcomes and never raise.

Every exception exposes ``to_error_dict()`` for a stable structured
error payload suitable for logging.
"""

from __future__ import annotations


class EngineError(Exception):
    """Base exception for all engine-domain errors.

    Attributes:
        message: Human-readable error description.
        stage: Engine component where the error occurred
            (e.g. ``"units"``, ``"filters"``, ``"catalog"``).
        code: Machine-readable error code (e.g. ``"UNKNOWN_UNIT"``).
    """

    #: Default stage for subclasses (override via class attribute or kwarg).
    default_stage: str = ""
    #: Default code for subclasses (override via class attribute or kwarg).
    default_code: str = ""

    def __init__(
        self,
        message: str = "",
        *,
        stage: str = "",
        code: str = "",
    ) -> None:
        self.message = message
        self.stage = stage or self.default_stage
        self.code = code or self.default_code
        super().__init__(message)

    @property
    def category(self) -> str:
        """Return the error category based on concrete class."""
        if isinstance(self, ValidationError):
            return "validation"
        if isinstance(self, ConfigurationError):
            return "configuration"
        if isinstance(self, LookupFailure):
            return "lookup"
        return "engine"

    def to_error_dict(self) -> dict[str, object]:
        """Return a structured error payload with stable keys."""
        return {
            "category": self.category,
            "code": self.code,
            "stage": self.stage,
            "message": self.message,
        }


# ---------------------------------------------------------------------------
# Category base classes
# ---------------------------------------------------------------------------


class ValidationError(EngineError):
    """A value fell outside a closed domain."""


class ConfigurationError(EngineError):
    """Declarative configuration could not be interpreted."""


class LookupFailure(EngineError):
    """A referenced entity is absent."""


# ---------------------------------------------------------------------------
# Concrete errors
# ---------------------------------------------------------------------------


class UnknownUnitError(ValidationError):
    """Raised when a unit symbol is not in the unit table.

    Attributes:
        unit: The offending symbol.
    """

    default_stage = "units"
    default_code = "UNKNOWN_UNIT"

    def __init__(self, unit: object, known: tuple[str, ...] = ()) -> None:
        self.unit = unit
        message = f"Unknown unit {unit!r}"
        if known:
            message += f" (expected one of: {', '.join(known)})"
        super().__init__(message)


class MalformedFilterClauseError(ConfigurationError):
    """Raised when a filter clause has no recognisable shape.

    Attributes:
        field: Field name of the clause, or ``""`` when it has none.
    """

    default_stage = "filters"
    default_code = "FILTER_CLAUSE_MALFORMED"

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        prefix = f"Filter clause {field!r}" if field else "Filter clause"
        super().__init__(f"{prefix}: {message}")


class MissingMapSourceError(LookupFailure):
    """Raised when a catalog layer references a map source absent from the snapshot.

    Catalog resolution catches this and treats the layer as off.

    Attributes:
        map_source_name: Name of the missing map source.
    """

    default_stage = "catalog"
    default_code = "MAP_SOURCE_MISSING"

    def __init__(self, map_source_name: str, message: str = "") -> None:
        self.map_source_name = map_source_name
        super().__init__(message or f"Map source {map_source_name!r} is not loaded")


class UnknownProjectionError(LookupFailure):
    """Raised when a projection id is not registered or cannot be derived."""

    default_stage = "projections"
    default_code = "PROJECTION_UNKNOWN"


class SnapshotValidationError(ValidationError):
    """Raised when a map-source snapshot does not match the expected schema."""

    default_stage = "snapshot"
    default_code = "SNAPSHOT_INVALID"
