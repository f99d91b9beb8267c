"""Length and area unit conversion.

Conversions scale by meters-equivalent ratios drawn from an explicit,
immutable ``UnitTable``::

    length: value * meters(from) / meters(to)
    area:   value * meters(from)**2 / meters(to)**2

The unit set is closed.  A symbol outside the table raises
``UnknownUnitError`` instead of producing ``nan``.
"""

from __future__ import annotations

import enum
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from gis_engine.core.constants import METERS_PER_UNIT
from gis_engine.core.exceptions import UnknownUnitError


class UnitSymbol(enum.Enum):
    """Supported linear unit symbols."""

    FOOT = "ft"
    YARD = "yd"
    MILE = "mi"
    INCH = "in"
    METER = "m"
    KILOMETER = "km"
    CHAIN = "ch"
    ACRE_SIDE = "a"
    HECTARE_SIDE = "h"


@dataclass(frozen=True, slots=True)
class UnitTable:
    """Immutable mapping of unit symbol to meters-equivalent.

    Attributes:
        meters: Read-only ``{symbol: meters per unit}``.
    """

    meters: Mapping[str, float] = field(default_factory=lambda: METERS_PER_UNIT)

    def __post_init__(self) -> None:
        if not isinstance(self.meters, MappingProxyType):
            object.__setattr__(self, "meters", MappingProxyType(dict(self.meters)))

    @property
    def symbols(self) -> tuple[str, ...]:
        return tuple(self.meters)

    def meters_per(self, unit: UnitSymbol | str) -> float:
        """Return the meters-equivalent of one *unit*.

        Raises:
            UnknownUnitError: If *unit* is not in the table.
        """
        symbol = unit.value if isinstance(unit, UnitSymbol) else unit
        try:
            return self.meters[symbol]
        except (KeyError, TypeError):
            raise UnknownUnitError(unit, self.symbols) from None


DEFAULT_UNIT_TABLE = UnitTable()


def convert_length(
    value: float,
    from_units: UnitSymbol | str,
    to_units: UnitSymbol | str,
    *,
    table: UnitTable = DEFAULT_UNIT_TABLE,
) -> float:
    """Convert a length between units.

    Raises:
        UnknownUnitError: If either unit is not in *table*.
    """
    return value * table.meters_per(from_units) / table.meters_per(to_units)


def convert_area(
    value: float,
    from_units: UnitSymbol | str,
    to_units: UnitSymbol | str,
    *,
    table: UnitTable = DEFAULT_UNIT_TABLE,
) -> float:
    """Convert an area between (squared) units.

    Raises:
        UnknownUnitError: If either unit is not in *table*.
    """
    return value * table.meters_per(from_units) ** 2 / table.meters_per(to_units) ** 2


def meters_length_to_units(meters: float, units: UnitSymbol | str, *, table: UnitTable = DEFAULT_UNIT_TABLE) -> float:
    """Convert a length in metres to *units*."""
    return convert_length(meters, UnitSymbol.METER, units, table=table)


def meters_area_to_units(
    square_meters: float,
    units: UnitSymbol | str,
    *,
    table: UnitTable = DEFAULT_UNIT_TABLE,
) -> float:
    """Convert an area in square metres to *units* squared."""
    return convert_area(square_meters, UnitSymbol.METER, units, table=table)
