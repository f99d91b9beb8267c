"""UTM zone lookup and projection registry setup.

``build_utm_projections`` registers every WGS 84 / UTM zone definition
into a caller-supplied projection registry so measurements and buffers
can be computed in metres:

- zones 1-60, northern and southern hemisphere (zone-major order);
- each definition under its EPSG id (``EPSG:326zz`` north,
  ``EPSG:327zz`` south);
- each definition again under a readable alias (``UTM15N``), copied
  from the EPSG entry through ``registry.lookup``.

The registry is written once during application setup; callers must
finish this before any concurrent reader consults it.

``utm_zone`` uses the historical heuristic ``floor(lon / 6 + 30) + 1``
with ``N`` only for strictly positive latitudes.  It is kept as-is for
compatibility: it is not geodetically cited, points on the equator are
labelled ``S``, and a longitude of exactly 180 yields zone 61.
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING, Protocol

from gis_engine.core.constants import (
    EPSG_UTM_NORTH_BASE,
    EPSG_UTM_SOUTH_OFFSET,
    HEMISPHERE_NORTH,
    HEMISPHERE_SOUTH,
    HEMISPHERES,
    LEGACY_UTM_PROJ_TEMPLATE,
    UTM_MAX_ZONE,
    UTM_MIN_ZONE,
    UTM_PROJ_TEMPLATE,
    UTM_ZONE_WIDTH_DEG,
)
from gis_engine.core.exceptions import UnknownProjectionError

if TYPE_CHECKING:
    from collections.abc import Iterator

    from pyproj import CRS

logger = logging.getLogger("gis_engine.operations.projections")


# ---------------------------------------------------------------------------
# Registry contract
# ---------------------------------------------------------------------------


class ProjectionRegistry(Protocol):
    """Projection registry the builder writes into (e.g. a proj4 ``defs`` bridge)."""

    def define(self, projection_id: str, proj_string: str) -> None: ...

    def lookup(self, projection_id: str) -> str: ...


class InMemoryProjectionRegistry:
    """Dictionary-backed ``ProjectionRegistry``.

    Redefining an id replaces its previous definition.
    """

    def __init__(self) -> None:
        self._definitions: dict[str, str] = {}

    def define(self, projection_id: str, proj_string: str) -> None:
        self._definitions[projection_id] = proj_string

    def lookup(self, projection_id: str) -> str:
        """Return the proj-string registered under *projection_id*.

        Raises:
            UnknownProjectionError: If the id was never defined.
        """
        try:
            return self._definitions[projection_id]
        except KeyError:
            msg = f"Projection {projection_id!r} is not defined"
            raise UnknownProjectionError(msg) from None

    def __contains__(self, projection_id: object) -> bool:
        return projection_id in self._definitions

    def __len__(self) -> int:
        return len(self._definitions)

    def __iter__(self) -> Iterator[str]:
        return iter(self._definitions)


# ---------------------------------------------------------------------------
# Zone naming
# ---------------------------------------------------------------------------


def utm_zone(lon: float, lat: float) -> str:
    """Return the UTM label (e.g. ``"UTM15N"``) for a WGS 84 / NAD83 point."""
    zone = _zone_number(lon)
    hemisphere = "N" if lat > 0 else "S"
    return f"UTM{zone}{hemisphere}"


def utm_epsg_code(zone: int, hemisphere: str) -> int:
    """Return the EPSG code of a WGS 84 / UTM zone.

    Raises:
        UnknownProjectionError: If *zone* or *hemisphere* is out of range.
    """
    _check_zone(zone, hemisphere)
    return EPSG_UTM_NORTH_BASE + zone + (0 if hemisphere == HEMISPHERE_NORTH else EPSG_UTM_SOUTH_OFFSET)


def utm_alias(zone: int, hemisphere: str) -> str:
    """Return the readable alias of a zone, e.g. ``"UTM15N"``."""
    _check_zone(zone, hemisphere)
    return f"UTM{zone}{'N' if hemisphere == HEMISPHERE_NORTH else 'S'}"


def utm_proj_string(zone: int, hemisphere: str, *, legacy_spacing: bool = True) -> str:
    """Return the proj-string of a zone.

    With *legacy_spacing* the historical form is kept byte-for-byte
    (``+north+datum=WGS84``, no separating space).
    """
    _check_zone(zone, hemisphere)
    template = LEGACY_UTM_PROJ_TEMPLATE if legacy_spacing else UTM_PROJ_TEMPLATE
    return template.format(zone=zone, hemisphere=hemisphere)


def iter_utm_zones() -> Iterator[tuple[int, str]]:
    """Yield ``(zone, hemisphere)`` pairs, zone-major, north before south."""
    for zone in range(UTM_MIN_ZONE, UTM_MAX_ZONE + 1):
        for hemisphere in HEMISPHERES:
            yield zone, hemisphere


# ---------------------------------------------------------------------------
# Registry builder
# ---------------------------------------------------------------------------


def build_utm_projections(registry: ProjectionRegistry, *, legacy_spacing: bool = True) -> int:
    """Register all UTM zones under their EPSG ids and aliases.

    Args:
        registry: Target registry; written to, never replaced.
        legacy_spacing: Keep the historical proj-string spacing.

    Returns:
        Number of ``define`` calls made (120 definitions + 120 aliases).
    """
    defined = 0
    for zone, hemisphere in iter_utm_zones():
        projection_id = f"EPSG:{utm_epsg_code(zone, hemisphere)}"
        registry.define(projection_id, utm_proj_string(zone, hemisphere, legacy_spacing=legacy_spacing))
        registry.define(utm_alias(zone, hemisphere), registry.lookup(projection_id))
        defined += 2

    logger.info("UTM projections registered | definitions=%d | legacy_spacing=%s", defined, legacy_spacing)
    return defined


# ---------------------------------------------------------------------------
# pyproj bridge
# ---------------------------------------------------------------------------


def utm_crs(lon: float, lat: float) -> CRS:
    """Return the pyproj CRS of the zone ``utm_zone`` assigns to a point.

    Raises:
        UnknownProjectionError: If the heuristic yields a zone outside 1-60
            (longitudes of 180 or more, or below -180).
    """
    from pyproj import CRS

    zone = _zone_number(lon)
    hemisphere = HEMISPHERE_NORTH if lat > 0 else HEMISPHERE_SOUTH
    return CRS.from_epsg(utm_epsg_code(zone, hemisphere))


def _zone_number(lon: float) -> int:
    return math.floor(lon / UTM_ZONE_WIDTH_DEG + 30) + 1


def _check_zone(zone: int, hemisphere: str) -> None:
    if not UTM_MIN_ZONE <= zone <= UTM_MAX_ZONE:
        msg = f"UTM zone {zone} is outside [{UTM_MIN_ZONE}, {UTM_MAX_ZONE}]"
        raise UnknownProjectionError(msg)
    if hemisphere not in HEMISPHERES:
        msg = f"Unknown hemisphere {hemisphere!r} (expected one of: {', '.join(HEMISPHERES)})"
        raise UnknownProjectionError(msg)
