"""Shared engine constants: the single source of truth.

Centralises the linear unit table, the UTM zone/EPSG numbering and the
proj-string templates used by the projection builder.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Final

# ---------------------------------------------------------------------------
# Linear units (meters-equivalent per unit)
# ---------------------------------------------------------------------------

METERS_PER_UNIT: Final = MappingProxyType(
    {
        "ft": 0.3048,
        "yd": 0.9144,
        "mi": 1609.347,
        "in": 0.0254,
        "m": 1.0,
        "km": 1000.0,
        "ch": 20.11684,
        "a": 63.63,
        "h": 100.0,
    }
)
"""Read-only meters-equivalent for every supported unit symbol."""

# ---------------------------------------------------------------------------
# UTM zones
# ---------------------------------------------------------------------------

UTM_MIN_ZONE: Final = 1
UTM_MAX_ZONE: Final = 60
UTM_ZONE_WIDTH_DEG: Final = 6.0

HEMISPHERE_NORTH: Final = "north"
HEMISPHERE_SOUTH: Final = "south"
HEMISPHERES: Final = (HEMISPHERE_NORTH, HEMISPHERE_SOUTH)

# WGS 84 / UTM: northern zones are 326xx, southern zones 327xx
EPSG_UTM_NORTH_BASE: Final = 32600
EPSG_UTM_SOUTH_OFFSET: Final = 100

# The legacy template has no space between the hemisphere flag and +datum;
# existing consumers compare these strings byte-for-byte.
LEGACY_UTM_PROJ_TEMPLATE: Final = "+proj=utm +zone={zone} +{hemisphere}+datum=WGS84 +units=m +no_defs"
UTM_PROJ_TEMPLATE: Final = "+proj=utm +zone={zone} +{hemisphere} +datum=WGS84 +units=m +no_defs"
