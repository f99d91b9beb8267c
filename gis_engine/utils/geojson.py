"""GeoJSON <-> Shapely geometry bridge.

Lets callers move between the engine's ``Geometry`` value objects and
Shapely geometries for operations the engine does not implement itself
(buffers, areas, spatial predicates).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from gis_engine.models.feature import Geometry

if TYPE_CHECKING:
    from shapely.geometry.base import BaseGeometry


def to_shape(geometry: Geometry) -> BaseGeometry:
    """Convert a ``Geometry`` into a Shapely geometry.

    Raises:
        shapely.errors.GeometryTypeError: If the GeoJSON type is unknown to Shapely.
    """
    from shapely.geometry import shape

    return shape(geometry.to_dict())


def from_shape(shape: BaseGeometry) -> Geometry:
    """Convert a Shapely geometry into a ``Geometry`` with list-based coordinates."""
    from shapely.geometry import mapping

    return Geometry.from_dict(_listify(mapping(shape)))


def _listify(value: object) -> object:
    """Turn Shapely's nested coordinate tuples into JSON-style lists."""
    if isinstance(value, dict):
        return {key: _listify(item) for key, item in value.items()}
    if isinstance(value, tuple | list):
        return [_listify(item) for item in value]
    return value
