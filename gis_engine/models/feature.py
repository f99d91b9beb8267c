"""Data model for vector features.

A Feature is a geometry plus a mapping of named scalar properties, in
the shape produced by a GeoJSON decoder.  Features are value objects:
operations that "edit" properties return new Feature instances.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from gis_engine.models.contracts import FeaturePayload, GeometryPayload, Scalar

# ---------------------------------------------------------------------------
# Geometry types
# ---------------------------------------------------------------------------

POINT = "Point"
LINE_STRING = "LineString"
POLYGON = "Polygon"
MULTI_LINE_STRING = "MultiLineString"


@dataclass(frozen=True, slots=True)
class Geometry:
    """A GeoJSON geometry.

    Attributes:
        type: GeoJSON geometry type (``"Point"``, ``"Polygon"``, ...).
            Any type is accepted; only some contribute to extents.
        coordinates: GeoJSON coordinate array, nested per ``type``.
    """

    type: str
    coordinates: object = None

    def to_dict(self) -> GeometryPayload:
        """Serialise to a GeoJSON geometry object."""
        return {"type": self.type, "coordinates": self.coordinates}

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Geometry:
        """Deserialise from a GeoJSON geometry object.

        Raises:
            TypeError: If ``type`` is missing or not a string.
        """
        geom_type = data.get("type")
        if not isinstance(geom_type, str):
            msg = f"geometry type must be a string, got {type(geom_type).__name__}"
            raise TypeError(msg)
        return cls(type=geom_type, coordinates=data.get("coordinates"))


@dataclass(frozen=True, slots=True)
class Feature:
    """A single vector feature.

    Attributes:
        geometry: Feature geometry, or ``None`` for attribute-only features.
        properties: Scalar attributes keyed by field name.
        id: Optional GeoJSON feature id.
    """

    geometry: Geometry | None = None
    properties: dict[str, Scalar] = field(default_factory=dict)
    id: str | int | None = None

    def with_properties(self, patch: Mapping[str, Scalar]) -> Feature:
        """Return a copy whose properties are shallow-merged with *patch* (patch wins)."""
        return replace(self, properties={**self.properties, **patch})

    def to_dict(self) -> FeaturePayload:
        """Serialise to a GeoJSON feature object."""
        payload: FeaturePayload = {
            "type": "Feature",
            "geometry": self.geometry.to_dict() if self.geometry is not None else None,
            "properties": dict(self.properties),
        }
        if self.id is not None:
            payload["id"] = self.id
        return payload

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Feature:
        """Deserialise from a GeoJSON feature object.

        A missing or ``null`` geometry / properties member is accepted.

        Raises:
            TypeError: If field values have unexpected types.
        """
        geometry_raw = data.get("geometry")
        if geometry_raw is not None and not isinstance(geometry_raw, Mapping):
            msg = f"geometry must be a mapping, got {type(geometry_raw).__name__}"
            raise TypeError(msg)

        properties_raw = data.get("properties") or {}
        if not isinstance(properties_raw, Mapping):
            msg = f"properties must be a mapping, got {type(properties_raw).__name__}"
            raise TypeError(msg)

        return cls(
            geometry=Geometry.from_dict(geometry_raw) if geometry_raw is not None else None,
            properties={str(k): v for k, v in properties_raw.items()},
            id=data.get("id"),  # type: ignore[arg-type]
        )


def features_from_geojson(data: Mapping[str, object] | Iterable[Mapping[str, object]]) -> list[Feature]:
    """Build Features from a GeoJSON ``FeatureCollection`` or a list of feature objects.

    Raises:
        TypeError: If a collection's ``features`` member is not a list.
    """
    if isinstance(data, Mapping):
        raw = data.get("features", [])
        if not isinstance(raw, list):
            msg = f"features must be a list, got {type(raw).__name__}"
            raise TypeError(msg)
        return [Feature.from_dict(item) for item in raw]
    return [Feature.from_dict(item) for item in data]
