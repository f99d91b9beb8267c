"""Canonical JSON payload contracts for engine inputs and outputs.

Each value object's ``to_dict()`` produces one of these shapes, and
each ``from_dict()`` accepts it.  ``TypedDict`` keeps the boundary
JSON-native: callers hand over decoded GeoJSON or application state
without any conversion.
"""

from __future__ import annotations

from typing import TypedDict

Scalar = str | int | float | bool | None

# ---------------------------------------------------------------------------
# Features
# ---------------------------------------------------------------------------


class GeometryPayload(TypedDict):
    """GeoJSON geometry object."""

    type: str
    coordinates: object


class FeaturePayload(TypedDict, total=False):
    """GeoJSON feature object (``id`` optional)."""

    type: str
    id: str | int | None
    geometry: GeometryPayload | None
    properties: dict[str, Scalar]


# ---------------------------------------------------------------------------
# Catalog and map sources
# ---------------------------------------------------------------------------


class SourceRefPayload(TypedDict):
    """Reference from a catalog layer to one map-source layer."""

    mapSourceName: str
    layerName: str


class MapSourceLayerPayload(TypedDict):
    """One toggleable layer inside a map source."""

    name: str
    on: bool


class MapSourcePayload(TypedDict):
    """Map-source state as held by the application store."""

    name: str
    zIndex: int
    layers: list[MapSourceLayerPayload]


class ZOrderEntryPayload(TypedDict):
    """One visible catalog layer with its draw order."""

    zIndex: int
    layer: dict[str, object]
