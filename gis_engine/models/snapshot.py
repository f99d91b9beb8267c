"""Pydantic schema for map-source state snapshots.

The application store serialises its map-source state as JSON keyed by
source name::

    {
        "parcels": {"zIndex": 10, "layers": [{"name": "parcels", "on": true}]},
        "roads":   {"zIndex": 5,  "layers": [{"name": "roads", "on": false}]}
    }

This module validates that document and converts it into the immutable
``MapSource`` value objects consumed by catalog resolution.
"""

from __future__ import annotations

from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from gis_engine.core.exceptions import SnapshotValidationError
from gis_engine.models.catalog import MapSource, MapSourceLayer


class MapSourceLayerModel(BaseModel):
    """One sub-layer entry of a map source.

    Attributes:
        name: Sub-layer name referenced by catalog ``src`` entries.
        on: Whether the sub-layer is switched on.
    """

    model_config = ConfigDict(extra="ignore")

    name: str
    on: bool = False


class MapSourceModel(BaseModel):
    """One map source in the snapshot.

    Attributes:
        z_index: Draw order (JSON key ``zIndex``).
        layers: Sub-layers in configuration order.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    z_index: int = Field(default=0, alias="zIndex")
    layers: list[MapSourceLayerModel] = Field(default_factory=list)

    def to_map_source(self, name: str) -> MapSource:
        """Convert to the immutable value object."""
        return MapSource(
            name=name,
            z_index=self.z_index,
            layers=tuple(MapSourceLayer(name=layer.name, on=layer.on) for layer in self.layers),
        )


def load_map_sources(data: Mapping[str, object]) -> dict[str, MapSource]:
    """Validate a JSON snapshot and return ``{source name: MapSource}``.

    Raises:
        SnapshotValidationError: If the document or any source entry
            does not match the schema.
    """
    if not isinstance(data, Mapping):
        msg = f"map-source snapshot must be a mapping, got {type(data).__name__}"
        raise SnapshotValidationError(msg)

    sources: dict[str, MapSource] = {}
    for name, raw in data.items():
        try:
            model = MapSourceModel.model_validate(raw)
        except PydanticValidationError as exc:
            msg = f"Invalid map source {name!r}: {exc.error_count()} validation error(s)"
            raise SnapshotValidationError(msg) from exc
        sources[str(name)] = model.to_map_source(str(name))
    return sources
