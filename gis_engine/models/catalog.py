"""Data models for the layer catalog and map-source state.

The catalog is the user-facing layer tree: groups hold children, leaf
layers reference one or more map-source layers.  Map-source state is the
application store's snapshot of every loaded source: its draw order and
which of its sub-layers are switched on.

Both are transient value objects; the engine reads a snapshot per call
and never mutates it.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from gis_engine.utils.helpers import get_layer_name, get_map_source_name

if TYPE_CHECKING:
    from gis_engine.models.contracts import (
        MapSourceLayerPayload,
        MapSourcePayload,
        SourceRefPayload,
        ZOrderEntryPayload,
    )


# ---------------------------------------------------------------------------
# Catalog tree
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class SourceRef:
    """Reference to one sub-layer of a map source.

    Attributes:
        map_source_name: Name of the map source.
        layer_name: Name of the sub-layer within that source.
    """

    map_source_name: str
    layer_name: str

    @classmethod
    def from_path(cls, path: str) -> SourceRef:
        """Build from a ``"source/layer"`` path (layer names may contain ``/``)."""
        return cls(map_source_name=get_map_source_name(path), layer_name=get_layer_name(path))

    def to_dict(self) -> SourceRefPayload:
        return {"mapSourceName": self.map_source_name, "layerName": self.layer_name}


@dataclass(frozen=True, slots=True)
class CatalogLayer:
    """A leaf of the catalog tree.

    Attributes:
        src: Referenced map-source layers; the first one decides draw order.
        id: Catalog identifier.
        title: Display title.
    """

    src: tuple[SourceRef, ...] = ()
    id: str = ""
    title: str = ""

    def to_dict(self) -> dict[str, object]:
        return {"id": self.id, "title": self.title, "src": [ref.to_dict() for ref in self.src]}


@dataclass(frozen=True, slots=True)
class CatalogGroup:
    """An inner node of the catalog tree.

    Attributes:
        children: Child nodes in display order.
        id: Catalog identifier.
        title: Display title.
    """

    children: tuple[CatalogNode, ...] = ()
    id: str = ""
    title: str = ""

    def to_dict(self) -> dict[str, object]:
        return {"id": self.id, "title": self.title, "children": [child.to_dict() for child in self.children]}


CatalogNode = CatalogGroup | CatalogLayer


def catalog_from_dict(data: Mapping[str, object]) -> CatalogNode:
    """Build a catalog node (recursively) from its JSON form.

    A node with a ``children`` member is a group; any other node is a
    layer.  ``src`` entries may be ``{"mapSourceName", "layerName"}``
    mappings or ``"source/layer"`` path strings.

    Raises:
        TypeError: If ``children`` or ``src`` is not a list, or a
            ``src`` entry has an unexpected type.
    """
    node_id = str(data.get("id", ""))
    title = str(data.get("title", ""))

    if "children" in data:
        children_raw = data["children"]
        if not isinstance(children_raw, list):
            msg = f"children must be a list, got {type(children_raw).__name__}"
            raise TypeError(msg)
        return CatalogGroup(
            children=tuple(catalog_from_dict(child) for child in children_raw),
            id=node_id,
            title=title,
        )

    src_raw = data.get("src", [])
    if not isinstance(src_raw, list):
        msg = f"src must be a list, got {type(src_raw).__name__}"
        raise TypeError(msg)
    return CatalogLayer(src=tuple(_source_ref(item) for item in src_raw), id=node_id, title=title)


def _source_ref(item: object) -> SourceRef:
    if isinstance(item, str):
        return SourceRef.from_path(item)
    if isinstance(item, Mapping):
        return SourceRef(
            map_source_name=str(item.get("mapSourceName", "")),
            layer_name=str(item.get("layerName", "")),
        )
    msg = f"src entry must be a mapping or path string, got {type(item).__name__}"
    raise TypeError(msg)


# ---------------------------------------------------------------------------
# Map-source state
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class MapSourceLayer:
    """A toggleable sub-layer of a map source."""

    name: str
    on: bool = False

    def to_dict(self) -> MapSourceLayerPayload:
        return {"name": self.name, "on": self.on}


@dataclass(frozen=True, slots=True)
class MapSource:
    """Snapshot of one loaded map source.

    Attributes:
        name: Map-source name (key in the state mapping).
        z_index: Draw order; higher values draw on top.
        layers: Sub-layers in configuration order.
    """

    name: str
    z_index: int = 0
    layers: tuple[MapSourceLayer, ...] = field(default_factory=tuple)

    def to_dict(self) -> MapSourcePayload:
        return {"name": self.name, "zIndex": self.z_index, "layers": [layer.to_dict() for layer in self.layers]}


@dataclass(frozen=True, slots=True)
class ZOrderEntry:
    """A visible catalog layer paired with its draw order."""

    z_index: int
    layer: CatalogLayer

    def to_dict(self) -> ZOrderEntryPayload:
        return {"zIndex": self.z_index, "layer": self.layer.to_dict()}
