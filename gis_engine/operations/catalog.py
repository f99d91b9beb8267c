"""Catalog visibility and z-order resolution.

Combines the catalog tree with a map-source state snapshot to decide
which catalog layers are switched on and in which order they draw.

Rules:
- A layer is on only when every referenced map source is loaded and
  every referenced sub-layer exists in it and is on.  A missing map
  source or sub-layer switches the layer off; it is not an error.
- A layer's z-index is the z-index of its *first* referenced map source,
  even when it aggregates several sources.
- Visible layers are ordered by descending z-index.  Equal z-indexes
  keep catalog traversal order (depth-first, children in order), so the
  result is deterministic.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping

from gis_engine.core.exceptions import MissingMapSourceError
from gis_engine.models.catalog import CatalogGroup, CatalogLayer, CatalogNode, MapSource, ZOrderEntry

logger = logging.getLogger("gis_engine.operations.catalog")

MapSources = Mapping[str, MapSource]
Catalog = CatalogNode | Iterable[CatalogNode] | Mapping[str, CatalogNode]


def is_layer_on(map_sources: MapSources | None, layer: CatalogLayer) -> bool:
    """Return whether *layer* is currently switched on.

    ``map_sources`` is ``None`` while the application is still loading;
    every layer is off until it arrives.  A sub-layer name that does not
    appear in its map source switches the layer off, and when a name
    appears more than once every entry must be on.
    """
    if map_sources is None:
        return False

    for ref in layer.src:
        map_source = map_sources.get(ref.map_source_name)
        if map_source is None:
            logger.debug(
                "Layer off, map source missing | layer=%s | map_source=%s",
                layer.id,
                ref.map_source_name,
            )
            return False
        found = False
        for sub_layer in map_source.layers:
            if sub_layer.name != ref.layer_name:
                continue
            if not sub_layer.on:
                return False
            found = True
        if not found:
            logger.debug(
                "Layer off, sub-layer missing | layer=%s | map_source=%s | sub_layer=%s",
                layer.id,
                ref.map_source_name,
                ref.layer_name,
            )
            return False
    return True


def z_value(map_sources: MapSources | None, layer: CatalogLayer) -> int:
    """Return the draw order of *layer*: its first map source's z-index.

    Raises:
        MissingMapSourceError: If the layer references no map source, or
            its first map source is not in the snapshot.
    """
    if not layer.src:
        raise MissingMapSourceError("", f"Catalog layer {layer.id!r} references no map source")
    name = layer.src[0].map_source_name
    map_source = map_sources.get(name) if map_sources is not None else None
    if map_source is None:
        raise MissingMapSourceError(name)
    return map_source.z_index


def layers_by_z_order(catalog: Catalog, map_sources: MapSources | None) -> list[ZOrderEntry]:
    """List the visible catalog layers, top-most first.

    Args:
        catalog: A root node, a sequence of nodes, or a mapping of
            catalog id to node.
        map_sources: Map-source snapshot (``None`` while loading).

    Returns:
        ``ZOrderEntry`` items sorted by descending z-index; ties keep
        catalog traversal order.
    """
    entries: list[ZOrderEntry] = []
    for layer in iter_layers(catalog):
        if not is_layer_on(map_sources, layer):
            continue
        try:
            entries.append(ZOrderEntry(z_index=z_value(map_sources, layer), layer=layer))
        except MissingMapSourceError as exc:
            logger.debug("Layer off | layer=%s | reason=%s", layer.id, exc.message)

    # sorted() is stable, including with reverse=True
    return sorted(entries, key=lambda entry: entry.z_index, reverse=True)


def iter_layers(catalog: Catalog) -> Iterator[CatalogLayer]:
    """Yield every leaf layer of *catalog* in depth-first, pre-order traversal.

    ``None`` entries (unloaded catalog slots) are skipped.
    """
    if catalog is None:
        return
    if isinstance(catalog, CatalogLayer):
        yield catalog
    elif isinstance(catalog, CatalogGroup):
        for child in catalog.children:
            yield from iter_layers(child)
    elif isinstance(catalog, Mapping):
        for node in catalog.values():
            yield from iter_layers(node)
    else:
        for node in catalog:
            yield from iter_layers(node)
