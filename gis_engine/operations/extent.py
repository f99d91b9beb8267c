"""Geometry extent reduction.

Folds the coordinates of a feature collection into one axis-aligned
bounding box ``(min_x, min_y, max_x, max_y)``.

- Bounds start unset (``None``) and are widened per visited vertex.
- ``Point`` visits itself, ``LineString`` each vertex, ``Polygon`` and
  ``MultiLineString`` each vertex of every ring/line.
- Any other geometry type, and features without geometry, contribute
  nothing.  A collection with nothing to visit yields four ``None``s.

Min/max are commutative, so the result does not depend on feature order.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Sequence
from typing import TYPE_CHECKING

from gis_engine.models.feature import LINE_STRING, MULTI_LINE_STRING, POINT, POLYGON, Feature

if TYPE_CHECKING:
    from gis_engine.models.feature import Geometry

logger = logging.getLogger("gis_engine.operations.extent")

Extent = tuple[float | None, float | None, float | None, float | None]

EMPTY_EXTENT: Extent = (None, None, None, None)


def features_extent(features: Iterable[Feature]) -> Extent:
    """Compute the bounding box of every supported geometry in *features*."""
    min_x = min_y = max_x = max_y = None
    skipped = 0

    for feature in features:
        geometry = feature.geometry
        if geometry is None:
            continue
        visited = False
        for x, y in iter_vertices(geometry):
            visited = True
            if min_x is None or x < min_x:
                min_x = x
            if min_y is None or y < min_y:
                min_y = y
            if max_x is None or x > max_x:
                max_x = x
            if max_y is None or y > max_y:
                max_y = y
        if not visited:
            skipped += 1

    if skipped:
        logger.debug("Extent ignored geometries | count=%d", skipped)
    return (min_x, min_y, max_x, max_y)


def geometry_extent(geometry: Geometry) -> Extent:
    """Compute the bounding box of a single geometry."""
    return features_extent([Feature(geometry=geometry)])


def iter_vertices(geometry: Geometry) -> Iterator[tuple[float, float]]:
    """Yield the ``(x, y)`` pairs of a supported geometry; nothing otherwise.

    Only the first two ordinates are read, so 3D coordinates are accepted.
    """
    coords = geometry.coordinates
    if geometry.type == POINT:
        yield _xy(coords)  # type: ignore[arg-type]
    elif geometry.type == LINE_STRING:
        for pt in coords:  # type: ignore[attr-defined]
            yield _xy(pt)
    elif geometry.type in (POLYGON, MULTI_LINE_STRING):
        for ring in coords:  # type: ignore[attr-defined]
            for pt in ring:
                yield _xy(pt)


def _xy(pt: Sequence[float]) -> tuple[float, float]:
    return (pt[0], pt[1])
