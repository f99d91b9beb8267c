"""Data models and schemas.

Defines the value objects the engine evaluates:
- Feature / Geometry: vector features in GeoJSON shape
- FilterSpec / FilterClause: canonical declarative filters
- Catalog nodes, map-source state and z-order entries
"""

from gis_engine.models.catalog import (
    CatalogGroup,
    CatalogLayer,
    CatalogNode,
    MapSource,
    MapSourceLayer,
    SourceRef,
    ZOrderEntry,
    catalog_from_dict,
)
from gis_engine.models.feature import Feature, Geometry, features_from_geojson
from gis_engine.models.filters import ClauseType, FilterClause, FilterSpec, MatchMode

__all__ = [
    "CatalogGroup",
    "CatalogLayer",
    "CatalogNode",
    "ClauseType",
    "Feature",
    "FilterClause",
    "FilterSpec",
    "Geometry",
    "MapSource",
    "MapSourceLayer",
    "MatchMode",
    "SourceRef",
    "ZOrderEntry",
    "catalog_from_dict",
    "features_from_geojson",
]
