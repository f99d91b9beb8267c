"""Shared pytest fixtures for the GIS Engine test suite."""

from __future__ import annotations

import pytest

from gis_engine.models.catalog import (
    CatalogGroup,
    CatalogLayer,
    MapSource,
    MapSourceLayer,
    SourceRef,
)
from gis_engine.models.feature import Feature, Geometry

# ---------------------------------------------------------------------------
# Feature fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def parcels() -> list[Feature]:
    """Four parcels with mixed property types and geometry kinds."""
    return [
        Feature(
            geometry=Geometry("Point", [-93.10, 44.95]),
            properties={"PIN": "100", "ACRES": 2.5, "ZONING": "R1", "VACANT": False},
            id=1,
        ),
        Feature(
            geometry=Geometry("LineString", [[-93.20, 44.90], [-93.15, 44.98]]),
            properties={"PIN": "200", "ACRES": 12.0, "ZONING": "C2", "VACANT": True},
            id=2,
        ),
        Feature(
            geometry=Geometry(
                "Polygon",
                [[[-93.05, 44.92], [-93.05, 44.99], [-93.00, 44.99], [-93.00, 44.92], [-93.05, 44.92]]],
            ),
            properties={"PIN": "300", "ACRES": 40.0, "ZONING": "AG", "VACANT": True},
            id=3,
        ),
        Feature(
            geometry=Geometry("MultiPoint", [[-100.0, 10.0]]),
            properties={"PIN": "400", "ZONING": "R2", "VACANT": None},
            id=4,
        ),
    ]


# ---------------------------------------------------------------------------
# Catalog fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def map_sources() -> dict[str, MapSource]:
    """Loaded map sources: parcels on top, roads below, basemap at the bottom."""
    return {
        "parcels": MapSource(
            name="parcels",
            z_index=10,
            layers=(MapSourceLayer("parcels", on=True), MapSourceLayer("labels", on=False)),
        ),
        "roads": MapSource(name="roads", z_index=5, layers=(MapSourceLayer("roads", on=True),)),
        "basemap": MapSource(name="basemap", z_index=0, layers=(MapSourceLayer("osm", on=True),)),
        "hydro": MapSource(name="hydro", z_index=5, layers=(MapSourceLayer("lakes", on=True),)),
    }


@pytest.fixture()
def catalog() -> CatalogGroup:
    """A two-level catalog tree."""
    return CatalogGroup(
        id="root",
        children=(
            CatalogLayer(id="basemap", src=(SourceRef("basemap", "osm"),)),
            CatalogGroup(
                id="overlays",
                children=(
                    CatalogLayer(id="roads", src=(SourceRef("roads", "roads"),)),
                    CatalogLayer(id="lakes", src=(SourceRef("hydro", "lakes"),)),
                    CatalogLayer(id="parcel-labels", src=(SourceRef("parcels", "labels"),)),
                ),
            ),
            CatalogLayer(id="parcels", src=(SourceRef("parcels", "parcels"),)),
            CatalogLayer(id="unloaded", src=(SourceRef("aerials", "2024"),)),
        ),
    )
