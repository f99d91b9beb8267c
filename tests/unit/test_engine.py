"""Tests for the GeoEngine facade.

The facade delegates to the operations modules; these tests check that
configuration is threaded through (default match mode, display units,
proj-string spacing, unit table).
"""

from __future__ import annotations

import pytest

from gis_engine.core.config import EngineConfig
from gis_engine.core.exceptions import UnknownUnitError
from gis_engine.engine import GeoEngine
from gis_engine.models.catalog import CatalogGroup, MapSource
from gis_engine.models.feature import Feature
from gis_engine.models.filters import MatchMode
from gis_engine.operations.projections import InMemoryProjectionRegistry
from gis_engine.operations.units import UnitTable


class TestFilterDefaults:
    """The configured match mode applies to filters that do not state one."""

    def test_default_is_all(self, parcels: list[Feature]) -> None:
        engine = GeoEngine()
        assert engine.match_mode is MatchMode.ALL
        assert engine.match(parcels, {"ZONING": "R1", "PIN": "300"}) == []

    def test_configured_any(self, parcels: list[Feature]) -> None:
        engine = GeoEngine(EngineConfig(match_mode="any"))
        result = engine.match(parcels, {"ZONING": "R1", "PIN": "300"})
        assert [f.id for f in result] == [1, 3]

    def test_explicit_mode_wins(self, parcels: list[Feature]) -> None:
        engine = GeoEngine(EngineConfig(match_mode="any"))
        assert engine.match(parcels, {"ZONING": "R1", "PIN": "300", "match": "all"}) == []

    def test_filter_spec(self) -> None:
        assert GeoEngine(EngineConfig(match_mode="any")).filter_spec({"A": 1}).mode is MatchMode.ANY

    def test_matches(self, parcels: list[Feature]) -> None:
        assert GeoEngine().matches(parcels[0], {"ZONING": ["R1", "R2"]}) is True

    def test_filter_default_inverse(self, parcels: list[Feature]) -> None:
        assert [f.id for f in GeoEngine().filter(parcels, {"VACANT": True})] == [1, 4]

    def test_change(self, parcels: list[Feature]) -> None:
        result = GeoEngine().change(parcels, {"PIN": "400"}, {"ACRES": 1.0})
        assert result[3].properties["ACRES"] == 1.0

    def test_change_ignores_configured_mode(self, parcels: list[Feature]) -> None:
        engine = GeoEngine(EngineConfig(match_mode="any"))
        result = engine.change(parcels, {"ZONING": "R1", "PIN": "300"}, {"TAGGED": True})
        assert [f.properties.get("TAGGED") for f in result] == [None, None, None, None]

    def test_change_honours_explicit_mode(self, parcels: list[Feature]) -> None:
        engine = GeoEngine()
        result = engine.change(parcels, {"ZONING": "R1", "PIN": "300", "match": "any"}, {"TAGGED": True})
        assert [f.properties.get("TAGGED") for f in result] == [True, None, True, None]


class TestGeometryAndCatalog:
    """Delegation to extent and catalog resolution."""

    def test_extent(self, parcels: list[Feature]) -> None:
        assert GeoEngine().extent(parcels) == pytest.approx((-93.20, 44.90, -93.00, 44.99))

    def test_z_order(self, catalog: CatalogGroup, map_sources: dict[str, MapSource]) -> None:
        order = GeoEngine().z_order(catalog, map_sources)
        assert [e.layer.id for e in order] == ["parcels", "roads", "lakes", "basemap"]

    def test_is_layer_on(self, catalog: CatalogGroup, map_sources: dict[str, MapSource]) -> None:
        assert GeoEngine().is_layer_on(map_sources, catalog.children[0]) is True  # type: ignore[arg-type]


class TestUnits:
    """Display units and custom unit tables."""

    def test_length_from_meters(self) -> None:
        engine = GeoEngine(EngineConfig(length_units="km"))
        assert engine.length_from_meters(2500) == pytest.approx(2.5)

    def test_area_from_meters(self) -> None:
        engine = GeoEngine(EngineConfig(area_units="h"))
        assert engine.area_from_meters(30_000) == pytest.approx(3.0)

    def test_convert(self) -> None:
        engine = GeoEngine()
        assert engine.convert_length(1, "km", "m") == 1000
        assert engine.convert_area(1, "km", "m") == 1_000_000

    def test_custom_unit_table(self) -> None:
        engine = GeoEngine(unit_table=UnitTable(meters={"m": 1.0, "rod": 5.0292}))
        assert engine.convert_length(1, "rod", "m") == pytest.approx(5.0292)
        with pytest.raises(UnknownUnitError):
            engine.convert_length(1, "ft", "m")


class TestProjections:
    """Projection setup honours legacy_proj_strings."""

    def test_utm_zone(self) -> None:
        assert GeoEngine().utm_zone(-93.1, 45.0) == "UTM15N"

    def test_legacy_by_default(self) -> None:
        registry = InMemoryProjectionRegistry()
        assert GeoEngine().configure_projections(registry) == 240
        assert "+north+datum" in registry.lookup("UTM15N")

    def test_fixed_spacing(self) -> None:
        registry = InMemoryProjectionRegistry()
        GeoEngine(EngineConfig(legacy_proj_strings=False)).configure_projections(registry)
        assert "+north +datum" in registry.lookup("UTM15N")
