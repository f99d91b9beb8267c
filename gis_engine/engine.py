"""GeoEngine: configured entry point to the engine operations.

All business logic lives in ``gis_engine.operations``.  This class only
threads an ``EngineConfig`` and a ``UnitTable`` through those functions
so an application can configure the engine once at startup::

    engine = GeoEngine(EngineConfig.from_env())
    visible = engine.match(features, {"ZONING": ["R1", "R2"]})
    order = engine.z_order(catalog, map_sources)
    engine.configure_projections(registry)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from gis_engine.core.config import EngineConfig
from gis_engine.models.filters import FilterSpec, MatchMode
from gis_engine.operations import catalog, evaluate, extent, feature_set, projections, units

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping, Sequence

    from gis_engine.models.catalog import CatalogLayer, ZOrderEntry
    from gis_engine.models.contracts import Scalar
    from gis_engine.models.feature import Feature

logger = logging.getLogger("gis_engine.engine")


class GeoEngine:
    """Configured facade over the feature, catalog, unit and projection operations.

    Attributes:
        config: Engine configuration (defaults reproduce historical behaviour).
        unit_table: Unit table used by every conversion.
    """

    def __init__(
        self,
        config: EngineConfig | None = None,
        unit_table: units.UnitTable = units.DEFAULT_UNIT_TABLE,
    ) -> None:
        self.config = config or EngineConfig()
        self.unit_table = unit_table

    @property
    def match_mode(self) -> MatchMode:
        return MatchMode.parse(self.config.match_mode)

    # -- filters ------------------------------------------------------------

    def filter_spec(self, data: Mapping[str, object]) -> FilterSpec:
        """Normalise a raw filter using the configured default mode."""
        return FilterSpec.from_dict(data, default_mode=self.match_mode)

    def matches(self, feature: Feature, spec: FilterSpec | Mapping[str, object]) -> bool:
        return evaluate.feature_match(feature, spec, default_mode=self.match_mode)

    def filter(
        self,
        features: Sequence[Feature],
        spec: feature_set.FilterLike,
        inverse: bool = True,
    ) -> list[Feature]:
        return feature_set.filter_features(features, spec, inverse, default_mode=self.match_mode)

    def match(self, features: Sequence[Feature], spec: feature_set.FilterLike | None) -> Sequence[Feature]:
        return feature_set.match_features(features, spec, default_mode=self.match_mode)

    def change(
        self,
        features: Sequence[Feature],
        spec: FilterSpec | Mapping[str, object],
        patch: Mapping[str, Scalar],
    ) -> list[Feature]:
        """Patch matching features; a raw mapping without ``"match"`` always combines with ``ALL``."""
        return feature_set.change_features(features, spec, patch, default_mode=MatchMode.ALL)

    # -- geometry and catalog -----------------------------------------------

    def extent(self, features: Iterable[Feature]) -> extent.Extent:
        return extent.features_extent(features)

    def is_layer_on(self, map_sources: catalog.MapSources | None, layer: CatalogLayer) -> bool:
        return catalog.is_layer_on(map_sources, layer)

    def z_order(self, catalog_root: catalog.Catalog, map_sources: catalog.MapSources | None) -> list[ZOrderEntry]:
        return catalog.layers_by_z_order(catalog_root, map_sources)

    # -- units and projections ----------------------------------------------

    def convert_length(self, value: float, from_units: units.UnitSymbol | str, to_units: units.UnitSymbol | str) -> float:
        return units.convert_length(value, from_units, to_units, table=self.unit_table)

    def convert_area(self, value: float, from_units: units.UnitSymbol | str, to_units: units.UnitSymbol | str) -> float:
        return units.convert_area(value, from_units, to_units, table=self.unit_table)

    def length_from_meters(self, meters: float) -> float:
        """Express a length in metres in the configured display unit."""
        return units.meters_length_to_units(meters, self.config.length_units, table=self.unit_table)

    def area_from_meters(self, square_meters: float) -> float:
        """Express an area in square metres in the configured display unit (squared)."""
        return units.meters_area_to_units(square_meters, self.config.area_units, table=self.unit_table)

    def utm_zone(self, lon: float, lat: float) -> str:
        return projections.utm_zone(lon, lat)

    def configure_projections(self, registry: projections.ProjectionRegistry) -> int:
        """Register the UTM projections, honouring ``legacy_proj_strings``."""
        count = projections.build_utm_projections(registry, legacy_spacing=self.config.legacy_proj_strings)
        logger.debug("Engine projections configured | count=%d", count)
        return count
