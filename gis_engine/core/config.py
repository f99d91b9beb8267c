"""Engine configuration loaded from environment variables.

All configuration values have defaults that reproduce the historical
behaviour of the engine; applications override them through the
process environment.

Fail-fast validation:
    ``from_env()`` raises ``ConfigValidationError`` if a value is outside
    its closed domain, so bad configuration is caught at startup rather
    than on the first filter or conversion.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from gis_engine.core.constants import METERS_PER_UNIT
from gis_engine.core.exceptions import ConfigurationError
from gis_engine.utils.helpers import parse_boolean

MATCH_MODES = ("all", "any")


class ConfigValidationError(ConfigurationError):
    """Raised when configuration values are out of valid range.

    Attributes:
        key: The configuration key that failed validation.
        value: The invalid value.
        message: Human-readable description of the valid range.
    """

    default_stage = "config"
    default_code = "CONFIG_VALIDATION_FAILED"

    def __init__(self, key: str, value: object, message: str) -> None:
        self.key = key
        self.value = value
        super().__init__(f"Invalid configuration {key}={value!r}: {message}")


@dataclass(frozen=True, slots=True)
class EngineConfig:
    """Immutable engine configuration.

    Loaded once at application startup and handed to ``GeoEngine``.

    Attributes:
        match_mode: Default combination mode for filters that do not
            state one (``"all"`` or ``"any"``).
        length_units: Display unit for lengths measured in metres.
        area_units: Display unit (squared) for areas measured in square metres.
        legacy_proj_strings: Keep the historical UTM proj-string spacing
            (``+north+datum=WGS84``) when registering projections.
    """

    match_mode: str = "all"
    length_units: str = "m"
    area_units: str = "m"
    legacy_proj_strings: bool = True

    @classmethod
    def from_env(cls) -> EngineConfig:
        """Load and validate configuration from environment variables.

        Raises:
            ConfigValidationError: If a value is outside its allowed domain.
        """
        config = cls(
            match_mode=os.getenv("GIS_ENGINE_MATCH_MODE", "all").strip().lower(),
            length_units=os.getenv("GIS_ENGINE_LENGTH_UNITS", "m").strip(),
            area_units=os.getenv("GIS_ENGINE_AREA_UNITS", "m").strip(),
            legacy_proj_strings=parse_boolean(os.getenv("GIS_ENGINE_LEGACY_PROJ_STRINGS"), default=True),
        )
        _validate(config)
        return config


def _validate(config: EngineConfig) -> None:
    """Validate configuration domains.  Raises ``ConfigValidationError``."""
    if config.match_mode not in MATCH_MODES:
        raise ConfigValidationError(
            "GIS_ENGINE_MATCH_MODE",
            config.match_mode,
            f"must be one of {', '.join(MATCH_MODES)}",
        )

    if config.length_units not in METERS_PER_UNIT:
        raise ConfigValidationError(
            "GIS_ENGINE_LENGTH_UNITS",
            config.length_units,
            f"must be one of {', '.join(METERS_PER_UNIT)}",
        )

    if config.area_units not in METERS_PER_UNIT:
        raise ConfigValidationError(
            "GIS_ENGINE_AREA_UNITS",
            config.area_units,
            f"must be one of {', '.join(METERS_PER_UNIT)}",
        )
