"""Shared helpers: configuration-value parsing and GeoJSON interop."""
