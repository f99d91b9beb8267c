"""Core utilities and shared infrastructure.

- config: Configuration loading and validation
- constants: Unit table, EPSG bases, proj-string templates
- exceptions: Custom exception hierarchy
"""
