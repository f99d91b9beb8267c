"""GIS Engine: vector feature and map catalog evaluation.

Pure, synchronous evaluation logic consumed by a map rendering layer:
declarative feature filters, catalog visibility and draw order, feature
extents, and unit / UTM projection helpers.
"""

__version__ = "0.1.0"
