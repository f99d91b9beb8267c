"""Engine operations.

Each module is a set of pure functions over the value objects in
``gis_engine.models``:

- evaluate: filter predicate evaluation
- feature_set: filter / match / change / transform feature collections
- extent: bounding box of a feature collection
- catalog: layer visibility and z-order
- units: length and area conversion
- projections: UTM zone lookup and projection registry setup
"""
