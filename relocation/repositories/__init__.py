"""
Storage layer.

Responsibilities:
- Define narrow read/write contracts per entity (properties, match results,
  areas, area vibes, diagnostics, simulations).
- Provide the default implementations: pandas-loaded seed catalogs and
  in-memory tables keyed the same way as the hosted database.
- Expose ``get_*_repository`` accessors used as FastAPI dependencies.
"""
