"""
Neighborhood vibe package.

Responsibilities:
- Obtain base vibe scores for an area from the LLM.
- Adjust them for morning, day, evening and night.
- Store and serve per-period scores with each area's top vibe.
"""
