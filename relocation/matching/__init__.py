"""
Property matching package.

Responsibilities:
- Accept a user's diagnostic answers (work mode, household, priority, budget).
- Score each catalog property with five independent factor scorers.
- Aggregate, rank and explain the matches.
- Persist the top matches per user for later retrieval.
"""
