"""
Vendor search engine.

Responsibilities:
- Narrow the active vendor collection by category and free-text keyword.
- Score candidates on rating, keyword relevance and profile freshness.
- Order results with a stable, deterministic sort.
- Return structured search results ready for API serialisation.
"""
