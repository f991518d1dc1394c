"""
Document store.

Responsibilities:
- Hold named collections of JSON documents keyed by id.
- Seed the vendor collection from the bundled CSV on first use.
- Expose the active (non-blacklisted) vendors to the search engine.
"""
