"""Read-through caches for validator and workflow reference data."""
