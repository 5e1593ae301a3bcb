"""Infrastructure layer: search-path enumeration and indexing."""
