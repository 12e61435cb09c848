"""Infrastructure layer — database engine, schema, counters, and the agreement store."""
