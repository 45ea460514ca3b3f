"""Search engine core: document cache, scoring, query execution and upkeep."""
