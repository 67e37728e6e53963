"""DDL providers."""
