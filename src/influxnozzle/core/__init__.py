"""Core domain: models, aggregation and encoding."""
