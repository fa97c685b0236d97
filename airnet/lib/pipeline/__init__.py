"""CSV ingestion and the full-analysis runner / CLI."""
