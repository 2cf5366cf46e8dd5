"""Record building, projection, orchestration and reporting services."""
