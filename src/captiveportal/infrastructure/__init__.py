"""Infrastructure layer: API, authentication and persistence."""
