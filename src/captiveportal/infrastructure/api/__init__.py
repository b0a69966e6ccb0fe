"""HTTP API layer: application factory, dependencies, routes and schemas."""
