"""HTTP API layer: app factory, routers and dependency injection."""
