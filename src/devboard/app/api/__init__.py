"""HTTP layer: routers and response mapping."""
