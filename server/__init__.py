"""HTTP layer: FastAPI application, routes and templates."""
