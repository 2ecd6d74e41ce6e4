"""HTTP surface: FastAPI app, routes and exception handlers."""
