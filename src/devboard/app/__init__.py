"""FastAPI application package for DevBoard."""
