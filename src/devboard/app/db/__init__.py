"""Database engine, sessions and development seed data."""
