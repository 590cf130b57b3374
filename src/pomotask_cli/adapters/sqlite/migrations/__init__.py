"""Database migrations for the local task store."""
