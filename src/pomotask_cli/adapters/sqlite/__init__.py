"""SQLite adapter for the local task store."""
