"""Database engine, sessions and schema helpers."""
