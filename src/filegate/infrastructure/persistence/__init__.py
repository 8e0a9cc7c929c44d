"""Database persistence layer."""
