"""PostgreSQL persistence adapters."""
