"""entityhub - typed, actor-scoped registry for icons and roles."""

__version__ = "0.1.0"
