"""API route handlers."""

from api.routes import health, algorithms, root

__all__ = ["health", "algorithms", "root"]
