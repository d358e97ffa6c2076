"""API route handlers."""

from smogmap.api.routers import cities, health

__all__ = ["cities", "health"]
