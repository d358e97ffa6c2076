"""HTTP API for enriched city listings."""

from .app import configure_logging, create_app

__all__ = ["configure_logging", "create_app"]
