"""API routers."""

from api.routers import pipeline, shoes

__all__ = ["shoes", "pipeline"]
