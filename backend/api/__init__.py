"""
Barida identity API package.

Provides the FastAPI application for the tenant-scoped identity service.
"""

from .app import app, create_app

__all__ = ["app", "create_app"]
