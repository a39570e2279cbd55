"""
Garden accounts API package.

Provides the FastAPI application for user accounts, sessions and wishlists.
"""

from .app import app, create_app

__all__ = ["app", "create_app"]
