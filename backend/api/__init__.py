"""
Trak API package.

Provides the FastAPI application for the Trak commuting tracker.
"""

from .app import app, create_app

__all__ = ["app", "create_app"]
