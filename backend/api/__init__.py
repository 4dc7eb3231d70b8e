"""
Orion API package.

Provides the FastAPI application for the Orion task management service.
"""

from .app import app, create_app

__all__ = ["app", "create_app"]
