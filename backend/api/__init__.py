"""
Axys auth API package.

Provides the FastAPI application that exposes the auth session to the
mobile client.
"""

from .app import app, create_app

__all__ = ["app", "create_app"]
