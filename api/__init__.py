"""
HTTP surface of the order service.

This package provides the FastAPI application that routes requests to the
order workflow and maps its errors to status codes.
"""

from api.main import app, create_app

__all__ = ["app", "create_app"]
