"""HTTP API for the calculus calculator."""

from .server import create_app

__all__ = ["create_app"]
