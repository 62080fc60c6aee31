"""HTTP API for inspecting sources and resolving headings."""

from .app import create_app

__all__ = ["create_app"]
