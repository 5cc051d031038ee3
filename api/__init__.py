"""HTTP surface for the objection handler."""

from .app import create_app

__all__ = ["create_app"]
