"""HTTP API."""

from sportsdeck.api.app import create_app

__all__ = ["create_app"]
