"""HTTP facade — FastAPI application exposing the entry store and proxy."""

from fqdnproxy.api.app import create_app

__all__ = ["create_app"]
