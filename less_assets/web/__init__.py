"""Web panel showing compile results and errors (requires the ``web`` extra)."""

from less_assets.web.app import create_app

__all__ = ["create_app"]
