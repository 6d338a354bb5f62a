"""HTTP transport for the headroom twin."""

from headroom_twin.api.app import create_app

__all__ = ["create_app"]
