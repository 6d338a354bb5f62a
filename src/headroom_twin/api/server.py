"""
ASGI entry point for the headroom twin API.

Usage
-----
    python -m headroom_twin.api.server

or, with an ASGI server of your choice::

    uvicorn headroom_twin.api.server:app --port 3001
"""

from __future__ import annotations

import logging
import os

import uvicorn

from headroom_twin.api.app import create_app

logger = logging.getLogger(__name__)

DEFAULT_PORT = 3001

app = create_app()


def main() -> None:
    port = int(os.environ.get("HEADROOM_TWIN_PORT", DEFAULT_PORT))
    logger.info(f"Headroom twin API running at http://localhost:{port}")
    uvicorn.run(app, host="0.0.0.0", port=port)


if __name__ == "__main__":
    main()
