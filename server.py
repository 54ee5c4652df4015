#!/usr/bin/env python3
"""Snake arcade server - FastAPI + uvicorn"""

import logging

import uvicorn

from snake_arcade.main import app, settings


if __name__ == "__main__":
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger(__name__).info("Snake server starting on http://%s:%d", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port)
