"""Entry point for the Blog API server.

Builds the application from environment settings and serves it with
Uvicorn.  Configuration (``JWT_SECRET``, ``DATABASE_URL``, ``HOST``,
``PORT`` and friends) is read from the environment; a missing
``JWT_SECRET`` stops the process before the server starts.

Usage:
    JWT_SECRET=... python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from blog_api.app.core.config import load_settings
from blog_api.app.main import create_app


async def main() -> None:
    """Load settings, build the app and serve it until interrupted."""
    settings = load_settings()
    app = create_app(settings)
    config = Config(app=app, host=settings.host, port=settings.port, reload=False, log_level=settings.log_level.lower())
    server = Server(config)
    logging.getLogger(__name__).info("Server is running on port %s", settings.port)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass
