"""Entry point for the HealthCare+ clinic API server.

Launches the FastAPI application with Uvicorn.  Host, port, data
directory and log level come from the environment (see
``clinic_api.app.core.config``):

    HOST=127.0.0.1 PORT=3000 DATA_DIR=./data python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from clinic_api.app.core.config import get_settings
from clinic_api.app.core.logging_config import setup_logging

logger = logging.getLogger("run")

ENDPOINTS = (
    ("GET", "/api/appointments", "View appointments"),
    ("POST", "/api/appointments", "Book appointment"),
    ("GET", "/api/contacts", "View messages"),
    ("POST", "/api/contacts", "Send message"),
    ("GET", "/api/admin/stats", "Admin dashboard"),
    ("DELETE", "/api/admin/clear", "Clear all data"),
)


async def run_api() -> None:
    """Serve the API until interrupted."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_file or None)

    # Imported late so that logging is configured before the app is built.
    from clinic_api.app.main import app

    logger.info("HealthCare+ server running at http://%s:%s", settings.host, settings.port)
    for method, path, description in ENDPOINTS:
        logger.info("  %-6s %-20s %s", method, path, description)
    logger.info("Data stored in: %s", settings.data_dir)

    config = Config(app=app, host=settings.host, port=settings.port, reload=False, log_level=settings.log_level.lower())
    server = Server(config)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(run_api())
    except (KeyboardInterrupt, SystemExit):
        pass
