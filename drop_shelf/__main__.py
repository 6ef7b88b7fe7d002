"""Entry point: python -m drop_shelf"""

import logging

import uvicorn
from .config import settings

logger = logging.getLogger("drop_shelf")


def main():
    """Serve the stack API the drop-shelf panel connects to."""
    logger.info(f"Stack API on http://{settings.host}:{settings.port}/api (settings: {settings.settings_file})")
    uvicorn.run(
        "drop_shelf.app:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level="debug" if settings.debug else "info",
    )


if __name__ == "__main__":
    main()
