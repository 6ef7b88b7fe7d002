"""FastAPI application factory."""

import logging
from typing import Optional

from fastapi import FastAPI

from .config import settings
from .api.router import api_router
from .api.ws import manager as ws_manager
from .services.settings_provider import JsonSettingsProvider
from .services.stack_manager import StackManager

# Configure logging for our modules
logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(name)s: %(message)s")
if settings.debug:
    logging.getLogger("drop_shelf").setLevel(logging.DEBUG)


def create_app(stack_manager: Optional[StackManager] = None) -> FastAPI:
    app = FastAPI(
        title="drop-shelf",
        version="0.1.0",
        description="Drop shelf file stack manager",
    )

    if stack_manager is None:
        stack_manager = StackManager(JsonSettingsProvider(settings.settings_file))
    stack_manager.subscribe(ws_manager)
    app.state.stack_manager = stack_manager

    app.include_router(api_router, prefix="/api")
    return app
