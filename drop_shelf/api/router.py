"""Aggregate all API sub-routers."""

from fastapi import APIRouter

from . import stack, selection, settings, ws

api_router = APIRouter()

api_router.include_router(stack.router)
api_router.include_router(selection.router)
api_router.include_router(settings.router)
api_router.include_router(ws.router)
