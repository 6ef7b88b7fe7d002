"""File settings API endpoints."""

from fastapi import APIRouter, Depends

from ..models.settings import FileSettingsUpdate
from ..services.stack_manager import StackManager
from .deps import get_stack_manager

router = APIRouter(prefix="/settings", tags=["settings"])


@router.get("")
async def get_settings(manager: StackManager = Depends(get_stack_manager)):
    return manager.settings_provider.get_file_settings()


@router.patch("")
async def update_settings(
    update: FileSettingsUpdate,
    manager: StackManager = Depends(get_stack_manager),
):
    return manager.settings_provider.update_file_settings(update)


@router.delete("/recent-destinations")
async def clear_recent_destinations(manager: StackManager = Depends(get_stack_manager)):
    manager.settings_provider.clear_recent_destinations()
    return manager.settings_provider.get_file_settings()


@router.post("/reset")
async def reset_settings(manager: StackManager = Depends(get_stack_manager)):
    manager.settings_provider.reset()
    return manager.settings_provider.get_file_settings()
