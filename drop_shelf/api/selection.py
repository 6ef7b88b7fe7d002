"""Selection API endpoints."""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from ..services.stack_manager import StackManager
from .deps import get_stack_manager

router = APIRouter(prefix="/selection", tags=["selection"])


class SelectionRequest(BaseModel):
    ids: list[str]


@router.get("")
async def get_selection(manager: StackManager = Depends(get_stack_manager)):
    return {"selected": manager.selected_files()}


@router.post("/select")
async def select(req: SelectionRequest, manager: StackManager = Depends(get_stack_manager)):
    return {"selected": manager.select(req.ids)}


@router.post("/deselect")
async def deselect(req: SelectionRequest, manager: StackManager = Depends(get_stack_manager)):
    return {"selected": manager.deselect(req.ids)}


@router.post("/toggle/{file_id}")
async def toggle(file_id: str, manager: StackManager = Depends(get_stack_manager)):
    return {"selected": manager.toggle_selection(file_id)}


@router.post("/toggle-all")
async def toggle_all(manager: StackManager = Depends(get_stack_manager)):
    return {"selected": manager.toggle_select_all()}


@router.delete("")
async def clear_selection(manager: StackManager = Depends(get_stack_manager)):
    return {"selected": manager.clear_selection()}
