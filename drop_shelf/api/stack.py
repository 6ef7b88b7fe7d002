"""Stack API endpoints."""

from typing import Optional
from fastapi import APIRouter, Depends
from pydantic import BaseModel

from ..services.stack_manager import StackManager
from .deps import get_stack_manager

router = APIRouter(prefix="/stack", tags=["stack"])


class DropRequest(BaseModel):
    paths: list[str]


class RemoveRequest(BaseModel):
    path: Optional[str] = None
    id: Optional[str] = None


class MoveRequest(BaseModel):
    destination: Optional[str] = None


class CopyPathsRequest(BaseModel):
    paths: Optional[list[str]] = None


@router.get("")
async def get_stack(manager: StackManager = Depends(get_stack_manager)):
    return {"files": manager.snapshot()}


@router.get("/stats")
async def get_stack_stats(manager: StackManager = Depends(get_stack_manager)):
    return manager.stats()


@router.get("/groups")
async def get_stack_groups(manager: StackManager = Depends(get_stack_manager)):
    return {category.value: files for category, files in manager.groups().items()}


@router.post("/drop")
async def drop_files(req: DropRequest, manager: StackManager = Depends(get_stack_manager)):
    return await manager.add_files(req.paths)


@router.delete("")
async def clear_stack(manager: StackManager = Depends(get_stack_manager)):
    return {"files": await manager.clear_stack()}


@router.post("/remove")
async def remove_file(req: RemoveRequest, manager: StackManager = Depends(get_stack_manager)):
    if req.id is not None:
        files = await manager.remove_file_by_id(req.id)
    elif req.path is not None:
        files = await manager.remove_file(req.path)
    else:
        files = manager.snapshot()
    return {"files": files}


@router.post("/move")
async def move_files(req: MoveRequest, manager: StackManager = Depends(get_stack_manager)):
    return await manager.move_files_to_destination(req.destination)


@router.post("/copy-paths")
async def copy_file_paths(
    req: Optional[CopyPathsRequest] = None,
    manager: StackManager = Depends(get_stack_manager),
):
    return await manager.copy_file_paths(req.paths if req else None)


@router.post("/drag-out")
async def drag_out(manager: StackManager = Depends(get_stack_manager)):
    return {"paths": manager.drag_out_paths()}
