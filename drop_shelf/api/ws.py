"""WebSocket endpoint for live stack updates."""

import logging
from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from ..models.common import FileDescriptor
from ..models.notification import Notification

logger = logging.getLogger(__name__)

router = APIRouter(tags=["websocket"])


class ConnectionManager:
    """Broadcasts stack updates to every connected client."""

    def __init__(self):
        self.active: list[WebSocket] = []

    async def connect(self, ws: WebSocket):
        await ws.accept()
        self.active.append(ws)

    def disconnect(self, ws: WebSocket):
        if ws in self.active:
            self.active.remove(ws)

    async def broadcast(self, message: dict):
        for ws in list(self.active):
            try:
                await ws.send_json(message)
            except Exception:
                self.disconnect(ws)

    async def on_files_updated(self, files: list[FileDescriptor]) -> None:
        await self.broadcast({
            "type": "files_updated",
            "files": [f.model_dump(mode="json") for f in files],
        })

    async def on_notification(self, notification: Notification) -> None:
        await self.broadcast({
            "type": "notification",
            **notification.model_dump(mode="json"),
        })


manager = ConnectionManager()


@router.websocket("/ws")
async def websocket_endpoint(ws: WebSocket):
    await manager.connect(ws)
    stack_manager = ws.app.state.stack_manager
    await ws.send_json({
        "type": "files_updated",
        "files": [f.model_dump(mode="json") for f in stack_manager.snapshot()],
    })

    try:
        while True:
            # Clients only listen; incoming frames are ignored.
            await ws.receive_text()
    except WebSocketDisconnect:
        manager.disconnect(ws)
    except Exception:
        logger.debug("WebSocket closed unexpectedly", exc_info=True)
        manager.disconnect(ws)
