from __future__ import annotations

import json
import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect, status
from starlette.websockets import WebSocketState

from bitebox.api.ws.manager import ConnectionManager
from bitebox.application.mappers.event_envelope import registration_ack

router = APIRouter()
logger = logging.getLogger(__name__)


def _registration_user_id(raw: str) -> str | None:
    try:
        message = json.loads(raw)
    except ValueError:
        return None
    if not isinstance(message, dict) or message.get("type") != "register":
        return None
    user_id = message.get("userId")
    if not isinstance(user_id, str) or not user_id.strip():
        return None
    return user_id.strip()


@router.websocket("/ws")
async def websocket_endpoint(websocket: WebSocket) -> None:
    manager: ConnectionManager = websocket.app.state.ws_manager
    await manager.connect(websocket)

    user_id = websocket.query_params.get("user_id")
    try:
        if user_id:
            await manager.register(websocket=websocket, user_id=user_id)
            await websocket.send_text(registration_ack(user_id))
        while True:
            raw = await websocket.receive_text()
            registered_id = _registration_user_id(raw)
            if registered_id is None:
                logger.debug("ws_message_ignored")
                continue
            user_id = registered_id
            await manager.register(websocket=websocket, user_id=user_id)
            await websocket.send_text(registration_ack(user_id))
    except WebSocketDisconnect:
        await manager.unregister(websocket)
    except Exception:
        logger.exception("ws_connection_error", extra={"user_id": user_id})
        await manager.unregister(websocket)
        if websocket.client_state == WebSocketState.CONNECTED:
            await websocket.close(code=status.WS_1011_INTERNAL_ERROR)
