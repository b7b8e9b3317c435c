"""
Realtime WebSocket route.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Query, WebSocket, WebSocketDisconnect, status

from stockflow.core.errors import AppError, AuthenticationError, ValidationError
from stockflow.core.security import decode_access_token
from stockflow.realtime.broadcaster import broadcaster

logger = logging.getLogger(__name__)

router = APIRouter()


@router.websocket("/ws")
async def realtime_socket(websocket: WebSocket, token: Optional[str] = Query(None)):
    """
    Realtime event stream.

    The JWT is passed as the ``token`` query parameter. Clients then send
    ``{"action": "subscribe" | "unsubscribe", "channel": "<area>"}`` messages.
    """
    try:
        actor = decode_access_token(token)
    except AuthenticationError as e:
        logger.warning(f"Rejected realtime connection: {e.message}")
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    await websocket.accept()
    broadcaster.connect(websocket, actor)

    try:
        while True:
            channel = None
            try:
                message = await websocket.receive_json()
                if not isinstance(message, dict):
                    raise ValidationError("Messages must be JSON objects")

                action = message.get("action")
                channel = message.get("channel")

                if action == "subscribe":
                    broadcaster.subscribe(websocket, channel)
                    await websocket.send_json({"event": "subscribed", "channel": channel})
                elif action == "unsubscribe":
                    broadcaster.unsubscribe(websocket, channel)
                    await websocket.send_json({"event": "unsubscribed", "channel": channel})
                else:
                    raise ValidationError(f"Unknown action: {action}")
            except AppError as e:
                await websocket.send_json({"event": "error", "channel": channel, **e.to_dict()})
            except ValueError:
                await websocket.send_json({"event": "error", "channel": None, "detail": "Invalid JSON",
                                           "kind": ValidationError.kind})
    except WebSocketDisconnect:
        pass
    finally:
        broadcaster.disconnect(websocket)
