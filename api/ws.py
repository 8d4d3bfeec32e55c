"""WebSocket endpoint for real-time chat broadcasts."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from models.table import ChatMessage

logger = logging.getLogger(__name__)

router = APIRouter()

# Every connected sheet receives every chat message
connections: list[WebSocket] = []


async def broadcast(message: dict[str, Any]) -> None:
    """Send a message to all connected WebSocket clients.

    Args:
        message: The JSON-serializable message to send.
    """
    disconnected = []
    for i, ws in enumerate(connections):
        try:
            await ws.send_json(message)
        except Exception:
            logger.info("Dropping WebSocket client that failed to receive")
            disconnected.append(i)
    for i in reversed(disconnected):
        connections.pop(i)


async def notify_chat_message(message: ChatMessage) -> None:
    """Notify all clients of a new roll in the chat."""
    await broadcast({
        "type": "chat_message",
        **message.model_dump(mode="json"),
    })


async def notify_curse_fallen(actor_id: str, curse_resistance: dict[str, bool]) -> None:
    """Notify all clients that an actor lost a curse resistance."""
    await broadcast({
        "type": "curse_fallen",
        "actor_id": actor_id,
        "curse_resistance": curse_resistance,
    })


@router.websocket("/ws")
async def websocket_endpoint(websocket: WebSocket) -> None:
    """WebSocket endpoint for real-time chat notifications."""
    table = websocket.app.state.table

    await websocket.accept()
    connections.append(websocket)

    try:
        await websocket.send_json({
            "type": "connected",
            "table": table.name,
        })

        # Keep the connection open; clients have nothing to send
        while True:
            try:
                await websocket.receive_text()
            except WebSocketDisconnect:
                break
    finally:
        if websocket in connections:
            connections.remove(websocket)
