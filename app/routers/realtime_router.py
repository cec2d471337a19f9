"""
Realtime API: websocket streams of complete snapshots.

Each socket sends the full current state on connect and again after every
change. Snapshots are rendered for the connected user, so two participants
of the same conversation may receive different messages.
"""

from __future__ import annotations

import asyncio
from typing import Any, AsyncIterator, Awaitable, Callable, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect, status
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from app.config import get_settings
from app.core.app_state import state
from app.core.snapshot_hub import user_conversations_topic
from app.db import get_db
from app.exceptions import MessagingError
from app.infra.logging_config import get_logger
from app.services.conversation_list_projector import ConversationListProjector
from app.services.conversation_store import ConversationStore
from app.services.user_service import UserService

logger = get_logger("realtime")

router = APIRouter(prefix="/ws", tags=["realtime"])


def _caller_uid(websocket: WebSocket) -> Optional[str]:
    uid = (websocket.headers.get(get_settings().user_id_header) or "").strip()
    return uid or None


async def _pump(
    websocket: WebSocket,
    stream: AsyncIterator[Any],
    send: Callable[[Any], Awaitable[bool]],
) -> None:
    """
    Forward snapshots until the client goes away or send() returns False.
    A reader task watches for the disconnect so an idle stream is released
    without waiting for the next change.
    """

    async def forward() -> None:
        async for snapshot in stream:
            if not await send(snapshot):
                return

    async def watch() -> None:
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                return

    forward_task = asyncio.create_task(forward())
    watch_task = asyncio.create_task(watch())
    try:
        done, pending = await asyncio.wait(
            {forward_task, watch_task}, return_when=asyncio.FIRST_COMPLETED
        )
        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)
        for task in done:
            if task is forward_task and not task.cancelled():
                exc = task.exception()
                if exc is not None and not isinstance(exc, WebSocketDisconnect):
                    raise exc
    finally:
        await stream.aclose()


@router.websocket("/conversations/{conversation_id}")
async def conversation_stream(
    websocket: WebSocket,
    conversation_id: UUID,
    db: Session = Depends(get_db),
) -> None:
    """Stream the rendered message log of one conversation."""
    uid = _caller_uid(websocket)
    if uid is None:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return
    store = ConversationStore(db)
    try:
        await run_in_threadpool(store.require_participant, conversation_id, uid)
    except MessagingError as e:
        logger.info("Rejected stream of %s for %s: %s", conversation_id, uid, e.code)
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    def render():
        db.expire_all()
        conversation = store.get_conversation(conversation_id)
        if conversation is None:
            return None
        config = UserService(db).get_filter_config(uid)
        messages = store.get_snapshot(conversation_id)
        return store.render_snapshot(conversation, messages, uid, config)

    async def load():
        return await run_in_threadpool(render)

    async def send(snapshot) -> bool:
        if snapshot is None:
            # Conversation deleted
            await websocket.close(code=status.WS_1000_NORMAL_CLOSURE)
            return False
        await websocket.send_json(snapshot.model_dump(mode="json"))
        return True

    await websocket.accept()
    await _pump(websocket, store.subscribe(conversation_id, load), send)


@router.websocket("/conversations")
async def conversation_list_stream(
    websocket: WebSocket,
    search: Optional[str] = None,
    db: Session = Depends(get_db),
) -> None:
    """Stream the caller's projected conversation list."""
    uid = _caller_uid(websocket)
    if uid is None:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return
    store = ConversationStore(db)
    projector = ConversationListProjector()

    def project():
        db.expire_all()
        config = UserService(db).get_filter_config(uid)
        return projector.project(uid, store.list_for_user(uid), config, search)

    async def load():
        return await run_in_threadpool(project)

    async def send(rows) -> bool:
        await websocket.send_json([row.model_dump(mode="json") for row in rows])
        return True

    await websocket.accept()
    stream = state.hub.stream(user_conversations_topic(uid), load)
    await _pump(websocket, stream, send)
