"""Socket.IO channel used to tell a user's clients that their tasks changed.

Clients connect and emit ``join-room`` with their email; after every task
mutation the server emits ``task-updated-<email>`` (no payload) to that room
and the client refetches its task list.
"""

import logging

import socketio
from fastapi import BackgroundTasks, Depends, Request

logger = logging.getLogger(__name__)


def change_event_name(identity: str) -> str:
    return f"task-updated-{identity}"


def create_socket_server(allowed_origins: list[str]) -> socketio.AsyncServer:
    sio = socketio.AsyncServer(async_mode="asgi", cors_allowed_origins=allowed_origins)

    @sio.event
    async def connect(sid, environ):
        logger.info("Client connected: %s", sid)

    @sio.on("join-room")
    async def join_room(sid, identity):
        if not identity:
            return
        await sio.enter_room(sid, identity)
        logger.debug("Client %s joined room %s", sid, identity)

    @sio.on("leave-room")
    async def leave_room(sid, identity):
        if not identity:
            return
        await sio.leave_room(sid, identity)

    @sio.event
    async def disconnect(sid):
        logger.info("Client disconnected: %s", sid)

    return sio


class ChangeChannel:
    """Publishes change signals to the room of one identity."""

    def __init__(self, sio: socketio.AsyncServer):
        self.sio = sio

    async def publish(self, identity: str) -> None:
        await self.sio.emit(change_event_name(identity), room=identity)


class ChangeNotifier:
    """Schedules change signals to go out after the HTTP response.

    Delivery is best effort: a failing publish is logged and dropped, it never
    reaches the request that caused it.
    """

    def __init__(self, channel, background_tasks: BackgroundTasks):
        self.channel = channel
        self.background_tasks = background_tasks

    def notify_changed(self, identity: str) -> None:
        self.background_tasks.add_task(self._publish, identity)

    async def _publish(self, identity: str) -> None:
        try:
            await self.channel.publish(identity)
        except Exception:
            logger.warning("Could not publish change signal for %s", identity, exc_info=True)


def get_channel(request: Request):
    return request.app.state.channel


def get_notifier(background_tasks: BackgroundTasks, channel=Depends(get_channel)) -> ChangeNotifier:
    return ChangeNotifier(channel, background_tasks)
