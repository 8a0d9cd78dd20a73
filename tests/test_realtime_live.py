import asyncio
import socket
import threading
import time

import httpx
import pytest
import socketio
import uvicorn

from taskmate.main import create_app
from taskmate.realtime import change_event_name

ANA = "ana@example.com"
BEN = "ben@example.com"


def _free_port() -> int:
    with socket.socket() as s:
        s.bind(("127.0.0.1", 0))
        return s.getsockname()[1]


@pytest.fixture
def server_url(tmp_path):
    """Serve the full ASGI app (HTTP + Socket.IO) on a local port."""
    app = create_app(database_url=f"sqlite:///{tmp_path / 'live.db'}")
    asgi_app = socketio.ASGIApp(app.state.sio, other_asgi_app=app)
    port = _free_port()
    server = uvicorn.Server(uvicorn.Config(asgi_app, host="127.0.0.1", port=port, log_level="warning"))
    thread = threading.Thread(target=server.run, daemon=True)
    thread.start()

    deadline = time.monotonic() + 10
    while not server.started:
        if time.monotonic() > deadline:
            raise RuntimeError("test server did not start")
        time.sleep(0.05)

    yield f"http://127.0.0.1:{port}"

    server.should_exit = True
    thread.join(timeout=10)


async def _watch_and_create(url: str, room: str, creator: str, wait: float = 5):
    """Join ``room``, create a task as ``creator`` and collect the change signals seen."""
    received = []
    arrived = asyncio.Event()
    sio = socketio.AsyncClient()

    @sio.on(change_event_name(room))
    async def on_change(*args):
        received.append(args)
        arrived.set()

    await sio.connect(url, transports=["polling"])
    try:
        # call() waits for the server's ack, so the room is joined afterwards
        await sio.call("join-room", room, timeout=10)

        async with httpx.AsyncClient(base_url=url) as http:
            assert (await http.post("/jwt", json={"email": creator})).status_code == 200
            assert (await http.post("/tasks", json={"title": "Buy milk"})).status_code == 200

        try:
            await asyncio.wait_for(arrived.wait(), timeout=wait)
        except asyncio.TimeoutError:
            pass
    finally:
        await sio.disconnect()
    return received


def test_joined_client_receives_change_signal(server_url):
    received = asyncio.run(_watch_and_create(server_url, ANA, ANA))
    assert received == [()]


def test_client_in_other_room_hears_nothing(server_url):
    received = asyncio.run(_watch_and_create(server_url, BEN, ANA, wait=1))
    assert received == []
