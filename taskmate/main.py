import logging
import time
from typing import Optional

import socketio
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from taskmate import config
from taskmate.database import create_session_factory
from taskmate.errors import register_error_handlers
from taskmate.logging_setup import setup_logging
from taskmate.realtime import ChangeChannel, create_socket_server
from taskmate.routers import auth, tasks, users

logger = logging.getLogger(__name__)


def create_app(database_url: Optional[str] = None, channel=None) -> FastAPI:
    """Build the API.

    The store handle is opened here and shared by every request through
    ``app.state``; ``channel`` defaults to the Socket.IO server's channel.
    """
    app = FastAPI(title="TaskMate API")

    app.state.session_factory = create_session_factory(database_url or config.DATABASE_URL)
    app.state.sio = create_socket_server(config.ALLOWED_ORIGINS)
    app.state.channel = channel or ChangeChannel(app.state.sio)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "x-requested-with"],
        expose_headers=["set-cookie"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.info("%s %s %s %.1f ms", request.method, request.url.path, response.status_code, elapsed_ms)
        return response

    register_error_handlers(app)

    # API routers
    app.include_router(auth.router)
    app.include_router(users.router)
    app.include_router(tasks.router)

    @app.get("/", response_class=PlainTextResponse)
    def root():
        return "Hello from TaskMate Server.."

    return app


app = create_app()
# Socket.IO shares the HTTP port; serve this with uvicorn
asgi_app = socketio.ASGIApp(app.state.sio, other_asgi_app=app)


def run():
    import uvicorn

    setup_logging(config.LOG_LEVEL)
    logger.info("TaskMate is running on port %s", config.PORT)
    uvicorn.run(asgi_app, host="0.0.0.0", port=config.PORT)
