"""
stressmeter API Server
=======================
FastAPI server exposing one game session to the game client.

Usage:
    stressmeter-server                        # default session, port 8000
    stressmeter-server --port 9000
    stressmeter-server --profile session.json # custom tuning
"""

import argparse
import json
import logging
from typing import Optional

from fastapi import FastAPI, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware

from ..config import settings
from ..config.profiles import SessionProfile
from ..session import GameSession
from .routes import router, set_app_state
from .ws_handler import ConnectionManager

logger = logging.getLogger(__name__)


def create_app(session: Optional[GameSession] = None) -> FastAPI:
    """Build the app around a session (a default one if none is given)."""
    session = session or GameSession()
    ws_manager = ConnectionManager()

    app = FastAPI(title="stressmeter API", version="1.0.0")
    app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])
    app.include_router(router, prefix="/api")

    app.state.session = session
    app.state.ws_manager = ws_manager
    set_app_state({"session": session, "ws_manager": ws_manager})

    @app.websocket("/ws")
    async def websocket_endpoint(websocket: WebSocket):
        await ws_manager.connect(websocket)
        try:
            await ws_manager.send(websocket, {"type": "update", "data": session.snapshot()})
            while True:
                text = await websocket.receive_text()
                await ws_manager.handle_message(websocket, text, session.snapshot)
        except WebSocketDisconnect:
            logger.debug("Stress feed client disconnected")
        finally:
            ws_manager.disconnect(websocket)

    return app


def main():
    import uvicorn

    parser = argparse.ArgumentParser(description="stressmeter API Server")
    parser.add_argument("--host", default=settings.API_HOST)
    parser.add_argument("--port", type=int, default=settings.API_PORT)
    parser.add_argument("--profile", default="", help="Optional session profile JSON")
    args = parser.parse_args()

    logging.basicConfig(level=settings.LOG_LEVEL, format=settings.LOG_FORMAT)

    profile = None
    if args.profile:
        with open(args.profile, "r", encoding="utf-8") as f:
            profile = SessionProfile.from_dict(json.load(f))

    app = create_app(GameSession(profile))
    logger.info(f"stressmeter API on http://{args.host}:{args.port}/api")
    uvicorn.run(app, host=args.host, port=args.port, log_level="warning")


if __name__ == "__main__":
    main()
