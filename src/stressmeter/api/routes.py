"""
API Routes
===========
REST endpoints for the game client: feed AI responses, use relief
items, read the stress state and reset the session.
"""

from typing import Annotated

from fastapi import APIRouter, HTTPException, Query

from ..schemas import ChatResponse, InteractRequest, UseItemResult

router = APIRouter()

# Populated by server.create_app with the live session and websocket manager
_app_state = {}


def set_app_state(state: dict):
    """Called by server.py to share the session with the routes."""
    global _app_state
    _app_state = state


def _session():
    session = _app_state.get("session")
    if session is None:
        raise HTTPException(status_code=503, detail="No active session")
    return session


def _item(session, name: str):
    try:
        return session.item(name)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Relief item '{name}' not found")


async def _broadcast(session):
    ws_manager = _app_state.get("ws_manager")
    if ws_manager is not None and ws_manager.client_count > 0:
        await ws_manager.broadcast({"type": "update", "data": session.snapshot()})


@router.get("/")
async def root():
    """Health check endpoint."""
    return {"status": "ok", "service": "stressmeter"}


@router.get("/state")
async def get_state():
    """Full session snapshot."""
    return _session().snapshot()


@router.get("/events")
async def get_events(limit: Annotated[int, Query(ge=0)] = 50):
    """Recent notifications, newest first."""
    events = _session().events
    recent = events[-limit:][::-1] if limit > 0 else []
    return {"events": recent, "total": len(events)}


@router.post("/responses")
async def post_response(response: ChatResponse):
    """Feed one chat reply from the AI agent."""
    session = _session()
    counted = session.respond_chat(response)
    await _broadcast(session)
    return {"counted": counted, "state": session.snapshot()}


@router.post("/responses/audio")
async def post_audio_response():
    """Feed one audio reply (base stress only)."""
    session = _session()
    counted = session.respond_audio()
    await _broadcast(session)
    return {"counted": counted, "state": session.snapshot()}


@router.get("/items")
async def get_items():
    session = _session()
    return {"items": [item.to_dict() for item in session.items.values()]}


@router.post("/items/{name}/use")
async def use_item(name: str) -> UseItemResult:
    session = _session()
    item = _item(session, name)
    outcome = item.use_item()
    await _broadcast(session)
    return UseItemResult(
        item=name,
        outcome=outcome.value,
        stress=session.accumulator.current,
        remaining_uses=item.remaining_uses,
    )


@router.post("/items/{name}/interact")
async def interact_item(name: str, request: InteractRequest):
    """Player pressed 'use' while standing `distance` away from the item."""
    session = _session()
    item = _item(session, name)
    outcome = session.interact(name, request.distance)
    await _broadcast(session)
    return {
        "fired": outcome is not None,
        "outcome": outcome.value if outcome is not None else None,
        "interactable": item.interactable.to_dict(),
        "item": item.to_dict(),
    }


@router.post("/items/{name}/leave")
async def leave_item(name: str, request: InteractRequest):
    """Player walked `distance` away from the item."""
    session = _session()
    item = _item(session, name)
    left = session.leave(name, request.distance)
    return {"left": left, "interactable": item.interactable.to_dict()}


@router.post("/items/{name}/refill")
async def refill_item(name: str):
    session = _session()
    item = _item(session, name)
    item.refill()
    await _broadcast(session)
    return item.to_dict()


@router.post("/reset")
async def reset_session():
    session = _session()
    session.reset()
    await _broadcast(session)
    return session.snapshot()
