"""Play session endpoints: create, start, navigate, restart, reroll."""

from fastapi import APIRouter, HTTPException

from adventure_book import AdventureSession, InvalidTransition, MissingEntryPoint, NoBookLoaded, PageNotFound
from backend import player
from backend.player import BookLoadError

from .models import CreateSession, GoToBody

router = APIRouter()


def _get_session(session_id: str) -> AdventureSession:
    session = player.get_session(session_id)
    if session is None:
        raise HTTPException(404, "Session not found")
    return session


@router.post("/sessions")
async def create_session(body: CreateSession):
    """Create a play session and load the first adventure of its rotation."""
    try:
        session_id, session = await player.create_session(body.edition, body.adventures)
    except ValueError as e:
        raise HTTPException(400, str(e))
    except BookLoadError as e:
        raise HTTPException(502, str(e))
    return {"id": session_id, **player.render_payload(session)}


@router.get("/sessions/{session_id}")
async def get_session(session_id: str):
    """Get the current state of a session."""
    session = _get_session(session_id)
    return {"id": session_id, **player.render_payload(session)}


@router.delete("/sessions/{session_id}")
async def delete_session(session_id: str):
    """Discard a session."""
    if not player.delete_session(session_id):
        raise HTTPException(404, "Session not found")
    return {"ok": True}


@router.post("/sessions/{session_id}/start")
async def start(session_id: str):
    """Host ready signal: show page 1."""
    session = _get_session(session_id)
    try:
        transition = session.start()
    except (MissingEntryPoint, InvalidTransition, NoBookLoaded) as e:
        raise HTTPException(409, str(e))
    return player.render_payload(session, transition)


@router.post("/sessions/{session_id}/goto")
async def go_to_page(session_id: str, body: GoToBody):
    """Follow a choice to a page id or to "restart"."""
    session = _get_session(session_id)
    try:
        transition = session.go_to_page(body.target)
    except PageNotFound as e:
        raise HTTPException(404, str(e))
    except (MissingEntryPoint, InvalidTransition, NoBookLoaded) as e:
        raise HTTPException(409, str(e))
    return player.render_payload(session, transition)


@router.post("/sessions/{session_id}/restart")
async def restart(session_id: str):
    """Restart the adventure (costs a heart when the edition tracks them)."""
    session = _get_session(session_id)
    try:
        transition = session.restart()
    except (MissingEntryPoint, NoBookLoaded) as e:
        raise HTTPException(409, str(e))
    return player.render_payload(session, transition)


@router.post("/sessions/{session_id}/advance")
async def advance(session_id: str):
    """Continue to the next adventure from a reward page."""
    session = _get_session(session_id)
    try:
        transition = await player.reroll(session, advance=True)
    except InvalidTransition as e:
        raise HTTPException(409, str(e))
    except BookLoadError as e:
        raise HTTPException(502, str(e))
    return player.render_payload(session, transition)


@router.post("/sessions/{session_id}/reroll")
async def reroll(session_id: str):
    """Move to the next adventure in the rotation."""
    session = _get_session(session_id)
    try:
        transition = await player.reroll(session)
    except BookLoadError as e:
        raise HTTPException(502, str(e))
    return player.render_payload(session, transition)


@router.post("/sessions/{session_id}/refill")
async def refill(session_id: str):
    """Restore hearts after a game over."""
    session = _get_session(session_id)
    return player.render_payload(session, session.refill_hearts())
