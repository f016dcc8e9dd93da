"""Play pipeline: fetch book text → parse → await host start → navigate.

Fetching is async (local library or remote URL); parsing and navigation are
synchronous calls into adventure_book. Sessions live in an in-process
registry keyed by id. Each one is an independent AdventureSession; nothing
is shared between play-throughs.
"""

import logging
import uuid
from typing import Any

import httpx

from adventure_book import AdventureSession, Book, Transition, get_edition, has_entry_point, parse_book
from backend import storage

logger = logging.getLogger(__name__)

_sessions: dict[str, AdventureSession] = {}


class BookLoadError(RuntimeError):
    """Raised when a book's text cannot be fetched."""


async def fetch_book_text(source: str, timeout: float = 30.0) -> str:
    """Return raw book text for a library name or an http(s) URL."""
    if not source.startswith(("http://", "https://")):
        text = storage.get_book_text(source)
        if text is None:
            raise BookLoadError(f"Adventure '{source}' not found")
        return text

    try:
        async with httpx.AsyncClient(timeout=timeout) as client:
            resp = await client.get(source)
            resp.raise_for_status()
    except httpx.ConnectError as e:
        raise BookLoadError(f"Cannot connect to {source}") from e
    except httpx.HTTPStatusError as e:
        raise BookLoadError(f"Failed to load book: HTTP {e.response.status_code} (URL: {source})") from e
    except httpx.TimeoutException as e:
        raise BookLoadError(f"Timed out loading {source}") from e
    except (httpx.RequestError, httpx.InvalidURL) as e:
        raise BookLoadError(f"Failed to load book from {source}: {e}") from e
    return resp.text


async def load_book(source: str) -> Book:
    try:
        text = await fetch_book_text(source)
    except BookLoadError as e:
        logger.error(f"Failed to load book: {e}")
        raise
    book = parse_book(text)
    if not has_entry_point(book):
        logger.warning(f"Adventure '{source}' has no PAGE 1")
    return book


# ── Session registry ──────────────────────────────────────


async def create_session(
    edition_name: str | None = None, adventures: list[str] | None = None
) -> tuple[str, AdventureSession]:
    """Create a session from config and load the first book of its rotation.

    Raises ValueError for an unknown edition and BookLoadError when the
    first book cannot be fetched.
    """
    config = storage.get_config()
    edition = get_edition(edition_name or config["edition"])
    session = AdventureSession(edition, adventures or config["adventures"])
    if session.adventure is not None:
        session.load_book(await load_book(session.adventure))

    session_id = uuid.uuid4().hex
    _sessions[session_id] = session
    logger.debug("created session %s edition=%s", session_id, edition.name)
    return session_id, session


def get_session(session_id: str) -> AdventureSession | None:
    return _sessions.get(session_id)


def delete_session(session_id: str) -> bool:
    return _sessions.pop(session_id, None) is not None


def clear_sessions() -> None:
    _sessions.clear()


async def reroll(session: AdventureSession, *, advance: bool = False) -> Transition:
    """Reroll (or take a reward advance) and load the next book if there is one.

    If the next book fails to load the session stays idle without a book.
    """
    transition = session.advance() if advance else session.reroll()
    if transition.adventure is not None:
        session.load_book(await load_book(transition.adventure))
    return transition


def render_payload(session: AdventureSession, transition: Transition | None = None) -> dict[str, Any]:
    """Everything a client needs to draw the current state.

    Image and cover names are relative paths; clients resolve them.
    """
    config = storage.get_config()
    payload: dict[str, Any] = {"session": session.snapshot().model_dump(mode="json")}
    if transition is not None:
        payload["transition"] = transition.model_dump(mode="json")

    adventure = session.adventure
    page_id = session.page_id
    payload["image"] = (
        storage.page_image_name(adventure, page_id, config["image_folder"])
        if adventure and page_id is not None and "://" not in adventure
        else None
    )
    payload["cover"] = storage.cover_image_name(session.adventure_index, config["cover_folder"])
    return payload
