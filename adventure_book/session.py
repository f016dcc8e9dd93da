"""Play-through state machine.

A session owns one parsed book at a time plus the mutable play state:
visited pages, inventory, hearts/gems/level counters and the position in
the adventure rotation. Every navigation call returns a Transition for the
host to render; the session never renders, fetches or plays anything.

  idle ──start/go_to_page──▶ at_page ──terminal page──▶ ended
    ▲                          │
    │                       restart (hearts left) ─▶ at_page(1)
    │                       restart (no hearts)   ─▶ game_over
    └──reroll/advance──── next adventure, or complete when the rotation ends
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Sequence

from pydantic import BaseModel

from .editions import BASE, Edition
from .models import RESTART, Book, Choice, Page, Reward, Target
from .parser import ENTRY_PAGE

logger = logging.getLogger(__name__)


class SessionStatus(str, Enum):
    IDLE = "idle"
    AT_PAGE = "at_page"
    ENDED = "ended"
    GAME_OVER = "game_over"
    COMPLETE = "complete"


_CLOSED = {SessionStatus.ENDED, SessionStatus.GAME_OVER, SessionStatus.COMPLETE}


class Transition(BaseModel):
    """Outcome of a navigation call."""

    status: SessionStatus
    page: Page | None = None
    choices: tuple[Choice, ...] = ()  # active choices, in display order
    awarded: Reward | None = None
    can_advance: bool = False
    adventure: str | None = None  # set after a reroll: the book to load next


class SessionSnapshot(BaseModel):
    status: SessionStatus
    edition: str
    page_id: int | None
    adventure: str | None
    adventure_index: int
    hearts: int | None
    gems: int
    level: int
    inventory: list[str]
    visited: list[int]


# ---------------------------------------------------------------------------
# Errors: recoverable conditions the host reports instead of crashing
# ---------------------------------------------------------------------------

class SessionError(RuntimeError):
    """Base class for navigation failures."""


class PageNotFound(SessionError, LookupError):
    def __init__(self, page_id: int) -> None:
        super().__init__(f"Page {page_id} not found.")
        self.page_id = page_id


class MissingEntryPoint(SessionError):
    """The loaded book has no page 1."""


class InvalidTransition(SessionError):
    """The requested move is not allowed from the current status."""


class NoBookLoaded(SessionError):
    """Navigation was requested before a book was loaded."""


# ---------------------------------------------------------------------------
# AdventureSession
# ---------------------------------------------------------------------------

class AdventureSession:
    """Mutable state for one play-through.

    Args:
        edition:    Rule set for hearts, rewards and revisits.
        adventures: Rotation of adventure names played in order by reroll().
                    The host resolves names to book text.
    """

    def __init__(self, edition: Edition = BASE, adventures: Sequence[str] = ()) -> None:
        self.edition = edition
        self.adventures = list(adventures)
        self.adventure_index = 0
        self.book: Book | None = None
        self.status = SessionStatus.IDLE
        self.page_id: int | None = None
        self.hearts = edition.starting_hearts
        self.gems = 0
        self.level = 1
        self._visited: set[int] = set()
        self._inventory: list[str] = []

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def adventure(self) -> str | None:
        if self.adventure_index < len(self.adventures):
            return self.adventures[self.adventure_index]
        return None

    @property
    def visited(self) -> frozenset[int]:
        return frozenset(self._visited)

    @property
    def inventory(self) -> tuple[str, ...]:
        return tuple(self._inventory)

    @property
    def current_page(self) -> Page | None:
        if self.book is None or self.page_id is None:
            return None
        return self.book.get(self.page_id)

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            status=self.status,
            edition=self.edition.name,
            page_id=self.page_id,
            adventure=self.adventure,
            adventure_index=self.adventure_index,
            hearts=self.hearts,
            gems=self.gems,
            level=self.level,
            inventory=list(self._inventory),
            visited=sorted(self._visited),
        )

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def load_book(self, book: Book) -> None:
        """Attach a freshly parsed book and wait for start()."""
        self.book = book
        self._visited.clear()
        self.page_id = None
        self.status = SessionStatus.IDLE

    def start(self) -> Transition:
        """Host ready signal: enter page 1 of the loaded book."""
        book = self._require_book()
        if self.status != SessionStatus.IDLE:
            raise InvalidTransition(f"Cannot start while {self.status.value}")
        entry = book.get(ENTRY_PAGE)
        if entry is None:
            raise MissingEntryPoint("Error: could not load adventure or missing PAGE 1.")
        return self._enter(entry)

    def go_to_page(self, target: Target) -> Transition:
        if target == RESTART:
            return self.restart()

        book = self._require_book()
        if self.status in _CLOSED:
            raise InvalidTransition(f"Cannot navigate while {self.status.value}")
        page = book.get(target)
        if page is None:
            raise PageNotFound(target)
        return self._enter(page)

    def restart(self) -> Transition:
        """Clear visited pages and go back to page 1, paying a heart if tracked."""
        book = self._require_book()
        entry = book.get(ENTRY_PAGE)
        if entry is None:
            raise MissingEntryPoint("Error: could not load adventure or missing PAGE 1.")

        self._visited.clear()
        self.page_id = None
        if self._lose_heart():
            return Transition(status=self.status)
        return self._enter(entry)

    def reroll(self) -> Transition:
        """Move on to the next adventure in the rotation.

        Passing the end of the rotation completes the session once; it does
        not wrap around to the first adventure.
        """
        self._visited.clear()
        self.page_id = None

        if self.status == SessionStatus.COMPLETE:
            return Transition(status=self.status)

        next_index = self.adventure_index + 1
        if next_index >= len(self.adventures):
            self.status = SessionStatus.COMPLETE
            logger.debug("rotation complete after %d adventures", len(self.adventures))
            return Transition(status=self.status)

        self.adventure_index = next_index
        self.level += 1
        self.book = None
        self.status = SessionStatus.IDLE
        logger.debug("reroll to adventure %d (%s)", next_index, self.adventure)
        return Transition(status=self.status, adventure=self.adventure)

    def advance(self) -> Transition:
        """Take the "continue to next adventure" offer of a reward page."""
        page = self.current_page
        if page is None or self.status != SessionStatus.AT_PAGE or not self._offers_advance(page):
            raise InvalidTransition("Current page does not offer an advance")

        if self._lose_heart():
            self._visited.clear()
            self.page_id = None
            return Transition(status=self.status)
        return self.reroll()

    def refill_hearts(self) -> Transition:
        """Restore hearts to the edition's starting value.

        From game over the session returns to idle so the host can start()
        again.
        """
        self.hearts = self.edition.starting_hearts
        if self.status == SessionStatus.GAME_OVER:
            self.status = SessionStatus.IDLE
        return Transition(status=self.status)

    # ------------------------------------------------------------------
    # Rewards and choices
    # ------------------------------------------------------------------

    def award_reward(self, page: Page) -> Reward | None:
        """Merge a page's reward into the session; return what was granted."""
        reward = page.reward
        if reward is None:
            return None

        item = None
        if reward.item and reward.item not in self._inventory:
            self._inventory.append(reward.item)
            item = reward.item
        gems = reward.gems or 0
        self.gems += gems

        if item is None and not gems:
            return None
        return Reward(item=item, gems=gems or None)

    def active_choices(self, page: Page | None = None) -> tuple[Choice, ...]:
        """Choices to display; visited targets are hidden when the edition says so."""
        if page is None:
            page = self.current_page
        if page is None:
            return ()
        if not self.edition.suppress_visited:
            return page.choices
        return tuple(c for c in page.choices if c.is_restart or c.target not in self._visited)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _require_book(self) -> Book:
        if self.book is None:
            raise NoBookLoaded("No adventure loaded")
        return self.book

    def _offers_advance(self, page: Page) -> bool:
        return self.edition.reward_advances and page.reward is not None and not page.reward.is_empty

    def _lose_heart(self) -> bool:
        """Spend one heart. Returns True when that ends the game."""
        if self.hearts is None:
            return False
        self.hearts = max(self.hearts - 1, 0)
        if self.hearts == 0:
            self.status = SessionStatus.GAME_OVER
            logger.debug("game over")
            return True
        return False

    def _enter(self, page: Page) -> Transition:
        first_visit = page.id not in self._visited
        self._visited.add(page.id)
        self.page_id = page.id

        awarded = None
        if first_visit or self.edition.reward_on_revisit:
            awarded = self.award_reward(page)

        if self._offers_advance(page):
            self.status = SessionStatus.AT_PAGE
            choices: tuple[Choice, ...] = ()
            can_advance = True
        else:
            self.status = SessionStatus.ENDED if page.is_terminal else SessionStatus.AT_PAGE
            choices = self.active_choices(page)
            can_advance = False

        logger.debug("entered page %d status=%s choices=%d", page.id, self.status.value, len(choices))
        return Transition(
            status=self.status,
            page=page,
            choices=choices,
            awarded=awarded,
            can_advance=can_advance,
        )
