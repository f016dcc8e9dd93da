"""Core domain models.

The parser produces these types and the session consumes them. Pydantic is
used for validation and serialisation at every data boundary; graph models
are frozen so a parsed book cannot change after the parse.
"""

from __future__ import annotations

from typing import Final, Literal

from pydantic import BaseModel, ConfigDict, Field

RESTART: Final = "restart"

Target = int | Literal["restart"]


class Choice(BaseModel):
    """A labelled edge from a page to another page or to RESTART."""

    model_config = ConfigDict(frozen=True)

    label: str
    target: Target
    video: str | None = None  # media cue played before the transition

    @property
    def is_restart(self) -> bool:
        return self.target == RESTART


class Reward(BaseModel):
    """Something granted on arrival: an item, a gem count, or both."""

    model_config = ConfigDict(frozen=True)

    item: str | None = None
    gems: int | None = Field(default=None, ge=0)

    @property
    def is_empty(self) -> bool:
        return not self.item and not self.gems


class Page(BaseModel):
    """One node of narrative content plus its outgoing choices."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(gt=0)
    body_text: str = ""
    image_prompt: str | None = None
    reward: Reward | None = None
    choices: tuple[Choice, ...] = ()

    @property
    def is_terminal(self) -> bool:
        return not self.choices


class Book(BaseModel):
    """Page graph keyed by page id. Cycles are allowed."""

    model_config = ConfigDict(frozen=True)

    pages: dict[int, Page] = Field(default_factory=dict)

    def get(self, page_id: int) -> Page | None:
        return self.pages.get(page_id)

    def __contains__(self, page_id: object) -> bool:
        return page_id in self.pages

    def __len__(self) -> int:
        return len(self.pages)
