"""Edition rule sets.

An edition selects how a session treats hearts, rewards and revisits. The
parser is the same for every edition; only navigation rules differ.

  base   — no hearts, rewards once per play-through, every choice shown
  items  — 3 hearts, a reward page offers "continue to next adventure"
  gems   — 3 hearts, gems re-awarded on every visit, visited targets hidden
  video  — same rules as items; its books carry video cues on choices
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Edition(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    starting_hearts: int | None = Field(default=None, ge=1)  # None = hearts not tracked
    suppress_visited: bool = False
    reward_on_revisit: bool = False
    reward_advances: bool = False

    @property
    def tracks_hearts(self) -> bool:
        return self.starting_hearts is not None


BASE = Edition(name="base")
ITEMS = Edition(name="items", starting_hearts=3, reward_advances=True)
GEMS = Edition(name="gems", starting_hearts=3, suppress_visited=True, reward_on_revisit=True)
VIDEO = Edition(name="video", starting_hearts=3, reward_advances=True)

EDITIONS: dict[str, Edition] = {e.name: e for e in (BASE, ITEMS, GEMS, VIDEO)}


def get_edition(name: str) -> Edition:
    """Look up a preset edition by name (case-insensitive)."""
    edition = EDITIONS.get(name.strip().lower())
    if edition is None:
        raise ValueError(f"Unknown edition {name!r}; expected one of {', '.join(EDITIONS)}")
    return edition
