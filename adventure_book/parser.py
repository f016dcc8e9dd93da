"""Adventure book parsing into a page graph.

Source format:

  === PAGE 1 ===
  IMAGE: A dimly lit forest clearing at dawn, fantasy painting style
  ITEM: Green Gem
  GEMS: 3

  Body text here, can span multiple lines.

  [Choice label -> 2]
  [Choice with video ->video:clip.mp4-> 2]
  [Play again -> restart]

Every directive is optional. Pages with no choices are endings. The parser
always reads every field (image, item, gems, video); hosts ignore the ones
their edition does not use. Parsing never raises: malformed input just
yields fewer pages or fewer choices.
"""

import logging
import re

from .models import RESTART, Book, Choice, Page, Reward, Target

logger = logging.getLogger(__name__)

ENTRY_PAGE = 1

_PAGE_HEADER = re.compile(r"===\s*PAGE\s+([0-9]+)\s*===", re.IGNORECASE)
_IMAGE = re.compile(r"^IMAGE:[ \t]*(.+)$", re.IGNORECASE | re.MULTILINE)
_ITEM = re.compile(r"^ITEM:[ \t]*(.+)$", re.IGNORECASE | re.MULTILINE)
_GEMS = re.compile(r"^GEMS:[ \t]*([0-9]+)[ \t]*\r?$", re.IGNORECASE | re.MULTILINE)
# [label -> target] and [label ->video:file.mp4-> target]; labels hold no brackets
_CHOICE = re.compile(r"\[([^\[\]\n]+?)\s*->(?:video:([^\[\]\n]+?)->)?\s*(\w+)\]")


def _take_directive(pattern: re.Pattern[str], block: str) -> tuple[str | None, str]:
    """Extract the first match of a single-line directive.

    Only the first occurrence is removed; later ones stay in the block.
    """
    match = pattern.search(block)
    if not match:
        return None, block
    value = match.group(1).strip() or None
    return value, block[:match.start()] + block[match.end():]


def _parse_target(raw: str) -> Target | None:
    if raw.lower() == RESTART:
        return RESTART
    if raw.isascii() and raw.isdigit():
        return int(raw)
    return None


def parse_choices(block: str, page_id: int = 0) -> list[Choice]:
    """Parse every choice marker in a block, left to right.

    Markers whose target is neither a page number nor "restart" are skipped.
    """
    choices: list[Choice] = []
    for match in _CHOICE.finditer(block):
        target = _parse_target(match.group(3).strip())
        if target is None:
            logger.warning(
                "Page %d: dropped choice %r with invalid target %r",
                page_id, match.group(0), match.group(3),
            )
            continue
        video = (match.group(2) or "").strip() or None
        choices.append(Choice(label=match.group(1).strip(), target=target, video=video))
    return choices


def strip_choices(block: str) -> str:
    """Remove all choice markup and trim the remaining prose."""
    return _CHOICE.sub("", block).strip()


def parse_page(page_id: int, block: str) -> Page:
    """Build one Page from the text between its header and the next."""
    image_prompt, block = _take_directive(_IMAGE, block)
    item, block = _take_directive(_ITEM, block)
    gems_raw, block = _take_directive(_GEMS, block)

    reward = None
    if item is not None or gems_raw is not None:
        reward = Reward(item=item, gems=int(gems_raw) if gems_raw is not None else None)

    return Page(
        id=page_id,
        body_text=strip_choices(block),
        image_prompt=image_prompt,
        reward=reward,
        choices=tuple(parse_choices(block, page_id)),
    )


def parse_book(raw: str) -> Book:
    """Parse adventure text into a Book.

    Duplicate page ids are last-wins. A header with id 0 still ends the
    previous block but produces no page.
    """
    headers = list(_PAGE_HEADER.finditer(raw or ""))
    pages: dict[int, Page] = {}

    for i, header in enumerate(headers):
        page_id = int(header.group(1))
        block_end = headers[i + 1].start() if i + 1 < len(headers) else len(raw)
        block = raw[header.end():block_end]

        if page_id <= 0:
            logger.warning("Skipping page header with non-positive id: %r", header.group(0))
            continue
        if page_id in pages:
            logger.warning("Page %d defined more than once; keeping the later one", page_id)

        pages[page_id] = parse_page(page_id, block)

    logger.debug("Parsed book with %d pages", len(pages))
    return Book(pages=pages)


def has_entry_point(book: Book) -> bool:
    return ENTRY_PAGE in book
