"""Adventure book library (merged presets + user data).

Books are plain text files named <name>.txt. User books override presets
with the same name; deleting the user copy reveals the preset again.
"""

from pathlib import Path
from typing import Any

from .core import books_dir, preset_books_dir, slugify


def _book_path(directory: Path, name: str) -> Path | None:
    """Path of <name>.txt directly inside directory, or None if the name escapes it."""
    if "\x00" in name:
        return None
    path = directory / f"{name}.txt"
    if path.resolve().parent != directory.resolve():
        return None
    return path


def list_books() -> list[dict[str, Any]]:
    by_name: dict[str, dict[str, Any]] = {}
    # Presets first (lower priority)
    if preset_books_dir().is_dir():
        for path in sorted(preset_books_dir().glob("*.txt")):
            by_name[path.stem] = {"name": path.stem, "source": "preset"}
    # User books override
    for path in sorted(books_dir().glob("*.txt")):
        by_name[path.stem] = {"name": path.stem, "source": "user"}
    return list(by_name.values())


def get_book_text(name: str) -> str | None:
    # Data dir first, then preset fallback
    for directory in (books_dir(), preset_books_dir()):
        path = _book_path(directory, name)
        if path is not None and path.is_file():
            return path.read_text(encoding="utf-8")
    return None


def book_source(name: str) -> str | None:
    for source, directory in (("user", books_dir()), ("preset", preset_books_dir())):
        path = _book_path(directory, name)
        if path is not None and path.is_file():
            return source
    return None


def save_book(name: str, text: str) -> dict[str, Any]:
    """Write a user book. The name is slugified; returns the stored entry."""
    slug = slugify(name)
    (books_dir() / f"{slug}.txt").write_text(text, encoding="utf-8")
    return {"name": slug, "source": "user"}


def delete_book(name: str) -> bool:
    path = _book_path(books_dir(), name)
    if path is None or not path.is_file():
        return False
    path.unlink()
    return True


def page_image_name(adventure: str, page_id: int, folder: str = "images") -> str:
    """Relative image path for a page: images/<adventure>/007.jpg."""
    parts = [p for p in (folder, adventure) if p]
    return "/".join(parts + [f"{page_id:03d}.jpg"])


def cover_image_name(index: int, folder: str = "images") -> str:
    """Relative cover path for a 0-based rotation index: images/cover_001.jpg."""
    name = f"cover_{index + 1:03d}.jpg"
    return f"{folder}/{name}" if folder else name
