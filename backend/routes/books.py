"""Adventure book library endpoints."""

from fastapi import APIRouter, HTTPException

from adventure_book import has_entry_point, parse_book
from backend import storage

from .models import BookText

router = APIRouter()


def _book_response(name: str | None, text: str) -> dict:
    book = parse_book(text)
    return {
        "name": name,
        "has_entry_point": has_entry_point(book),
        "pages": [book.pages[pid].model_dump(mode="json") for pid in sorted(book.pages)],
    }


@router.get("/books")
async def list_books():
    """List all books (presets + user)."""
    return storage.list_books()


@router.post("/books/parse")
async def parse_text(body: BookText):
    """Parse posted book text without storing it."""
    return _book_response(None, body.text)


@router.get("/books/{name}")
async def get_book(name: str):
    """Get a book parsed into its page graph."""
    text = storage.get_book_text(name)
    if text is None:
        raise HTTPException(404, "Book not found")
    return {**_book_response(name, text), "source": storage.book_source(name)}


@router.get("/books/{name}/pages/{page_id}")
async def get_page(name: str, page_id: int):
    """Get a single page of a book."""
    text = storage.get_book_text(name)
    if text is None:
        raise HTTPException(404, "Book not found")
    page = parse_book(text).get(page_id)
    if page is None:
        raise HTTPException(404, f"Page {page_id} not found.")
    return page


@router.put("/books/{name}")
async def save_book(name: str, body: BookText):
    """Store book text as a user book (overrides a preset of the same name)."""
    return storage.save_book(name, body.text)


@router.delete("/books/{name}")
async def delete_book(name: str):
    """Delete a user book. A preset with the same name becomes visible again."""
    if not storage.delete_book(name):
        raise HTTPException(404, "Book not found")
    return {"ok": True}
