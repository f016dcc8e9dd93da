"""Health check and settings endpoints."""

from fastapi import APIRouter, HTTPException

from adventure_book import get_edition
from backend import storage

from .models import UpdateSettings

router = APIRouter()


@router.get("/health")
async def health():
    """Health check."""
    return {"status": "ok"}


@router.get("/settings")
async def get_settings():
    """Get global app settings (edition, adventure rotation, images)."""
    return storage.get_config()


@router.patch("/settings")
async def update_settings(body: UpdateSettings):
    """Update global app settings (partial merge)."""
    fields = body.model_dump(exclude_none=True)
    if "edition" in fields:
        try:
            fields["edition"] = get_edition(fields["edition"]).name
        except ValueError as e:
            raise HTTPException(400, str(e))
    return storage.update_config(fields)
