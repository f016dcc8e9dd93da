"""Image generation proxy endpoint."""

from fastapi import APIRouter, HTTPException

from backend import images, storage

from .models import ImageBody

router = APIRouter()


@router.post("/images")
async def generate_image(body: ImageBody):
    """Forward an image prompt to the image API; returns {b64_json} or {url}."""
    if not body.prompt.strip():
        raise HTTPException(400, "Missing 'prompt' field")
    try:
        client = images.client_from_config(storage.get_config())
        return await client.generate(
            body.prompt, model=body.model, size=body.size, quality=body.quality
        )
    except images.ImageGenError as e:
        detail = {"error": str(e), "details": e.details} if e.details is not None else str(e)
        raise HTTPException(e.status_code, detail)
