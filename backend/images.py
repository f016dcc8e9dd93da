"""Image generation client — thin proxy to the OpenAI Images API.

Request:
  POST {base_url}/v1/images/generations
  {"model": ..., "prompt": ..., "n": 1, "size": ..., "quality": ...}

Response, reduced to a single key for the caller:
  gpt-image-1 models  → data[0].b64_json  → {"b64_json": "..."}
  dall-e-3 (fallback) → data[0].url       → {"url": "..."}

The client never stores or fetches images itself; the host decides what to
do with the payload.
"""

from __future__ import annotations

import logging
import os
from typing import Any

import httpx

logger = logging.getLogger(__name__)

DEFAULT_IMAGE_API_URL = "https://api.openai.com"


class ImageGenError(RuntimeError):
    """Raised when the image backend cannot be reached or returns an error.

    status_code is the HTTP status the proxy should answer with.
    """

    def __init__(self, message: str, status_code: int = 502, details: Any = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.details = details


class ImageClient:
    """Async HTTP client for the OpenAI image-generation endpoint.

    Args:
        api_key:  Bearer token for the upstream API.
        base_url: Base URL of the backend. Defaults to api.openai.com.
        model:    Default model when a request does not name one.
        size:     Default image size.
        quality:  Default quality setting.
        timeout:  HTTP timeout in seconds. Defaults to 120.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_IMAGE_API_URL,
        model: str = "gpt-image-1-mini",
        size: str = "1024x1024",
        quality: str = "low",
        timeout: float = 120.0,
    ) -> None:
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._model = model
        self._size = size
        self._quality = quality
        self._timeout = timeout

    def _headers(self) -> dict[str, str]:
        headers: dict[str, str] = {"Content-Type": "application/json"}
        if self._api_key:
            headers["Authorization"] = f"Bearer {self._api_key}"
        return headers

    def _build_request(
        self, prompt: str, model: str | None, size: str | None, quality: str | None
    ) -> tuple[str, dict]:
        """Return (url, body), filling unset options from the defaults."""
        url = f"{self._base_url}/v1/images/generations"
        body = {
            "model": model or self._model,
            "prompt": prompt,
            "n": 1,
            "size": size or self._size,
            "quality": quality or self._quality,
        }
        return url, body

    def _parse_response(self, data: dict) -> dict[str, str]:
        items = data.get("data")
        first = items[0] if isinstance(items, list) and items else {}
        if not isinstance(first, dict):
            first = {}
        if first.get("b64_json"):
            return {"b64_json": first["b64_json"]}
        if first.get("url"):
            return {"url": first["url"]}
        raise ImageGenError("Unexpected response format", details=data)

    async def generate(
        self,
        prompt: str,
        *,
        model: str | None = None,
        size: str | None = None,
        quality: str | None = None,
    ) -> dict[str, str]:
        if not prompt or not prompt.strip():
            raise ImageGenError("Missing 'prompt' field", status_code=400)

        url, body = self._build_request(prompt, model, size, quality)
        logger.debug("image request url=%s model=%s prompt_len=%d", url, body["model"], len(prompt))

        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                resp = await client.post(url, json=body, headers=self._headers())
                resp.raise_for_status()
        except httpx.ConnectError as e:
            raise ImageGenError(f"Cannot connect to image backend at {self._base_url}") from e
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            raise ImageGenError(
                f"OpenAI error: {status}", status_code=status, details=e.response.text
            ) from e
        except httpx.TimeoutException as e:
            raise ImageGenError(f"Image backend timed out after {self._timeout}s") from e
        except (httpx.RequestError, httpx.InvalidURL) as e:
            raise ImageGenError(f"Image request failed: {e}") from e

        try:
            data = resp.json()
        except ValueError as e:
            raise ImageGenError("Unexpected response format", details=resp.text) from e
        if not isinstance(data, dict):
            raise ImageGenError("Unexpected response format", details=data)
        result = self._parse_response(data)
        logger.debug("image response keys=%s", ",".join(result))
        return result


def client_from_config(config: dict[str, Any]) -> ImageClient:
    """Build a client from app config plus OPENAI_API_KEY / IMAGE_API_URL."""
    api_key = os.getenv("OPENAI_API_KEY", "")
    if not api_key:
        raise ImageGenError("Image generation is not configured", status_code=503)
    options = config.get("image_generation", {})
    return ImageClient(
        api_key=api_key,
        base_url=os.getenv("IMAGE_API_URL", DEFAULT_IMAGE_API_URL),
        model=options.get("model", "gpt-image-1-mini"),
        size=options.get("size", "1024x1024"),
        quality=options.get("quality", "low"),
    )
