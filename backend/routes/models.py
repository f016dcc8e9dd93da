"""Pydantic request/response models for API endpoints."""

from typing import Literal

from pydantic import BaseModel


class BookText(BaseModel):
    text: str


class CreateSession(BaseModel):
    edition: str | None = None
    adventures: list[str] | None = None


class GoToBody(BaseModel):
    target: int | Literal["restart"]


class ImageBody(BaseModel):
    prompt: str = ""
    model: str | None = None
    size: str | None = None
    quality: str | None = None


class UpdateSettings(BaseModel):
    edition: str | None = None
    adventures: list[str] | None = None
    image_folder: str | None = None
    cover_folder: str | None = None
    image_generation: dict[str, str] | None = None
