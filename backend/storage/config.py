"""Global app configuration (edition, adventure rotation, image settings)."""

import json
from pathlib import Path
from typing import Any

from .core import data_dir

_CONFIG_DEFAULTS: dict[str, Any] = {
    "edition": "items",
    "adventures": ["adventure1"],
    "image_folder": "images",
    "cover_folder": "images",
    "image_generation": {
        "model": "gpt-image-1-mini",
        "size": "1024x1024",
        "quality": "low",
    },
}


def _config_path() -> Path:
    return data_dir() / "config.json"


def _book_name(entry: str) -> str:
    # Remote entries are kept verbatim; local ones drop a ".txt" suffix
    if entry.startswith(("http://", "https://")):
        return entry
    return entry[:-4] if entry.lower().endswith(".txt") else entry


def get_config() -> dict[str, Any]:
    """Read config, returning defaults merged with stored values."""
    config: dict[str, Any] = {
        "edition": _CONFIG_DEFAULTS["edition"],
        "adventures": list(_CONFIG_DEFAULTS["adventures"]),
        "image_folder": _CONFIG_DEFAULTS["image_folder"],
        "cover_folder": _CONFIG_DEFAULTS["cover_folder"],
        "image_generation": dict(_CONFIG_DEFAULTS["image_generation"]),
    }
    path = _config_path()
    if path.is_file():
        stored = json.loads(path.read_text())
        # Migrate: adventure_files (file names) → adventures (book names)
        if "adventure_files" in stored and "adventures" not in stored:
            stored["adventures"] = [_book_name(f) for f in stored.pop("adventure_files")]
        if "edition" in stored:
            config["edition"] = stored["edition"]
        if "adventures" in stored:
            config["adventures"] = stored["adventures"]
        if "image_folder" in stored:
            config["image_folder"] = stored["image_folder"]
        if "cover_folder" in stored:
            config["cover_folder"] = stored["cover_folder"]
        if isinstance(stored.get("image_generation"), dict):
            config["image_generation"].update(stored["image_generation"])
    return config


def update_config(fields: dict[str, Any]) -> dict[str, Any]:
    """Merge fields into config and persist. Returns full config."""
    config = get_config()
    if "edition" in fields:
        config["edition"] = fields["edition"]
    if "adventures" in fields:
        config["adventures"] = [_book_name(a) for a in fields["adventures"]]
    if "image_folder" in fields:
        config["image_folder"] = fields["image_folder"]
    if "cover_folder" in fields:
        config["cover_folder"] = fields["cover_folder"]
    if isinstance(fields.get("image_generation"), dict):
        config["image_generation"].update(fields["image_generation"])
    _config_path().write_text(json.dumps(config, indent=2))
    return config
