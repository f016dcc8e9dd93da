"""File-based storage for adventure books and app settings.

Data layout:
  data/
    adventures/          User adventure books
      <name>.txt         Book text in the === PAGE n === format
    config.json          App settings (edition, adventure rotation, images)
  presets/
    adventures/          Built-in read-only books (merged at read time)

Book names are slugs: title → Unicode normalize → strip non-ASCII →
lowercase → replace non-alnum runs with hyphen → strip hyphens.

Preset merging: list_books() and get_book_text() merge preset + user data;
user data wins on name collision. Deleting a user book reveals the preset.

Config: get_config() returns defaults merged with stored values.
update_config() applies partial updates — adventures replaced wholesale,
image_generation merged key-by-key, scalars overwritten.
"""

# Re-export all public symbols so `from backend import storage` keeps working.

from .core import (  # noqa: F401
    books_dir,
    data_dir,
    init_storage,
    preset_books_dir,
    presets_dir,
    slugify,
)

from .books import (  # noqa: F401
    book_source,
    cover_image_name,
    delete_book,
    get_book_text,
    list_books,
    page_image_name,
    save_book,
)

from .config import (  # noqa: F401
    get_config,
    update_config,
)
