"""Create demo adventures for development/testing."""

import shutil

from backend import storage

DEMO_BOOKS = {
    "the-sunken-keep": """\
=== PAGE 1 ===
IMAGE: A flooded castle keep at low tide, oil painting

The tide has pulled back from the old keep. Its gate hangs open, and
water still drips from the portcullis.

[Enter through the gate -> 2]
[Circle round to the sea wall -> 3]

=== PAGE 2 ===
IMAGE: A dark hall with seaweed on the walls

The great hall smells of salt and rot. A stair leads down into darkness.

[Descend the stair ->video:stair_descent.mp4-> 4]
[Leave while you can -> 1]

=== PAGE 3 ===

The sea wall crumbles. The returning tide carries you away.

[Try again -> restart]

=== PAGE 4 ===
ITEM: Drowned Crown

At the bottom of the stair, on a throne of barnacles, rests a crown.
""",
    "the-lantern-road": """\
=== PAGE 1 ===
IMAGE: A road lined with paper lanterns at night

Lanterns sway over the road to the market town. A fox watches you from
the ditch.

[Follow the fox -> 2]
[Keep to the road -> 3]

=== PAGE 2 ===
GEMS: 1

The fox leads you to a hollow where a single bead of amber glints.

[Back to the road -> 1]

=== PAGE 3 ===

You reach the town gate as the bells ring midnight. The journey is over.
""",
}


def create_demo_data() -> None:
    """Wipe existing user books and write fresh demo books."""
    if storage.books_dir().exists():
        shutil.rmtree(storage.books_dir())
    storage.books_dir().mkdir(parents=True, exist_ok=True)

    for name, text in DEMO_BOOKS.items():
        storage.save_book(name, text)

    # Play the demo books after the bundled preset
    storage.update_config({"adventures": ["adventure1", *DEMO_BOOKS]})
