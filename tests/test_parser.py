"""Tests for parse_book and its helpers."""

import logging

from adventure_book import RESTART, Book, Choice, Page, Reward, has_entry_point, parse_book
from adventure_book.parser import parse_choices, strip_choices

FOREST = (
    "=== PAGE 1 ===\n"
    "IMAGE: a forest\n"
    "\n"
    "You enter a forest.\n"
    "\n"
    "[Go north -> 2]\n"
    "[Give up -> restart]\n"
    "=== PAGE 2 ===\n"
    "The end."
)


# ── Page headers and blocks ────────────────────────────────


def test_forest_example():
    book = parse_book(FOREST)
    assert len(book) == 2

    page1 = book.get(1)
    assert page1.image_prompt == "a forest"
    assert page1.body_text == "You enter a forest."
    assert page1.choices == (
        Choice(label="Go north", target=2),
        Choice(label="Give up", target=RESTART),
    )

    page2 = book.get(2)
    assert page2.body_text == "The end."
    assert page2.is_terminal


def test_empty_input_gives_empty_book():
    assert len(parse_book("")) == 0
    assert len(parse_book("Just some prose, no headers.")) == 0


def test_header_case_and_whitespace_flexible():
    text = "===page 7===\nA\n=== Page   8    ===\nB\n==  = PAGE 9 ===\nC"
    book = parse_book(text)
    assert 7 in book
    assert 8 in book
    assert 9 not in book  # "==  =" is not a header marker
    assert book.get(8).body_text.startswith("B")


def test_header_without_body():
    book = parse_book("=== PAGE 1 ===\n=== PAGE 2 ===")
    page = book.get(1)
    assert page.body_text == ""
    assert page.choices == ()
    assert page.image_prompt is None
    assert page.reward is None


def test_text_before_first_header_ignored():
    book = parse_book("Preface text\n=== PAGE 1 ===\nBody")
    assert book.get(1).body_text == "Body"


def test_duplicate_ids_last_wins(caplog):
    text = "=== PAGE 1 ===\nFirst\n=== PAGE 2 ===\nMiddle\n=== PAGE 1 ===\nSecond"
    with caplog.at_level(logging.WARNING):
        book = parse_book(text)
    assert len(book) == 2
    assert book.get(1).body_text == "Second"
    assert "more than once" in caplog.text


def test_every_header_id_appears_once():
    text = "\n".join(f"=== PAGE {n} ===\nPage {n}" for n in (3, 1, 4, 1, 5, 9, 2, 6, 5))
    book = parse_book(text)
    assert sorted(book.pages) == [1, 2, 3, 4, 5, 6, 9]


def test_page_zero_bounds_block_but_is_skipped(caplog):
    text = "=== PAGE 1 ===\nOne\n=== PAGE 0 ===\nZero\n=== PAGE 2 ===\nTwo"
    with caplog.at_level(logging.WARNING):
        book = parse_book(text)
    assert sorted(book.pages) == [1, 2]
    assert book.get(1).body_text == "One"
    assert "non-positive" in caplog.text


def test_parse_twice_is_equal():
    assert parse_book(FOREST) == parse_book(FOREST)


def test_has_entry_point():
    assert has_entry_point(parse_book(FOREST))
    assert not has_entry_point(parse_book("=== PAGE 2 ===\nNo start"))


# ── Directives ─────────────────────────────────────────────


def test_image_directive_case_insensitive():
    book = parse_book("=== PAGE 1 ===\nimage:   A red door  \nBody")
    page = book.get(1)
    assert page.image_prompt == "A red door"
    assert page.body_text == "Body"


def test_second_image_line_left_in_body():
    book = parse_book("=== PAGE 1 ===\nIMAGE: first\nIMAGE: second\nBody")
    page = book.get(1)
    assert page.image_prompt == "first"
    assert "IMAGE: second" in page.body_text


def test_image_must_start_line():
    book = parse_book("=== PAGE 1 ===\nThe sign reads IMAGE: nothing")
    assert book.get(1).image_prompt is None


def test_item_directive():
    book = parse_book("=== PAGE 4 ===\nITEM: Green Gem\nYou found it.")
    page = book.get(4)
    assert page.reward == Reward(item="Green Gem")
    assert page.body_text == "You found it."


def test_gems_directive():
    book = parse_book("=== PAGE 2 ===\nGEMS: 5\nShiny.")
    assert book.get(2).reward == Reward(gems=5)


def test_item_and_gems_both_captured():
    book = parse_book("=== PAGE 1 ===\nITEM: Lamp\nGEMS: 3\nBody")
    page = book.get(1)
    assert page.reward == Reward(item="Lamp", gems=3)
    assert page.body_text == "Body"


def test_invalid_gems_stays_in_body():
    book = parse_book("=== PAGE 1 ===\nGEMS: lots\nBody")
    page = book.get(1)
    assert page.reward is None
    assert "GEMS: lots" in page.body_text


def test_directives_with_crlf_line_endings():
    text = "=== PAGE 1 ===\r\nIMAGE: a cave\r\nGEMS: 2\r\nDark.\r\n[Leave -> 2]\r\n"
    page = parse_book(text).get(1)
    assert page.image_prompt == "a cave"
    assert page.reward == Reward(gems=2)
    assert page.body_text == "Dark."
    assert page.choices[0].target == 2


# ── Choices ────────────────────────────────────────────────


def test_video_choice():
    choices = parse_choices("[Open chest ->video:chest_open.mp4-> 5]")
    assert choices == [Choice(label="Open chest", video="chest_open.mp4", target=5)]


def test_choice_order_is_source_order():
    block = "[C -> 3] text [A -> 1]\n[B ->video:b.mp4-> restart]"
    labels = [c.label for c in parse_choices(block)]
    assert labels == ["C", "A", "B"]


def test_restart_target_case_insensitive():
    choices = parse_choices("[Again -> RESTART]")
    assert choices[0].target == RESTART
    assert choices[0].is_restart


def test_choice_markers_removed_from_body():
    block = "Before [Go -> 2] after\n[Stay -> 1]"
    assert strip_choices(block) == "Before  after"


def test_invalid_target_dropped_and_stripped(caplog):
    with caplog.at_level(logging.WARNING):
        book = parse_book("=== PAGE 1 ===\nBody\n[Go north -> north]\n[Go south -> 2]")
    page = book.get(1)
    assert [c.label for c in page.choices] == ["Go south"]
    assert page.body_text == "Body"
    assert "invalid target" in caplog.text


def test_unmatched_bracket_text_is_body():
    book = parse_book("=== PAGE 1 ===\n[Not a choice]\n[Broken -> ]")
    page = book.get(1)
    assert page.choices == ()
    assert "[Not a choice]" in page.body_text
    assert "[Broken -> ]" in page.body_text


def test_prose_brackets_before_choice_kept():
    book = parse_book("=== PAGE 1 ===\n[Note] see [Go -> 2]")
    page = book.get(1)
    assert page.choices == (Choice(label="Go", target=2),)
    assert page.body_text == "[Note] see"


def test_targets_need_not_exist_at_parse_time():
    book = parse_book("=== PAGE 1 ===\n[Into the void -> 99]")
    assert book.get(1).choices[0].target == 99
    assert 99 not in book


def test_cycles_are_kept():
    book = parse_book("=== PAGE 1 ===\n[Next -> 2]\n=== PAGE 2 ===\n[Back -> 1]")
    assert book.get(2).choices[0].target == 1


def test_result_types():
    book = parse_book(FOREST)
    assert isinstance(book, Book)
    assert all(isinstance(p, Page) for p in book.pages.values())
