"""Tests for adventure_book.models and editions."""

import pytest
from pydantic import ValidationError

from adventure_book import BASE, GEMS, ITEMS, RESTART, Book, Choice, Page, Reward, get_edition


class TestChoice:
    def test_defaults(self) -> None:
        c = Choice(label="Go", target=2)
        assert c.video is None
        assert not c.is_restart

    def test_restart_target(self) -> None:
        c = Choice(label="Again", target=RESTART)
        assert c.is_restart

    def test_invalid_target_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Choice(label="Go", target="north")

    def test_frozen(self) -> None:
        c = Choice(label="Go", target=2)
        with pytest.raises(ValidationError):
            c.label = "Stay"


class TestReward:
    def test_empty(self) -> None:
        assert Reward().is_empty
        assert Reward(gems=0).is_empty
        assert not Reward(item="Key").is_empty
        assert not Reward(gems=2).is_empty

    def test_negative_gems_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Reward(gems=-1)


class TestPage:
    def test_terminal_when_no_choices(self) -> None:
        assert Page(id=3, body_text="The end.").is_terminal

    def test_not_terminal_with_choices(self) -> None:
        page = Page(id=1, choices=(Choice(label="Go", target=2),))
        assert not page.is_terminal

    def test_id_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            Page(id=0)

    def test_serialise_roundtrip(self) -> None:
        page = Page(
            id=1, body_text="Hi", image_prompt="a hall", reward=Reward(item="Key"),
            choices=(Choice(label="Go", target=RESTART, video="v.mp4"),),
        )
        assert Page.model_validate(page.model_dump()) == page


class TestBook:
    def test_lookup(self) -> None:
        book = Book(pages={1: Page(id=1), 2: Page(id=2)})
        assert book.get(2).id == 2
        assert book.get(5) is None
        assert 1 in book
        assert 5 not in book
        assert len(book) == 2


class TestEditions:
    def test_presets(self) -> None:
        assert not BASE.tracks_hearts
        assert ITEMS.starting_hearts == 3
        assert ITEMS.reward_advances
        assert GEMS.suppress_visited
        assert GEMS.reward_on_revisit

    def test_lookup_case_insensitive(self) -> None:
        assert get_edition(" Gems ") is GEMS

    def test_unknown_edition(self) -> None:
        with pytest.raises(ValueError, match="Unknown edition"):
            get_edition("platinum")
