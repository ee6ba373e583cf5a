import pytest

from reveal_deck.export import (
    REVEAL_CDN,
    DeckFileWriter,
    render_standalone_html,
    split_slide_blocks,
)
from reveal_deck.models import Theme
from reveal_deck.prompts import SLIDE_BREAK

from tests.llm_stubs import VALID_MARKUP


def test_page_embeds_markup_theme_and_neutral_transition():
    page = render_standalone_html(VALID_MARKUP, Theme.NIGHT, title="Bees & Hives")

    assert page.startswith("<!DOCTYPE html>")
    assert VALID_MARKUP in page
    assert f"{REVEAL_CDN}/theme/night.min.css" in page
    assert f"{REVEAL_CDN}/reveal.min.js" in page
    assert "transition: 'none'" in page
    assert "<title>Bees &amp; Hives</title>" in page


@pytest.mark.parametrize("theme", ["neon", None, ""])
def test_unknown_theme_falls_back_to_sky(theme):
    page = render_standalone_html(VALID_MARKUP, theme)
    assert "/theme/sky.min.css" in page


def test_theme_names_are_accepted_as_strings():
    assert "/theme/moon.min.css" in render_standalone_html(VALID_MARKUP, "Moon")


def test_split_slide_blocks_drops_empty_blocks():
    text = f"Slide 1\nHeading:\nBees\n\n{SLIDE_BREAK}\n\nSlide 2\nHeading:\nHives\n{SLIDE_BREAK}\n"
    assert split_slide_blocks(text) == ["Slide 1\nHeading:\nBees", "Slide 2\nHeading:\nHives"]
    assert split_slide_blocks("") == []


def test_writer_creates_directory_and_files(tmp_path):
    writer = DeckFileWriter(tmp_path / "out" / "deck")

    html_path = writer.write_html(VALID_MARKUP, Theme.BEIGE, title="Bees")
    text_path = writer.write_text("Slide 1\nContent:\nBees")

    assert html_path.name == "presentation.html"
    assert "/theme/beige.min.css" in html_path.read_text(encoding="utf-8")
    assert text_path.name == "presentation_outline.txt"
    assert text_path.read_text(encoding="utf-8") == "Slide 1\nContent:\nBees"


def test_writer_refuses_empty_outline(tmp_path):
    with pytest.raises(ValueError):
        DeckFileWriter(tmp_path).write_text("")
