"""Standalone HTML rendering and file output for finished decks."""

from __future__ import annotations

import html
from pathlib import Path
from string import Template
from typing import List, Optional, Union

from .models import DEFAULT_THEME, Theme
from .prompts import SLIDE_BREAK

REVEAL_VERSION = "4.3.1"
REVEAL_CDN = f"https://cdnjs.cloudflare.com/ajax/libs/reveal.js/{REVEAL_VERSION}"

_PAGE_TEMPLATE = Template(
    """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>$title</title>
    <link rel="stylesheet" href="$cdn/reset.min.css">
    <link rel="stylesheet" href="$cdn/reveal.min.css">
    <link rel="stylesheet" href="$cdn/theme/$theme.min.css" id="theme">
    <style>
        html, body { height: 100%; margin: 0; overflow: hidden; }
        .reveal .slides section {
            overflow-y: auto !important;
            max-height: 100vh !important;
            height: 100% !important;
            padding: 20px !important;
            box-sizing: border-box !important;
        }
        .reveal .slides section img { display: block; max-width: 100% !important; height: auto !important; }
        .reveal .slides section pre { white-space: pre-wrap; overflow-x: auto; }
        .reveal .slides section p,
        .reveal .slides section ul,
        .reveal .slides section ol,
        .reveal .slides section li { overflow-wrap: break-word !important; }
    </style>
</head>
<body>
    $core_slides

    <script src="$cdn/reveal.min.js"></script>
    <script>
        document.addEventListener('wheel', function (event) {
            var slide = Reveal.getCurrentSlide();
            if (!slide || !slide.contains(event.target)) return;
            var maxScroll = slide.scrollHeight - slide.clientHeight;
            if (event.deltaY > 0 && slide.scrollTop < maxScroll) {
                event.preventDefault();
                slide.scrollTop = Math.min(slide.scrollTop + 60, maxScroll);
            } else if (event.deltaY < 0 && slide.scrollTop > 0) {
                event.preventDefault();
                slide.scrollTop = Math.max(slide.scrollTop - 60, 0);
            }
        }, { passive: false });

        Reveal.initialize({
            hash: true,
            controls: true,
            progress: true,
            center: false,
            width: '100%',
            height: '100%',
            margin: 0,
            minScale: 1,
            maxScale: 1,
            transition: 'none',
            fragments: true,
            autoAnimate: true,
            showNotes: false
        });
    </script>
</body>
</html>
"""
)


def render_standalone_html(
    core_markup: str,
    theme: Union[Theme, str, None] = DEFAULT_THEME,
    *,
    title: str = "Presentation",
) -> str:
    """Wrap validated core markup into a self-contained Reveal.js page.

    The global transition is ``none`` so each section's ``data-transition``
    applies. Unknown themes fall back to sky.
    """

    safe_theme = Theme.coerce(theme) or DEFAULT_THEME
    return _PAGE_TEMPLATE.substitute(
        title=html.escape(title),
        cdn=REVEAL_CDN,
        theme=safe_theme.value,
        core_slides=core_markup,
    )


def split_slide_blocks(text: str) -> List[str]:
    """Split a plain-text export into one block per slide."""

    blocks = [block.strip() for block in (text or "").split(SLIDE_BREAK)]
    return [block for block in blocks if block]


class DeckFileWriter:
    """Write finished decks and outlines to a directory."""

    def __init__(self, directory: Path) -> None:
        self.directory = Path(directory)

    # ------------------------------------------------------------------
    # I/O helpers
    # ------------------------------------------------------------------
    def write_html(
        self,
        core_markup: str,
        theme: Union[Theme, str, None] = DEFAULT_THEME,
        *,
        filename: str = "presentation.html",
        title: Optional[str] = None,
    ) -> Path:
        page = render_standalone_html(core_markup, theme, title=title or "Presentation")
        return self._write(filename, page)

    def write_text(self, text: str, *, filename: str = "presentation_outline.txt") -> Path:
        if not text:
            raise ValueError("No text content to write")
        return self._write(filename, text)

    def _write(self, filename: str, content: str) -> Path:
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self.directory / filename
        path.write_text(content, encoding="utf-8")
        return path
