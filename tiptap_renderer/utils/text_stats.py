"""Post metadata derived from content: word counts, reading time, excerpts, slugs."""
from __future__ import annotations

import math
import re
from typing import Any, Optional

from tiptap_renderer.renderer.text_renderer import PlainTextRenderer

WORDS_PER_MINUTE = 200
EXCERPT_LENGTH = 300
META_DESCRIPTION_LENGTH = 160
ELLIPSIS = "..."

_WHITESPACE_RE = re.compile(r"\s+")
_SLUG_DROP_RE = re.compile(r"[^a-z0-9 -]")
_SLUG_DASHES_RE = re.compile(r"-+")


def collapse_whitespace(text: str) -> str:
    return _WHITESPACE_RE.sub(" ", text).strip()


def word_count(text: str) -> int:
    return len(text.split())


def reading_time(
    content: Any,
    words_per_minute: int = WORDS_PER_MINUTE,
    renderer: Optional[PlainTextRenderer] = None,
) -> int:
    """Estimated minutes to read ``content``; never less than one."""
    if words_per_minute <= 0:
        raise ValueError("words_per_minute must be positive")
    text = (renderer or PlainTextRenderer()).render(content)
    return minutes_to_read(word_count(text), words_per_minute)


def minutes_to_read(words: int, words_per_minute: int = WORDS_PER_MINUTE) -> int:
    if words_per_minute <= 0:
        raise ValueError("words_per_minute must be positive")
    return max(1, math.ceil(words / words_per_minute))


def truncate_words(text: str, limit: int) -> str:
    """Cut ``text`` to at most ``limit`` characters on a word boundary, adding an ellipsis."""
    text = collapse_whitespace(text)
    if len(text) <= limit:
        return text
    budget = max(limit - len(ELLIPSIS), 0)
    cut = text[:budget]
    if " " in cut and not text[budget:budget + 1].isspace():
        cut = cut.rsplit(" ", 1)[0]
    return cut.rstrip(" ,;:.") + ELLIPSIS


def make_excerpt(
    content: Any,
    limit: int = EXCERPT_LENGTH,
    renderer: Optional[PlainTextRenderer] = None,
) -> str:
    """Plain-text summary of a post body, used for cards and meta descriptions."""
    text = (renderer or PlainTextRenderer()).render(content)
    return truncate_words(text, limit)


def slugify(title: str) -> str:
    """URL slug for a post title, matching the slugs already stored for existing posts."""
    slug = _SLUG_DROP_RE.sub("", title.lower())
    slug = re.sub(r"\s+", "-", slug)
    return _SLUG_DASHES_RE.sub("-", slug)
