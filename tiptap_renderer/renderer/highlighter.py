"""Regex based syntax highlighting for code blocks."""
from __future__ import annotations

import bisect
from typing import List, Mapping, Optional, Pattern, Tuple

from tiptap_renderer.renderer.languages import (
    DEFAULT_REGISTRY,
    PLAIN_TEXT,
    LanguageRules,
    resolve_language,
)
from tiptap_renderer.renderer.options import HighlightTheme
from tiptap_renderer.utils.html_utils import escape
from tiptap_renderer.utils.logger import get_logger

LOGGER = get_logger(__name__)

Span = Tuple[int, int, str]


class _Claims:
    """Sorted, non-overlapping ``(start, end, category)`` spans over the code."""

    def __init__(self) -> None:
        self._starts: List[int] = []
        self._spans: List[Span] = []

    def is_free(self, start: int, end: int) -> bool:
        index = bisect.bisect_right(self._starts, start)
        if index > 0 and self._spans[index - 1][1] > start:
            return False
        if index < len(self._spans) and self._spans[index][0] < end:
            return False
        return True

    def claim(self, start: int, end: int, category: str) -> None:
        index = bisect.bisect_right(self._starts, start)
        self._starts.insert(index, start)
        self._spans.insert(index, (start, end, category))

    def __iter__(self):
        return iter(self._spans)


class SyntaxHighlighter:
    """Turns raw code into escaped HTML with category-coloured ``<span>`` tokens.

    Comments and strings are claimed first in one left-to-right pass; every
    later category may only claim text that no earlier category has taken, so
    keywords never light up inside a string or a comment.
    """

    def __init__(
        self,
        registry: Mapping[str, LanguageRules] = DEFAULT_REGISTRY,
        theme: Optional[HighlightTheme] = None,
    ) -> None:
        self._registry = registry
        self._theme = theme or HighlightTheme()

    @staticmethod
    def resolve_language(hint: object) -> str:
        return resolve_language(hint)

    def highlight(self, code: str, language: object = PLAIN_TEXT) -> str:
        """Return HTML for ``code``; unknown languages are escaped without highlighting."""
        canonical = resolve_language(language)
        rules = self._registry.get(canonical)
        if rules is None or not code:
            return escape(code)
        try:
            claims = self._tokenize(code, rules)
        except Exception:  # degrade to plain text for this block only
            LOGGER.warning("Highlighting failed for %s block; rendering plain", canonical, exc_info=True)
            return escape(code)
        return self._emit(code, claims)

    # ------------------------------------------------------------------
    # Internal helpers
    def _tokenize(self, code: str, rules: LanguageRules) -> _Claims:
        claims = _Claims()
        if rules.literal_pattern is not None:
            for match in rules.literal_pattern.finditer(code):
                if match.end() > match.start():
                    claims.claim(match.start(), match.end(), match.lastgroup or "string")
        for category, pattern in rules.rules:
            self._apply(code, category, pattern, claims)
        return claims

    @staticmethod
    def _apply(code: str, category: str, pattern: Pattern[str], claims: _Claims) -> None:
        position = 0
        while position <= len(code):
            match = pattern.search(code, position)
            if match is None:
                return
            if "tok" in pattern.groupindex and match.group("tok") is not None:
                start, end = match.span("tok")
            else:
                start, end = match.span()
            if end > start and claims.is_free(start, end):
                claims.claim(start, end, category)
                position = max(match.end(), match.start() + 1)
            else:
                position = match.start() + 1

    def _emit(self, code: str, claims: _Claims) -> str:
        parts: List[str] = []
        cursor = 0
        for start, end, category in claims:
            if start > cursor:
                parts.append(escape(code[cursor:start]))
            parts.append(
                f'<span class="token-{category}" style="color: {self._theme.color_for(category)}">'
                f"{escape(code[start:end])}</span>"
            )
            cursor = end
        parts.append(escape(code[cursor:]))
        return "".join(parts)
