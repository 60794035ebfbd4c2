"""Rendering configuration shared by the renderers and the CLI."""
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

PLACEHOLDER_TEXT = "No content available."


@dataclass(frozen=True, slots=True)
class HighlightTheme:
    """Colour per highlight category (light theme used by the blog)."""

    background: str = "#f8f9fa"
    text: str = "#212529"
    comment: str = "#6c757d"
    keyword: str = "#e34f67"
    string: str = "#0d6efd"
    number: str = "#fd7e14"
    function: str = "#6f42c1"
    declaration: str = "#198754"
    type: str = "#0d6efd"
    property: str = "#e34f67"
    selector: str = "#0d6efd"
    constant: str = "#0d6efd"
    tag: str = "#198754"
    attribute: str = "#fd7e14"

    def color_for(self, category: str) -> str:
        """Return the colour for a highlight category, falling back to plain text."""
        attribute = _CATEGORY_COLORS.get(category, "text")
        return getattr(self, attribute)


# Categories that share a colour slot with another one.
_CATEGORY_COLORS: Mapping[str, str] = MappingProxyType(
    {
        "comment": "comment",
        "string": "string",
        "keyword": "keyword",
        "number": "number",
        "type": "type",
        "function": "function",
        "declaration": "declaration",
        "decorator": "declaration",
        "tag": "tag",
        "attribute": "attribute",
        "key": "property",
        "command": "function",
        "variable": "constant",
        "property": "property",
        "selector": "selector",
        "unit": "number",
    }
)


@dataclass(frozen=True, slots=True)
class RenderOptions:
    """Knobs for :class:`HtmlRenderer`.

    ``include_keys`` adds a ``data-key`` attribute carrying the node's index
    path (``"0-2-1"``) to every rendered element; code blocks always carry one
    because the copy button targets it.
    """

    placeholder: str = PLACEHOLDER_TEXT
    container_class: str = "tiptap-content"
    include_keys: bool = False
    open_links_in_new_tab: bool = True
    theme: HighlightTheme = field(default_factory=HighlightTheme)
