"""Normalized forms of stored post content handed to the renderers."""
from __future__ import annotations

from dataclasses import dataclass

from tiptap_renderer.model.elements import Document


@dataclass(frozen=True, slots=True)
class EmptyContent:
    """Nothing to show; renderers emit their placeholder."""


@dataclass(frozen=True, slots=True)
class HtmlContent:
    """Legacy pre-rendered HTML, injected verbatim."""

    html: str


@dataclass(frozen=True, slots=True)
class PlainTextContent:
    """Content that could not be read as a document; shown as one paragraph."""

    text: str


@dataclass(frozen=True, slots=True)
class DocumentContent:
    """A structured document tree."""

    document: Document


LoadedContent = EmptyContent | HtmlContent | PlainTextContent | DocumentContent
