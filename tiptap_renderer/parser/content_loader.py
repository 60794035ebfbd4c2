"""Normalize raw stored post content into a renderable form."""
from __future__ import annotations

import json
from typing import Any, Mapping

from tiptap_renderer.model.document_model import (
    DocumentContent,
    EmptyContent,
    HtmlContent,
    LoadedContent,
    PlainTextContent,
)
from tiptap_renderer.parser.document_parser import DocumentParser
from tiptap_renderer.utils.logger import get_logger

LOGGER = get_logger(__name__)


class ContentError(ValueError):
    """Raised internally when stored content has no usable document shape."""


def looks_like_html(text: str) -> bool:
    """Older posts were stored as rendered HTML before the JSON model existed."""
    return text.lstrip().startswith("<") or "</" in text


class ContentLoader:
    """Classifies stored content as empty, legacy HTML, plain text, or a document."""

    def __init__(self, parser: DocumentParser | None = None) -> None:
        self._parser = parser or DocumentParser()

    def load(self, content: Any) -> LoadedContent:
        """Normalize ``content``; never raises for any input."""
        if not content:
            return EmptyContent()

        if isinstance(content, (bytes, bytearray)):
            content = content.decode("utf-8", errors="replace")

        if isinstance(content, str) and looks_like_html(content):
            return HtmlContent(content)

        try:
            data = self._decode(content)
            if not isinstance(data.get("content"), list):
                raise ContentError("document has no content array")
            return DocumentContent(self._parser.parse(data))
        except (ValueError, TypeError, RecursionError) as exc:
            LOGGER.warning("Falling back to plain text for unreadable content: %s", exc)
            return PlainTextContent(self._as_text(content))

    # ------------------------------------------------------------------
    # Internal helpers
    def _decode(self, content: Any) -> Mapping[str, Any]:
        if isinstance(content, str):
            data = json.loads(content)
        else:
            data = content
        if not isinstance(data, Mapping):
            raise ContentError(f"expected a JSON object, got {type(data).__name__}")
        return data

    @staticmethod
    def _as_text(content: Any) -> str:
        if isinstance(content, str):
            return content
        try:
            return json.dumps(content, ensure_ascii=False, default=str)
        except (TypeError, ValueError):
            return str(content)
        except RecursionError:
            return ""
