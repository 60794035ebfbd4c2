"""Render stored post content as plain text (excerpts, reading time, search)."""
from __future__ import annotations

from typing import Any, List, Optional

from tiptap_renderer.model.document_model import (
    DocumentContent,
    HtmlContent,
    LoadedContent,
    PlainTextContent,
)
from tiptap_renderer.model.elements import Document, Node
from tiptap_renderer.model.node_types import NodeType
from tiptap_renderer.parser.content_loader import ContentLoader
from tiptap_renderer.utils.html_utils import strip_tags

_BLOCK_SEPARATOR = "\n\n"
_LINE_CONTAINERS = frozenset(
    {
        NodeType.BULLET_LIST,
        NodeType.ORDERED_LIST,
        NodeType.TASK_LIST,
        NodeType.TABLE,
    }
)


class PlainTextRenderer:
    """Flatten a document into readable text, one block per paragraph."""

    def __init__(self, loader: Optional[ContentLoader] = None) -> None:
        self._loader = loader or ContentLoader()

    def render(self, content: Any) -> str:
        return self.render_loaded(self._loader.load(content))

    def render_loaded(self, loaded: LoadedContent) -> str:
        if isinstance(loaded, DocumentContent):
            return self.render_document(loaded.document)
        if isinstance(loaded, HtmlContent):
            return strip_tags(loaded.html).strip()
        if isinstance(loaded, PlainTextContent):
            return loaded.text
        return ""

    def render_document(self, document: Document) -> str:
        blocks = [self._block_text(block) for block in document.content]
        return _BLOCK_SEPARATOR.join(block for block in blocks if block)

    def _block_text(self, node: Node) -> str:
        kind = node.kind
        if kind in _LINE_CONTAINERS:
            return "\n".join(line for line in (self._line_text(child) for child in node.content) if line)
        if kind is NodeType.BLOCKQUOTE or (kind is None and node.content and not node.text):
            return self.render_document(Document(content=node.content))
        return self._inline_text(node).strip()

    def _line_text(self, node: Node) -> str:
        kind = node.kind
        if kind is NodeType.TABLE_ROW:
            return " | ".join(self._inline_text(cell).strip() for cell in node.content)
        if kind is NodeType.TASK_ITEM:
            marker = "[x]" if node.attrs.get("checked") is True else "[ ]"
            return f"{marker} {self._flatten(node.content)}".rstrip()
        return self._flatten(node.content)

    def _flatten(self, nodes: List[Node]) -> str:
        return " ".join(text for text in (self._block_text(child) for child in nodes) if text)

    def _inline_text(self, node: Node) -> str:
        kind = node.kind
        if kind is NodeType.TEXT:
            return node.text or ""
        if kind is NodeType.HARD_BREAK:
            return "\n"
        if kind is NodeType.MENTION:
            label = node.attrs.get("label") or node.attrs.get("id")
            return f"@{label}" if label else ""
        if kind is NodeType.IMAGE:
            alt = node.attrs.get("alt")
            return alt if isinstance(alt, str) else ""
        if kind is NodeType.CODE_BLOCK:
            return "".join(child.text or "" for child in node.content)
        return "".join(self._inline_text(child) for child in node.content)
