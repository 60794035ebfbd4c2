"""Parse Tiptap JSON mappings into model elements."""
from __future__ import annotations

from typing import Any, List, Mapping

from tiptap_renderer.model.elements import Document, Mark, Node
from tiptap_renderer.utils.logger import get_logger

LOGGER = get_logger(__name__)

# Subtrees nested deeper than this are dropped.
MAX_DEPTH = 100


class DocumentParser:
    """Transforms raw editor JSON into a :class:`Document` tree.

    The parser is lenient: malformed entries are coerced or skipped so that a
    single bad node never prevents the rest of the post from rendering.
    """

    def parse(self, data: Mapping[str, Any]) -> Document:
        """Build a document from the root mapping (``{"type": "doc", "content": [...]}``)."""
        attrs = self._parse_attrs(data.get("attrs"))
        return Document(content=self._parse_children(data.get("content"), "doc", 0), attrs=attrs)

    def parse_node(self, data: Mapping[str, Any], depth: int = 0) -> Node:
        node_type = data.get("type")
        if not isinstance(node_type, str):
            LOGGER.debug("Node without a string type tag: %r", node_type)
            node_type = ""

        text = data.get("text")
        if text is not None and not isinstance(text, str):
            text = str(text)

        return Node(
            type=node_type,
            content=self._parse_children(data.get("content"), node_type, depth + 1),
            attrs=self._parse_attrs(data.get("attrs")),
            text=text,
            marks=self._parse_marks(data.get("marks")),
        )

    # ------------------------------------------------------------------
    # Internal helpers
    def _parse_children(self, raw: Any, parent_type: str, depth: int) -> List[Node]:
        if not isinstance(raw, list):
            if raw is not None:
                LOGGER.debug("Ignoring non-list content on %s node", parent_type or "untyped")
            return []
        if depth >= MAX_DEPTH:
            LOGGER.warning("Dropping content nested deeper than %d levels under %s", MAX_DEPTH, parent_type or "untyped")
            return []

        children: List[Node] = []
        for child in raw:
            if not isinstance(child, Mapping):
                LOGGER.debug("Skipping non-object child of %s: %r", parent_type or "untyped", child)
                continue
            children.append(self.parse_node(child, depth))
        return children

    def _parse_marks(self, raw: Any) -> List[Mark]:
        if not isinstance(raw, list):
            return []
        marks: List[Mark] = []
        for entry in raw:
            if isinstance(entry, str):
                marks.append(Mark(type=entry))
            elif isinstance(entry, Mapping) and isinstance(entry.get("type"), str):
                marks.append(Mark(type=entry["type"], attrs=self._parse_attrs(entry.get("attrs"))))
            else:
                LOGGER.debug("Skipping malformed mark: %r", entry)
        return marks

    @staticmethod
    def _parse_attrs(raw: Any) -> dict:
        if isinstance(raw, Mapping):
            return dict(raw)
        return {}
