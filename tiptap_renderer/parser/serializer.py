"""Convert document trees back into the stored Tiptap JSON shape."""
from __future__ import annotations

import json
from typing import Any, Dict

from tiptap_renderer.model.elements import Document, Mark, Node
from tiptap_renderer.parser.document_parser import DocumentParser


def mark_to_dict(mark: Mark) -> Dict[str, Any]:
    payload: Dict[str, Any] = {"type": mark.type}
    if mark.attrs:
        payload["attrs"] = dict(mark.attrs)
    return payload


def node_to_dict(node: Node) -> Dict[str, Any]:
    """Return the editor JSON for ``node``, omitting empty optional keys."""
    payload: Dict[str, Any] = {"type": node.type}
    if node.attrs:
        payload["attrs"] = dict(node.attrs)
    if node.content:
        payload["content"] = [node_to_dict(child) for child in node.content]
    if node.text is not None:
        payload["text"] = node.text
    if node.marks:
        payload["marks"] = [mark_to_dict(mark) for mark in node.marks]
    return payload


def document_to_dict(document: Document) -> Dict[str, Any]:
    payload: Dict[str, Any] = {"type": "doc"}
    if document.attrs:
        payload["attrs"] = dict(document.attrs)
    payload["content"] = [node_to_dict(block) for block in document.content]
    return payload


def serialize_document(document: Document, *, indent: int | None = None) -> str:
    """Encode ``document`` as the JSON string persisted by the storage layer."""
    return json.dumps(document_to_dict(document), ensure_ascii=False, indent=indent)


def deserialize_document(text: str) -> Document:
    """Decode a stored JSON string into a document.

    Raises ``ValueError`` (``json.JSONDecodeError``) for malformed JSON and
    ``TypeError`` when the payload is not an object; callers that need the
    lenient behaviour should go through :class:`ContentLoader` instead.
    """
    data = json.loads(text)
    if not isinstance(data, dict):
        raise TypeError(f"Expected a JSON object, got {type(data).__name__}")
    return DocumentParser().parse(data)
