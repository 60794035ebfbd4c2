"""In-memory representation of a Tiptap rich-text document."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional

from tiptap_renderer.model.node_types import LEAF_NODE_TYPES, MarkType, NodeType


@dataclass(slots=True)
class Mark:
    """Inline formatting annotation attached to a text node."""

    type: str
    attrs: Dict[str, object] = field(default_factory=dict)

    @property
    def kind(self) -> Optional[MarkType]:
        return MarkType.parse(self.type)


@dataclass(slots=True)
class Node:
    """One element of the document tree, block or inline.

    The raw ``type`` tag is kept even when it is not a known variant so that
    unknown nodes survive a serialize/deserialize round trip untouched.
    """

    type: str
    content: List["Node"] = field(default_factory=list)
    attrs: Dict[str, object] = field(default_factory=dict)
    text: Optional[str] = None
    marks: List[Mark] = field(default_factory=list)

    @property
    def kind(self) -> Optional[NodeType]:
        return NodeType.parse(self.type)

    @property
    def is_leaf(self) -> bool:
        kind = self.kind
        if kind is None:
            return not self.content
        return kind in LEAF_NODE_TYPES

    @property
    def first_child(self) -> Optional["Node"]:
        return self.content[0] if self.content else None

    def walk(self) -> Iterator["Node"]:
        """Yield this node and its descendants in document (pre-order) order."""
        yield self
        for child in self.content:
            yield from child.walk()

    def text_content(self) -> str:
        """Concatenate the text of every text node in the subtree."""
        return "".join(node.text or "" for node in self.walk() if node.kind is NodeType.TEXT)


@dataclass(slots=True)
class Document:
    """Root container holding the ordered block nodes of a post body."""

    content: List[Node] = field(default_factory=list)
    attrs: Dict[str, object] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not self.content

    def walk(self) -> Iterator[Node]:
        for block in self.content:
            yield from block.walk()
