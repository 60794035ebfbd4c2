"""Closed sets of node and mark variants understood by the renderers."""
from __future__ import annotations

from enum import Enum
from typing import Optional, Tuple


class NodeType(str, Enum):
    """Tiptap node tags."""

    DOC = "doc"
    PARAGRAPH = "paragraph"
    HEADING = "heading"
    CODE_BLOCK = "codeBlock"
    BLOCKQUOTE = "blockquote"
    BULLET_LIST = "bulletList"
    ORDERED_LIST = "orderedList"
    LIST_ITEM = "listItem"
    TABLE = "table"
    TABLE_ROW = "tableRow"
    TABLE_HEADER = "tableHeader"
    TABLE_CELL = "tableCell"
    HORIZONTAL_RULE = "horizontalRule"
    IMAGE = "image"
    TASK_LIST = "taskList"
    TASK_ITEM = "taskItem"
    YOUTUBE = "youtube"
    TEXT = "text"
    HARD_BREAK = "hardBreak"
    MENTION = "mention"

    @classmethod
    def parse(cls, tag: object) -> Optional["NodeType"]:
        """Return the variant for ``tag`` or ``None`` when it is not a known node type."""
        try:
            return cls(tag)
        except ValueError:
            return None


class MarkType(str, Enum):
    """Inline formatting marks attachable to text nodes."""

    BOLD = "bold"
    ITALIC = "italic"
    UNDERLINE = "underline"
    STRIKE = "strike"
    CODE = "code"
    HIGHLIGHT = "highlight"
    LINK = "link"

    @classmethod
    def parse(cls, tag: object) -> Optional["MarkType"]:
        try:
            return cls(tag)
        except ValueError:
            return None


# Outermost first: a text run with every mark renders as
# <a><mark><code><s><u><em><strong>text</strong></em></u></s></code></mark></a>.
MARK_NESTING_ORDER: Tuple[MarkType, ...] = (
    MarkType.LINK,
    MarkType.HIGHLIGHT,
    MarkType.CODE,
    MarkType.STRIKE,
    MarkType.UNDERLINE,
    MarkType.ITALIC,
    MarkType.BOLD,
)

LEAF_NODE_TYPES = frozenset(
    {
        NodeType.TEXT,
        NodeType.HARD_BREAK,
        NodeType.HORIZONTAL_RULE,
        NodeType.IMAGE,
        NodeType.YOUTUBE,
        NodeType.MENTION,
    }
)
