"""Render stored post content into HTML."""
from __future__ import annotations

import re
from typing import Any, Callable, Dict, List, Mapping, Optional

from tiptap_renderer.model.document_model import (
    DocumentContent,
    HtmlContent,
    LoadedContent,
    PlainTextContent,
)
from tiptap_renderer.model.elements import Document, Mark, Node
from tiptap_renderer.model.node_types import MARK_NESTING_ORDER, MarkType, NodeType
from tiptap_renderer.parser.content_loader import ContentLoader
from tiptap_renderer.renderer.highlighter import SyntaxHighlighter
from tiptap_renderer.renderer.options import RenderOptions
from tiptap_renderer.renderer.utils import alignment_class, child_key, heading_level, positive_int
from tiptap_renderer.utils.html_utils import element, escape, join_classes, safe_url, void_element
from tiptap_renderer.utils.logger import get_logger

LOGGER = get_logger(__name__)

YOUTUBE_EMBED_URL = "https://www.youtube.com/embed/{video_id}"
_VIDEO_ID_RE = re.compile(r"^[A-Za-z0-9_-]{6,20}$")
_YOUTUBE_URL_RE = re.compile(r"(?:youtu\.be/|v=|/embed/|/shorts/)([A-Za-z0-9_-]{6,20})")

_MARK_TAGS: Mapping[MarkType, str] = {
    MarkType.BOLD: "strong",
    MarkType.ITALIC: "em",
    MarkType.UNDERLINE: "u",
    MarkType.STRIKE: "s",
    MarkType.CODE: "code",
    MarkType.HIGHLIGHT: "mark",
}

_SIMPLE_CONTAINERS: Mapping[NodeType, tuple] = {
    NodeType.BLOCKQUOTE: ("blockquote", "tiptap-blockquote"),
    NodeType.BULLET_LIST: ("ul", "tiptap-bullet-list"),
    NodeType.LIST_ITEM: ("li", "tiptap-list-item"),
    NodeType.TASK_LIST: ("ul", "task-list"),
    NodeType.TABLE_HEADER: ("th", "tiptap-table-header"),
    NodeType.TABLE_CELL: ("td", "tiptap-table-cell"),
}

NodeHandler = Callable[[Node, str], str]


class HtmlRenderer:
    """Walks a document depth-first and maps each node onto HTML.

    Every node receives a key path (``"0"``, ``"0-1"``, ...) derived from its
    position, so identical input always yields identical markup. A node that
    fails to render drops only its own subtree.
    """

    def __init__(
        self,
        options: Optional[RenderOptions] = None,
        highlighter: Optional[SyntaxHighlighter] = None,
        loader: Optional[ContentLoader] = None,
    ) -> None:
        self._options = options or RenderOptions()
        self._highlighter = highlighter or SyntaxHighlighter(theme=self._options.theme)
        self._loader = loader or ContentLoader()
        self._handlers: Dict[NodeType, NodeHandler] = {
            NodeType.DOC: self._render_unknown,
            NodeType.TEXT: self._render_text,
            NodeType.PARAGRAPH: self._render_paragraph,
            NodeType.HEADING: self._render_heading,
            NodeType.CODE_BLOCK: self._render_code_block,
            NodeType.ORDERED_LIST: self._render_ordered_list,
            NodeType.HORIZONTAL_RULE: self._render_horizontal_rule,
            NodeType.HARD_BREAK: self._render_hard_break,
            NodeType.IMAGE: self._render_image,
            NodeType.TABLE: self._render_table,
            NodeType.TABLE_ROW: self._render_table_row,
            NodeType.TASK_ITEM: self._render_task_item,
            NodeType.MENTION: self._render_mention,
            NodeType.YOUTUBE: self._render_youtube,
        }
        for node_type in _SIMPLE_CONTAINERS:
            self._handlers[node_type] = self._render_simple_container

    @property
    def options(self) -> RenderOptions:
        return self._options

    # ------------------------------------------------------------------
    # Public API
    def render(self, content: Any) -> str:
        """Render raw stored content (JSON string, mapping, legacy HTML, or text)."""
        return self.render_loaded(self._loader.load(content))

    def render_loaded(self, loaded: LoadedContent) -> str:
        if isinstance(loaded, DocumentContent):
            return self.render_document(loaded.document)
        if isinstance(loaded, HtmlContent):
            return self._wrap(loaded.html)
        if isinstance(loaded, PlainTextContent):
            return self._wrap(element("p", escape(loaded.text), {"class": "tiptap-paragraph"}))
        return self._placeholder()

    def render_document(self, document: Document) -> str:
        if document.is_empty:
            return self._placeholder()
        try:
            body = self._render_children(document.content, "")
        except RecursionError:
            LOGGER.warning("Document nests too deeply to render; showing placeholder")
            return self._placeholder()
        return self._wrap(body)

    def render_node(self, node: Node, key: str) -> str:
        """Render one node and its subtree; malformed subtrees render as nothing."""
        kind = node.kind
        handler = self._handlers.get(kind) if kind is not None else None
        try:
            if handler is None:
                return self._render_unknown(node, key)
            return handler(node, key)
        except (ArithmeticError, AttributeError, KeyError, TypeError, ValueError):
            LOGGER.warning("Dropping %s node at %s: malformed data", node.type or "untyped", key, exc_info=True)
            return ""

    # ------------------------------------------------------------------
    # Structure helpers
    def _wrap(self, inner: str) -> str:
        return element("div", inner, {"class": self._options.container_class})

    def _placeholder(self) -> str:
        return element("div", escape(self._options.placeholder), {"class": "tiptap-empty"})

    def _render_children(self, children: List[Node], key: str) -> str:
        return "".join(self.render_node(child, child_key(key, index)) for index, child in enumerate(children))

    def _attrs(self, key: str, css_class: Optional[str] = None, **attrs: object) -> Dict[str, object]:
        merged: Dict[str, object] = {"class": css_class}
        merged.update(attrs)
        if self._options.include_keys:
            merged["data-key"] = key
        return merged

    # ------------------------------------------------------------------
    # Node handlers
    def _render_unknown(self, node: Node, key: str) -> str:
        if not node.content:
            return ""
        LOGGER.debug("Rendering unknown node type %r as a generic container", node.type)
        return element("div", self._render_children(node.content, key), self._attrs(key, "unknown-node"))

    def _render_simple_container(self, node: Node, key: str) -> str:
        tag, css_class = _SIMPLE_CONTAINERS[node.kind]
        attrs = self._attrs(key, css_class)
        if node.kind in (NodeType.TABLE_HEADER, NodeType.TABLE_CELL):
            attrs["colspan"] = self._span_attr(node.attrs.get("colspan"))
            attrs["rowspan"] = self._span_attr(node.attrs.get("rowspan"))
        return element(tag, self._render_children(node.content, key), attrs)

    def _render_text(self, node: Node, key: str) -> str:
        html = escape(node.text or "")
        marks_by_kind: Dict[MarkType, Mark] = {}
        for mark in node.marks:
            kind = mark.kind
            if kind is not None and kind not in marks_by_kind:
                marks_by_kind[kind] = mark

        for kind in reversed(MARK_NESTING_ORDER):
            mark = marks_by_kind.get(kind)
            if mark is None:
                continue
            if kind is MarkType.LINK:
                html = self._render_link(html, mark)
            else:
                html = element(_MARK_TAGS[kind], html)
        return html

    def _render_link(self, inner: str, mark: Mark) -> str:
        href = safe_url(mark.attrs.get("href"))
        if href is None:
            return inner
        attrs: Dict[str, object] = {"href": href, "class": "tiptap-link"}
        if self._options.open_links_in_new_tab:
            attrs["target"] = "_blank"
            attrs["rel"] = "noopener noreferrer"
        return element("a", inner, attrs)

    def _render_paragraph(self, node: Node, key: str) -> str:
        css = join_classes(("tiptap-paragraph", alignment_class(node.attrs)))
        return element("p", self._render_children(node.content, key), self._attrs(key, css))

    def _render_heading(self, node: Node, key: str) -> str:
        level = heading_level(node.attrs)
        css = join_classes((f"heading-{level}", alignment_class(node.attrs)))
        return element(f"h{level}", self._render_children(node.content, key), self._attrs(key, css))

    def _render_code_block(self, node: Node, key: str) -> str:
        first = node.first_child
        code = first.text if first is not None and first.text else ""
        language = self._highlighter.resolve_language(node.attrs.get("language"))
        highlighted = self._highlighter.highlight(code, language)

        header = element(
            "div",
            element("span", escape(language.upper()), {"class": "code-language"})
            + element("button", "Copy", {"type": "button", "class": "copy-code", "data-copy-target": key}),
            {"class": "code-block-header"},
        )
        body = element("pre", element("code", highlighted, {"class": f"language-{language}"}))
        attrs = {"class": "code-block", "data-key": key, "data-language": language, "data-code": code}
        return element("div", header + body, attrs)

    def _render_ordered_list(self, node: Node, key: str) -> str:
        start = positive_int(node.attrs.get("start"))
        attrs = self._attrs(key, "tiptap-ordered-list")
        if start is not None and start != 1:
            attrs["start"] = start
        return element("ol", self._render_children(node.content, key), attrs)

    def _render_horizontal_rule(self, node: Node, key: str) -> str:
        return void_element("hr", self._attrs(key, "tiptap-rule"))

    def _render_hard_break(self, node: Node, key: str) -> str:
        return void_element("br")

    def _render_image(self, node: Node, key: str) -> str:
        src = safe_url(node.attrs.get("src"), allow_data_images=True)
        if src is None:
            return ""
        alt = node.attrs.get("alt")
        alt = alt if isinstance(alt, str) else ""
        title = node.attrs.get("title")
        image = void_element("img", {"src": src, "alt": alt, "title": title or None, "loading": "lazy"})
        inner = element("div", image, {"class": "image-frame"})
        if alt:
            inner += element("p", escape(alt), {"class": "image-caption"})
        return element("div", inner, self._attrs(key, "tiptap-image"))

    def _render_table(self, node: Node, key: str) -> str:
        table = element("table", self._render_children(node.content, key), {"class": "tiptap-table"})
        return element("div", table, self._attrs(key, "table-scroll"))

    def _render_table_row(self, node: Node, key: str) -> str:
        first = node.first_child
        is_header = first is not None and first.kind is NodeType.TABLE_HEADER
        css = "table-header-row" if is_header else "table-body-row"
        return element("tr", self._render_children(node.content, key), self._attrs(key, css))

    def _render_task_item(self, node: Node, key: str) -> str:
        checked = node.attrs.get("checked") is True
        checkbox = void_element(
            "input",
            {"type": "checkbox", "checked": checked, "disabled": True, "aria-readonly": "true"},
        )
        body = element("div", self._render_children(node.content, key), {"class": "task-item-body"})
        attrs = self._attrs(key, "task-item", **{"data-checked": "true" if checked else "false"})
        return element("li", checkbox + body, attrs)

    def _render_mention(self, node: Node, key: str) -> str:
        label = node.attrs.get("label") or node.attrs.get("id")
        if not label:
            return ""
        attrs = self._attrs(key, "mention")
        if node.attrs.get("id") is not None:
            attrs["data-id"] = node.attrs["id"]
        return element("span", f"@{escape(label)}", attrs)

    def _render_youtube(self, node: Node, key: str) -> str:
        video_id = self._youtube_id(node.attrs)
        if video_id is None:
            return ""
        iframe = element(
            "iframe",
            "",
            {
                "src": YOUTUBE_EMBED_URL.format(video_id=video_id),
                "title": "YouTube video",
                "allow": "accelerometer; autoplay; clipboard-write; encrypted-media; gyroscope; picture-in-picture",
                "allowfullscreen": True,
                "loading": "lazy",
            },
        )
        return element("div", element("div", iframe, {"class": "video-frame"}), self._attrs(key, "tiptap-youtube"))

    # ------------------------------------------------------------------
    # Attribute helpers
    @staticmethod
    def _span_attr(value: object) -> Optional[int]:
        span = positive_int(value)
        return span if span is not None and span > 1 else None

    @staticmethod
    def _youtube_id(attrs: Mapping[str, object]) -> Optional[str]:
        video_id = attrs.get("videoId")
        if isinstance(video_id, str) and _VIDEO_ID_RE.match(video_id):
            return video_id
        src = attrs.get("src")
        if isinstance(src, str):
            match = _YOUTUBE_URL_RE.search(src)
            if match:
                return match.group(1)
        return None
