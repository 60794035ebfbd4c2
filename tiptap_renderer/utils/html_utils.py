"""Helper functions to build escaped HTML fragments."""
from __future__ import annotations

import html
import re
from typing import Iterable, Mapping, Optional
from urllib.parse import urlparse

SAFE_URL_SCHEMES = frozenset({"http", "https", "mailto", "tel", ""})

_TAG_RE = re.compile(r"<[^>]*>")
_BLOCK_TAG_RE = re.compile(r"</(p|div|h[1-6]|li|blockquote|pre|tr)>|<br\s*/?>", re.IGNORECASE)


def escape(text: object) -> str:
    """Escape text for element content or a double-quoted attribute value."""
    return html.escape(str(text), quote=True)


def build_attrs(attrs: Mapping[str, object]) -> str:
    """Render an attribute mapping; ``None``/``False`` values are dropped, ``True`` becomes a bare flag."""
    parts = []
    for key, value in attrs.items():
        if value is None or value is False:
            continue
        if value is True:
            parts.append(f" {key}")
        else:
            parts.append(f' {key}="{escape(value)}"')
    return "".join(parts)


def element(tag: str, inner: str = "", attrs: Optional[Mapping[str, object]] = None) -> str:
    """Wrap already-rendered ``inner`` markup in ``tag``."""
    return f"<{tag}{build_attrs(attrs or {})}>{inner}</{tag}>"


def void_element(tag: str, attrs: Optional[Mapping[str, object]] = None) -> str:
    return f"<{tag}{build_attrs(attrs or {})}>"


def join_classes(classes: Iterable[Optional[str]]) -> Optional[str]:
    """Join non-empty class names, or return ``None`` so the attribute is omitted."""
    joined = " ".join(c for c in classes if c)
    return joined or None


def safe_url(url: object, *, allow_data_images: bool = False) -> Optional[str]:
    """Return ``url`` when its scheme is safe to link to, otherwise ``None``.

    ``allow_data_images`` additionally accepts inline ``data:image/...`` URIs,
    which the editor produces for pasted images.
    """
    if not isinstance(url, str) or not url.strip():
        return None
    candidate = url.strip()
    # Browsers ignore embedded whitespace and control characters in schemes.
    compact = re.sub(r"[\x00-\x20]", "", candidate)
    try:
        scheme = urlparse(compact).scheme.lower()
    except ValueError:
        return None
    if scheme == "data" and allow_data_images:
        return candidate if compact.lower().startswith("data:image/") else None
    if scheme not in SAFE_URL_SCHEMES:
        return None
    return candidate


def strip_tags(markup: str) -> str:
    """Drop tags from legacy HTML, keeping block boundaries as newlines."""
    text = _BLOCK_TAG_RE.sub("\n", markup)
    return html.unescape(_TAG_RE.sub("", text))
