"""Wrap rendered post bodies into a standalone HTML page."""
from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

from tiptap_renderer.model.document_model import LoadedContent
from tiptap_renderer.renderer.html_renderer import HtmlRenderer
from tiptap_renderer.utils.html_utils import escape
from tiptap_renderer.utils.logger import get_logger

LOGGER = get_logger(__name__)

# Copies the raw (unhighlighted) code of a block; clipboard failures are only
# reported to the console.
COPY_CODE_SCRIPT = """\
document.addEventListener("click", function (event) {
  var button = event.target.closest("button.copy-code");
  if (!button) { return; }
  var block = document.querySelector('.code-block[data-key="' + button.dataset.copyTarget + '"]');
  if (!block || !navigator.clipboard) { return; }
  navigator.clipboard.writeText(block.dataset.code || "").then(function () {
    console.log("Code copied to clipboard");
  }).catch(function (err) {
    console.error("Failed to copy code:", err);
  });
});
"""


class HtmlPageRenderer:
    """Produce a complete HTML document around a rendered post body."""

    def __init__(self, renderer: Optional[HtmlRenderer] = None) -> None:
        self._renderer = renderer or HtmlRenderer()

    def render(self, content: Any, title: str = "Post") -> str:
        body = self._renderer.render(content)
        return self._build_html(body, title)

    def render_loaded(self, loaded: LoadedContent, title: str = "Post") -> str:
        return self._build_html(self._renderer.render_loaded(loaded), title)

    def write(self, content: Any, output_path: Path, title: str = "Post") -> None:
        output_path.write_text(self.render(content, title), encoding="utf-8")
        LOGGER.info("Wrote page to %s", output_path)

    def _build_html(self, body: str, title: str) -> str:
        theme = self._renderer.options.theme
        return f"""<!DOCTYPE html>
<html lang=\"en\">
<head>
  <meta charset=\"utf-8\" />
  <title>{escape(title)}</title>
  <style>
    .code-block {{ border: 1px solid #dee2e6; border-radius: 8px; background: {theme.background}; }}
    .code-block-header {{ display: flex; justify-content: space-between; padding: 4px 12px; }}
    .code-block pre {{ margin: 0; padding: 12px; overflow-x: auto; color: {theme.text}; }}
    .table-header-row {{ background: #f8f9fa; }}
    .image-caption {{ text-align: center; font-style: italic; }}
    .text-left {{ text-align: left; }}
    .text-center {{ text-align: center; }}
    .text-right {{ text-align: right; }}
    .text-justify {{ text-align: justify; }}
  </style>
</head>
<body>
{body}
<script>
{COPY_CODE_SCRIPT}</script>
</body>
</html>
"""
