"""Entry-point for the stored content -> HTML/text rendering pipeline."""
from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional, Sequence

from tiptap_renderer.model.document_model import LoadedContent
from tiptap_renderer.parser.content_loader import ContentLoader
from tiptap_renderer.renderer.html_renderer import HtmlRenderer
from tiptap_renderer.renderer.options import RenderOptions
from tiptap_renderer.renderer.page import HtmlPageRenderer
from tiptap_renderer.renderer.text_renderer import PlainTextRenderer
from tiptap_renderer.utils.debug import DebugDumper
from tiptap_renderer.utils.logger import get_logger, resolve_level
from tiptap_renderer.utils.text_stats import (
    EXCERPT_LENGTH,
    META_DESCRIPTION_LENGTH,
    minutes_to_read,
    slugify,
    truncate_words,
    word_count,
)

LOGGER = get_logger(__name__)

OUTPUT_FORMATS = ("html", "page", "text", "meta")


def load_content(content: Any) -> LoadedContent:
    """Normalize stored content into empty, legacy HTML, plain text, or a document."""
    return ContentLoader().load(content)


def render_html(content: Any, options: Optional[RenderOptions] = None) -> str:
    """Render stored content into an HTML fragment."""
    return HtmlRenderer(options).render(content)


def render_page(content: Any, title: str = "Post", options: Optional[RenderOptions] = None) -> str:
    """Render stored content into a standalone HTML page with the copy-code script."""
    return HtmlPageRenderer(HtmlRenderer(options)).render(content, title)


def render_text(content: Any) -> str:
    """Render stored content as plain text."""
    return PlainTextRenderer().render(content)


def post_summary(content: Any, title: str = "") -> Dict[str, Any]:
    """Fields stored next to a post body: slug, excerpt, meta description and reading time."""
    return summarize_loaded(load_content(content), title)


def summarize_loaded(loaded: LoadedContent, title: str = "") -> Dict[str, Any]:
    text = PlainTextRenderer().render_loaded(loaded)
    words = word_count(text)
    return {
        "slug": slugify(title),
        "excerpt": truncate_words(text, EXCERPT_LENGTH),
        "metaDescription": truncate_words(text, META_DESCRIPTION_LENGTH),
        "wordCount": words,
        "readingTime": minutes_to_read(words),
    }


def render_file(
    input_path: str,
    output_path: Optional[str] = None,
    *,
    output_format: str = "html",
    include_keys: bool = False,
    debug_dir: Optional[str] = None,
) -> str:
    """Run the stored content -> normalized content -> renderer pipeline for a file."""
    if output_format not in OUTPUT_FORMATS:
        raise ValueError(f"Unsupported output format: {output_format}")

    if input_path == "-":
        raw = sys.stdin.read()
        title = "Post"
    else:
        source = Path(input_path).resolve()
        if not source.exists():
            raise FileNotFoundError(f"Content file not found: {source}")
        LOGGER.info("Rendering %s as %s", source.name, output_format)
        raw = source.read_text(encoding="utf-8")
        title = source.stem

    loaded = load_content(raw)
    if debug_dir:
        dumped = DebugDumper(Path(debug_dir)).dump(loaded)
        LOGGER.info("Wrote debug tree to %s", dumped)

    options = RenderOptions(include_keys=include_keys)
    if output_format == "text":
        result = PlainTextRenderer().render_loaded(loaded)
    elif output_format == "meta":
        result = json.dumps(summarize_loaded(loaded, title), ensure_ascii=False, indent=2)
    elif output_format == "page":
        result = HtmlPageRenderer(HtmlRenderer(options)).render_loaded(loaded, title)
    else:
        result = HtmlRenderer(options).render_loaded(loaded)

    if output_path:
        target = Path(output_path).resolve()
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(result, encoding="utf-8")
        LOGGER.info("Wrote %s", target)
    return result


def main(argv: Optional[Sequence[str]] = None) -> int:
    import argparse

    parser = argparse.ArgumentParser(description="Render stored blog post content into HTML or text")
    parser.add_argument("input", help="Path to the stored content file, or - for stdin")
    parser.add_argument("--output", help="File to write; stdout when omitted")
    parser.add_argument("--format", choices=OUTPUT_FORMATS, default="html", help="Output flavour")
    parser.add_argument("--include-keys", action="store_true", help="Emit data-key attributes on every element")
    parser.add_argument("--debug-dir", help="Directory to dump the normalized document tree into")
    parser.add_argument("--log-level", help="Logging level (defaults to $TIPTAP_RENDERER_LOG_LEVEL or INFO)")

    args = parser.parse_args(argv)
    if args.log_level:
        logging.getLogger().setLevel(resolve_level(args.log_level))

    try:
        result = render_file(
            args.input,
            args.output,
            output_format=args.format,
            include_keys=args.include_keys,
            debug_dir=args.debug_dir,
        )
    except (FileNotFoundError, UnicodeDecodeError) as exc:
        LOGGER.error("%s", exc)
        return 1

    if not args.output:
        sys.stdout.write(result)
        if not result.endswith("\n"):
            sys.stdout.write("\n")
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
