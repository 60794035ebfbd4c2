"""Tests for plain-text rendering and derived post metadata."""
import json
import unittest

from tiptap_renderer.renderer.text_renderer import PlainTextRenderer
from tiptap_renderer.utils.text_stats import (
    make_excerpt,
    minutes_to_read,
    reading_time,
    slugify,
    truncate_words,
    word_count,
)

DOCUMENT = {
    "type": "doc",
    "content": [
        {"type": "heading", "attrs": {"level": 1}, "content": [{"type": "text", "text": "Title"}]},
        {
            "type": "paragraph",
            "content": [
                {"type": "text", "text": "Hello "},
                {"type": "text", "text": "world", "marks": [{"type": "bold"}]},
                {"type": "hardBreak"},
                {"type": "mention", "attrs": {"id": "1", "label": "ada"}},
            ],
        },
        {
            "type": "bulletList",
            "content": [
                {"type": "listItem", "content": [{"type": "paragraph", "content": [{"type": "text", "text": "one"}]}]},
                {"type": "listItem", "content": [{"type": "paragraph", "content": [{"type": "text", "text": "two"}]}]},
            ],
        },
        {
            "type": "taskList",
            "content": [
                {"type": "taskItem", "attrs": {"checked": True}, "content": [{"type": "paragraph", "content": [{"type": "text", "text": "done"}]}]},
            ],
        },
        {"type": "codeBlock", "attrs": {"language": "js"}, "content": [{"type": "text", "text": "let x = 1;"}]},
        {"type": "horizontalRule"},
    ],
}


class PlainTextRendererTest(unittest.TestCase):
    """Test flattening documents into text."""

    def setUp(self) -> None:
        self.renderer = PlainTextRenderer()

    def test_document_text(self) -> None:
        self.assertEqual(
            self.renderer.render(json.dumps(DOCUMENT)),
            "Title\n\nHello world\n@ada\n\none\ntwo\n\n[x] done\n\nlet x = 1;",
        )

    def test_table_rows_become_lines(self) -> None:
        def cell(kind, value):
            return {"type": kind, "content": [{"type": "paragraph", "content": [{"type": "text", "text": value}]}]}

        table = {
            "type": "doc",
            "content": [
                {
                    "type": "table",
                    "content": [
                        {"type": "tableRow", "content": [cell("tableHeader", "A"), cell("tableHeader", "B")]},
                        {"type": "tableRow", "content": [cell("tableCell", "1"), cell("tableCell", "2")]},
                    ],
                }
            ],
        }
        self.assertEqual(self.renderer.render(table), "A | B\n1 | 2")

    def test_other_content_kinds(self) -> None:
        self.assertEqual(self.renderer.render(None), "")
        self.assertEqual(self.renderer.render("<p>Hello <b>there</b></p><p>again &amp; again</p>"), "Hello there\nagain & again")
        self.assertEqual(self.renderer.render("just text"), "just text")

    def test_unknown_container_keeps_children(self) -> None:
        content = {"type": "doc", "content": [{"type": "futureThing", "content": [{"type": "paragraph", "content": [{"type": "text", "text": "kept"}]}]}]}
        self.assertEqual(self.renderer.render(content), "kept")


class TextStatsTest(unittest.TestCase):
    """Test reading time, excerpts, and slugs."""

    def test_word_count(self) -> None:
        self.assertEqual(word_count("  one two\nthree "), 3)
        self.assertEqual(word_count(""), 0)

    def test_reading_time(self) -> None:
        long_post = {"type": "doc", "content": [{"type": "paragraph", "content": [{"type": "text", "text": "word " * 401}]}]}

        self.assertEqual(reading_time(None), 1)
        self.assertEqual(reading_time(DOCUMENT), 1)
        self.assertEqual(reading_time(long_post), 3)
        self.assertEqual(reading_time(long_post, words_per_minute=100), 5)

    def test_reading_time_rejects_bad_rate(self) -> None:
        with self.assertRaises(ValueError):
            reading_time("text", words_per_minute=0)

    def test_minutes_to_read(self) -> None:
        self.assertEqual(minutes_to_read(0), 1)
        self.assertEqual(minutes_to_read(401), 3)
        with self.assertRaises(ValueError):
            minutes_to_read(10, words_per_minute=-1)

    def test_truncate_words(self) -> None:
        sentence = "The quick brown fox jumps over the lazy dog"

        self.assertEqual(truncate_words(sentence, 100), sentence)
        self.assertEqual(truncate_words(sentence, 20), "The quick brown...")
        self.assertLessEqual(len(truncate_words(sentence, 20)), 20)

    def test_make_excerpt(self) -> None:
        excerpt = make_excerpt(DOCUMENT, limit=25)

        self.assertEqual(excerpt, "Title Hello world @ada...")
        self.assertEqual(make_excerpt("<p>Short</p>"), "Short")

    def test_slugify(self) -> None:
        cases = {
            "Hello World!": "hello-world",
            "  Python -- Tips & Tricks ": "-python-tips-tricks-",
            "Ünïcode Title 2024": "ncode-title-2024",
        }
        for title, expected in cases.items():
            self.assertEqual(slugify(title), expected, title)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
