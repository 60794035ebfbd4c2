"""Tests for code block syntax highlighting."""
import html
import re
import unittest

from tiptap_renderer.renderer.highlighter import SyntaxHighlighter
from tiptap_renderer.renderer.languages import (
    DEFAULT_REGISTRY,
    LANGUAGE_ALIASES,
    LanguageRules,
    build_rules,
    resolve_language,
)
from tiptap_renderer.renderer.options import HighlightTheme

_TAG_RE = re.compile(r"<[^>]+>")

SAMPLES = {
    "javascript": 'const greet = (name) => `Hi ${name}`; // greet\nclass Foo extends Bar {}\n/* block */ let n = 3.5;',
    "typescript": "@Component\ninterface Props { name: string }\ntype Id = number;",
    "python": '@app.route("/")\ndef index():\n    """Doc with def inside."""\n    return {"a": 1}  # done',
    "java": 'public class Main { String s = "if"; int n = 10; }',
    "html": '<!-- note --><div class="box" id=\'x\'>a & b</div>',
    "css": ".card { margin: 10px 2em; color: #fff; } /* c */",
    "bash": '# setup\nexport PATH=$PATH:/bin\necho "$HOME" \'single\'',
    "json": '{"name": "x", "count": -2, "ok": true, "none": null}',
}


def spans(markup: str, category: str):
    return re.findall(rf'<span class="token-{category}"[^>]*>(.*?)</span>', markup)


class LanguageResolutionTest(unittest.TestCase):
    """Test alias lookup for editor language hints."""

    def test_aliases(self) -> None:
        cases = {
            "js": "javascript",
            "JS": "javascript",
            "ts": "typescript",
            "py": "python",
            "sh": "bash",
            "shell": "bash",
            "xml": "html",
            " json ": "json",
            "plaintext": "text",
        }
        for hint, expected in cases.items():
            self.assertEqual(resolve_language(hint), expected, hint)

    def test_unknown_and_missing_resolve_to_text(self) -> None:
        for hint in (None, "", "cobol", 42):
            self.assertEqual(resolve_language(hint), "text", repr(hint))

    def test_every_alias_has_rules_or_is_plain(self) -> None:
        for canonical in set(LANGUAGE_ALIASES.values()):
            self.assertTrue(canonical == "text" or canonical in DEFAULT_REGISTRY, canonical)

    def test_registry_is_read_only(self) -> None:
        with self.assertRaises(TypeError):
            DEFAULT_REGISTRY["ruby"] = DEFAULT_REGISTRY["python"]  # type: ignore[index]

    def test_unknown_category_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            build_rules("broken", sparkle=r"x")


class SyntaxHighlighterTest(unittest.TestCase):
    """Test category ordering, escaping, and fallbacks."""

    def setUp(self) -> None:
        self.highlighter = SyntaxHighlighter()

    def test_javascript_comment_and_keyword(self) -> None:
        markup = self.highlighter.highlight("const x = 1; // comment", "javascript")

        self.assertEqual(
            markup,
            '<span class="token-keyword" style="color: #e34f67">const</span> x = '
            '<span class="token-number" style="color: #fd7e14">1</span>; '
            '<span class="token-comment" style="color: #6c757d">// comment</span>',
        )

    def test_text_content_is_preserved(self) -> None:
        for language, code in SAMPLES.items():
            markup = self.highlighter.highlight(code, language)
            self.assertEqual(html.unescape(_TAG_RE.sub("", markup)), code, language)

    def test_markup_is_escaped(self) -> None:
        markup = self.highlighter.highlight('if (a < b && c > "d") {}', "js")

        self.assertNotIn("< b", markup)
        self.assertIn("&lt; b &amp;&amp; c &gt;", markup)
        self.assertIn("&quot;d&quot;", markup)

    def test_keywords_inside_strings_and_comments_are_not_highlighted(self) -> None:
        markup = self.highlighter.highlight('let s = "if // not a comment"; // return later', "javascript")

        self.assertEqual(spans(markup, "string"), ["&quot;if // not a comment&quot;"])
        self.assertEqual(spans(markup, "comment"), ["// return later"])
        self.assertEqual(spans(markup, "keyword"), ["let"])

    def test_comment_marker_inside_python_string(self) -> None:
        markup = self.highlighter.highlight('url = "http://x#frag"  # real', "python")

        self.assertEqual(spans(markup, "string"), ["&quot;http://x#frag&quot;"])
        self.assertEqual(spans(markup, "comment"), ["# real"])

    def test_python_categories(self) -> None:
        markup = self.highlighter.highlight(SAMPLES["python"], "py")

        self.assertEqual(spans(markup, "decorator"), ["@app"])
        self.assertIn("route", spans(markup, "function"))
        self.assertIn("def", spans(markup, "keyword"))
        self.assertIn("index", spans(markup, "function"))
        self.assertIn("&quot;&quot;&quot;Doc with def inside.&quot;&quot;&quot;", spans(markup, "string"))
        self.assertEqual(spans(markup, "comment"), ["# done"])

    def test_declarations(self) -> None:
        js = self.highlighter.highlight("class Foo extends Bar {}", "js")
        py = self.highlighter.highlight("class Foo:\n    pass", "python")

        self.assertEqual(spans(js, "declaration"), ["Foo"])
        self.assertEqual(spans(py, "declaration"), ["Foo"])

    def test_typescript_types_and_decorators(self) -> None:
        markup = self.highlighter.highlight(SAMPLES["typescript"], "ts")

        self.assertEqual(spans(markup, "decorator"), ["@Component"])
        self.assertIn("string", spans(markup, "type"))
        self.assertIn("Props", spans(markup, "declaration"))

    def test_html_tags_and_attributes(self) -> None:
        markup = self.highlighter.highlight(SAMPLES["html"], "html")

        self.assertEqual(spans(markup, "comment"), ["&lt;!-- note --&gt;"])
        self.assertEqual(spans(markup, "tag"), ["div", "div"])
        self.assertEqual(spans(markup, "attribute"), ["class", "id"])

    def test_css_categories(self) -> None:
        markup = self.highlighter.highlight(SAMPLES["css"], "css")

        self.assertEqual(spans(markup, "selector"), [".card"])
        self.assertEqual(spans(markup, "property"), ["margin", "color"])
        self.assertEqual(spans(markup, "unit"), ["px", "em"])

    def test_bash_categories(self) -> None:
        markup = self.highlighter.highlight(SAMPLES["bash"], "sh")

        self.assertEqual(spans(markup, "comment"), ["# setup"])
        self.assertIn("export", spans(markup, "keyword"))
        self.assertEqual(spans(markup, "command"), ["echo"])
        self.assertEqual(spans(markup, "variable"), ["$PATH"])

    def test_json_keys_and_values(self) -> None:
        markup = self.highlighter.highlight(SAMPLES["json"], "json")

        self.assertEqual(spans(markup, "key"), ["&quot;name&quot;", "&quot;count&quot;", "&quot;ok&quot;", "&quot;none&quot;"])
        self.assertEqual(spans(markup, "string"), ["&quot;x&quot;"])
        self.assertEqual(spans(markup, "number"), ["-2"])
        self.assertEqual(spans(markup, "keyword"), ["true", "null"])

    def test_plain_text_is_only_escaped(self) -> None:
        self.assertEqual(self.highlighter.highlight("const <x>", "cobol"), "const &lt;x&gt;")
        self.assertEqual(self.highlighter.highlight("", "javascript"), "")

    def test_unterminated_literals_do_not_raise(self) -> None:
        for language in DEFAULT_REGISTRY:
            for code in ('"unterminated', "/* open", "'''", "<!--", "}{", "$"):
                markup = self.highlighter.highlight(code, language)
                self.assertEqual(html.unescape(_TAG_RE.sub("", markup)), code, (language, code))

    def test_custom_theme(self) -> None:
        highlighter = SyntaxHighlighter(theme=HighlightTheme(keyword="#000000"))

        self.assertIn('style="color: #000000">return', highlighter.highlight("return 1", "js"))

    def test_failing_rule_set_degrades_to_plain(self) -> None:
        class ExplodingPattern:
            groupindex = {}

            def search(self, *args):
                raise RuntimeError("bad rule")

        registry = {"javascript": LanguageRules(name="javascript", literal_pattern=None, rules=(("keyword", ExplodingPattern()),))}
        highlighter = SyntaxHighlighter(registry=registry)

        with self.assertLogs("tiptap_renderer.renderer.highlighter", level="WARNING"):
            markup = highlighter.highlight("a < b", "js")
        self.assertEqual(markup, "a &lt; b")


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
