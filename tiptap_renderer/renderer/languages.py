"""Language alias table and per-language highlight rule sets."""
from __future__ import annotations

import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Optional, Pattern, Tuple

PLAIN_TEXT = "text"

# Categories after the comment/string pass, in the order they are applied.
CATEGORY_ORDER: Tuple[str, ...] = (
    "keyword",
    "number",
    "type",
    "function",
    "declaration",
    "decorator",
    "tag",
    "attribute",
    "command",
    "variable",
    "selector",
    "property",
    "unit",
)

LANGUAGE_ALIASES: Mapping[str, str] = MappingProxyType(
    {
        "js": "javascript",
        "jsx": "javascript",
        "javascript": "javascript",
        "mjs": "javascript",
        "ts": "typescript",
        "tsx": "typescript",
        "typescript": "typescript",
        "py": "python",
        "python": "python",
        "html": "html",
        "xml": "html",
        "css": "css",
        "java": "java",
        "sh": "bash",
        "shell": "bash",
        "bash": "bash",
        "zsh": "bash",
        "json": "json",
        "text": PLAIN_TEXT,
        "txt": PLAIN_TEXT,
        "plaintext": PLAIN_TEXT,
    }
)


def resolve_language(hint: object) -> str:
    """Return the canonical language for an editor language hint."""
    if not isinstance(hint, str):
        return PLAIN_TEXT
    return LANGUAGE_ALIASES.get(hint.strip().lower(), PLAIN_TEXT)


@dataclass(frozen=True, slots=True)
class LanguageRules:
    """Compiled highlight patterns for one canonical language.

    ``literal_pattern`` matches comments and strings in a single left-to-right
    scan (named groups ``comment``, ``key`` and ``string``) so whichever starts first
    wins. ``rules`` are applied afterwards in ``CATEGORY_ORDER``; a rule may
    narrow the highlighted part of its match to a group named ``tok``.
    """

    name: str
    literal_pattern: Optional[Pattern[str]]
    rules: Tuple[Tuple[str, Pattern[str]], ...]


def build_rules(
    name: str,
    *,
    comment: Optional[str] = None,
    string: Optional[str] = None,
    key: Optional[str] = None,
    flags: int = 0,
    **categories: str,
) -> LanguageRules:
    """Compile one language. ``key`` (JSON object keys) joins the literal pass ahead of strings."""
    unknown = set(categories) - set(CATEGORY_ORDER)
    if unknown:
        raise ValueError(f"Unknown highlight categories for {name}: {sorted(unknown)}")

    literal_parts = []
    if comment:
        literal_parts.append(f"(?P<comment>{comment})")
    if key:
        literal_parts.append(f"(?P<key>{key})")
    if string:
        literal_parts.append(f"(?P<string>{string})")
    literal_pattern = re.compile("|".join(literal_parts), flags) if literal_parts else None

    rules = tuple(
        (category, re.compile(categories[category], flags))
        for category in CATEGORY_ORDER
        if category in categories
    )
    return LanguageRules(name=name, literal_pattern=literal_pattern, rules=rules)


def _words(words: Iterable[str]) -> str:
    return r"\b(?:" + "|".join(words) + r")\b"


_C_COMMENT = r"//[^\n]*|/\*[\s\S]*?\*/"
_DQ_STRING = r'"(?:\\.|[^"\\\n])*"'
_SQ_STRING = r"'(?:\\.|[^'\\\n])*'"
_NUMBER = r"\b\d+(?:\.\d+)?\b"
_JS_IDENT = r"[A-Za-z_$][\w$]*"

_JS_KEYWORDS = (
    "function", "const", "let", "var", "if", "else", "for", "while", "return", "class",
    "import", "export", "from", "default", "extends", "super", "this", "new", "typeof",
    "instanceof", "void", "in", "of", "try", "catch", "finally", "throw", "delete", "yield",
    "await", "async", "static", "public", "private", "protected", "true", "false", "null",
    "undefined", "switch", "case", "break", "continue", "do",
)
_TS_KEYWORDS = _JS_KEYWORDS + (
    "interface", "type", "enum", "namespace", "module", "declare", "implements", "readonly",
    "abstract", "keyof", "is", "as",
)


def _javascript() -> LanguageRules:
    return build_rules(
        "javascript",
        comment=_C_COMMENT,
        string=rf"{_SQ_STRING}|{_DQ_STRING}|`(?:\\.|[^`\\])*`",
        keyword=_words(_JS_KEYWORDS),
        number=_NUMBER,
        type=_words(("Number", "String", "Boolean", "Object", "Array", "Function", "Symbol",
                     "Date", "RegExp", "Promise", "Map", "Set", "Error")),
        function=rf"(?<![\w$]){_JS_IDENT}(?=\()",
        declaration=rf"\b(?:class|interface|enum)\s+(?P<tok>{_JS_IDENT})",
    )


def _typescript() -> LanguageRules:
    return build_rules(
        "typescript",
        comment=_C_COMMENT,
        string=rf"{_SQ_STRING}|{_DQ_STRING}|`(?:\\.|[^`\\])*`",
        keyword=_words(_TS_KEYWORDS),
        number=_NUMBER,
        type=_words(("number", "string", "boolean", "any", "unknown", "never", "object",
                     "Date", "Promise", "Record", "Partial", "Required", "Readonly", "Pick",
                     "Omit", "Array")),
        function=rf"(?<![\w$]){_JS_IDENT}(?=\()",
        declaration=rf"\b(?:class|interface|enum|type)\s+(?P<tok>{_JS_IDENT})",
        decorator=rf"@{_JS_IDENT}",
    )


def _python() -> LanguageRules:
    return build_rules(
        "python",
        comment=r"#[^\n]*",
        string=(
            r"(?:\b[rRbBuUfF]{1,2})?"
            rf"(?:\"\"\"[\s\S]*?\"\"\"|'''[\s\S]*?'''|{_DQ_STRING}|{_SQ_STRING})"
        ),
        keyword=_words((
            "def", "class", "if", "else", "elif", "for", "while", "return", "import", "from",
            "as", "try", "except", "finally", "with", "lambda", "yield", "async", "await",
            "True", "False", "None", "and", "or", "not", "in", "is", "global", "nonlocal",
            "pass", "break", "continue", "raise", "del", "assert", "match", "case",
        )),
        number=_NUMBER,
        type=_words(("int", "float", "str", "bytes", "bool", "list", "dict", "set", "tuple",
                     "object", "type")),
        function=r"\b[A-Za-z_]\w*(?=\()",
        declaration=r"\b(?:class|def)\s+(?P<tok>[A-Za-z_]\w*)",
        decorator=r"@[A-Za-z_]\w*",
    )


def _java() -> LanguageRules:
    return build_rules(
        "java",
        comment=_C_COMMENT,
        string=rf"{_DQ_STRING}|'(?:\\.|[^'\\\n])'",
        keyword=_words((
            "public", "private", "protected", "static", "final", "abstract", "class",
            "interface", "extends", "implements", "void", "int", "long", "double", "float",
            "boolean", "char", "byte", "short", "if", "else", "for", "while", "do", "switch",
            "case", "default", "break", "continue", "return", "try", "catch", "finally",
            "throw", "throws", "new", "this", "super", "null", "true", "false", "package",
            "import", "enum", "record", "var",
        )),
        number=_NUMBER,
        type=_words(("String", "Integer", "Long", "Double", "Boolean", "Object", "List", "Map",
                     "Set", "Optional")),
        function=r"\b[A-Za-z_]\w*(?=\()",
        declaration=r"\b(?:class|interface|enum|record)\s+(?P<tok>[A-Za-z_$][\w$]*)",
        decorator=r"@[A-Za-z_]\w*",
    )


def _html() -> LanguageRules:
    return build_rules(
        "html",
        comment=r"<!--[\s\S]*?-->",
        string=r'"[^"]*"|\'[^\'\n]*\'',
        tag=r"</?(?P<tok>[A-Za-z][\w-]*)",
        attribute=r"(?<=\s)(?P<tok>[A-Za-z_:@][\w:.-]*)(?=\s*=)",
    )


def _css() -> LanguageRules:
    return build_rules(
        "css",
        comment=r"/\*[\s\S]*?\*/",
        string=rf"{_DQ_STRING}|{_SQ_STRING}",
        number=r"(?<![\w-])\d+(?:\.\d+)?",
        selector=r"(?P<tok>[.#]?[A-Za-z][\w-]*)(?=\s*\{)",
        property=r"(?<![\w-])(?P<tok>-?[A-Za-z][\w-]*)(?=\s*:[^{}]*[;}])",
        unit=r"(?<=\d)(?:px|rem|em|vh|vw|%)(?![A-Za-z])",
    )


def _bash() -> LanguageRules:
    return build_rules(
        "bash",
        comment=r"(?<!\S)#[^\n]*",
        string=rf"{_DQ_STRING}|'[^']*'",
        flags=re.MULTILINE,
        keyword=_words((
            "if", "then", "else", "elif", "fi", "for", "while", "do", "done", "case", "esac",
            "function", "export", "local", "return", "exit", "in",
        )),
        number=r"(?<![\w$-])\d+\b",
        command=r"^[ \t]*(?P<tok>[A-Za-z_][\w.-]*)",
        variable=r"\$(?:\{[^}\n]*\}|[A-Za-z_]\w*|[0-9#?@*$!])",
    )


def _json() -> LanguageRules:
    return build_rules(
        "json",
        key=r'"(?:\\.|[^"\\])*"(?=\s*:)',
        string=r'"(?:\\.|[^"\\])*"',
        keyword=_words(("true", "false", "null")),
        number=r"-?\b\d+(?:\.\d+)?(?:[eE][+-]?\d+)?\b",
    )


def build_default_registry() -> Mapping[str, LanguageRules]:
    """Compile every built-in rule set into a read-only mapping."""
    registry: Dict[str, LanguageRules] = {}
    for factory in (_javascript, _typescript, _python, _java, _html, _css, _bash, _json):
        rules = factory()
        registry[rules.name] = rules
    return MappingProxyType(registry)


DEFAULT_REGISTRY: Mapping[str, LanguageRules] = build_default_registry()
