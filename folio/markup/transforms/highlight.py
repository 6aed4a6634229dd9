"""Pygments-backed syntax highlighting of fenced code blocks.

Each block with a known language has its text replaced by
``span.token.<kind>`` nodes using Prism-style class names, so a stylesheet
can colour the output without re-parsing it.
"""

from __future__ import annotations

from pygments.lexer import Lexer
from pygments.lexers import get_lexer_by_name
from pygments.token import (
    Comment,
    Generic,
    Keyword,
    Name,
    Number,
    Operator,
    Punctuation,
    String,
    _TokenType,
)
from pygments.util import ClassNotFound

from folio.errors import HighlightError
from folio.markup.models import Node, code_of, element, language_of, text, text_content, walk

from .pipeline import CompileContext, Transform

# Checked in order; the first group containing the token type wins.
_TOKEN_CLASSES: list[tuple[_TokenType, str]] = [
    (Comment, "comment"),
    (String.Regex, "regex"),
    (String, "string"),
    (Number, "number"),
    (Keyword.Constant, "boolean"),
    (Keyword, "keyword"),
    (Name.Builtin, "builtin"),
    (Name.Function, "function"),
    (Name.Class, "class-name"),
    (Name.Decorator, "decorator"),
    (Name.Tag, "tag"),
    (Name.Attribute, "attr-name"),
    (Name.Constant, "constant"),
    (Name.Variable, "variable"),
    (Operator.Word, "keyword"),
    (Operator, "operator"),
    (Punctuation, "punctuation"),
    (Generic.Inserted, "inserted"),
    (Generic.Deleted, "deleted"),
]


def token_class(ttype: _TokenType) -> str | None:
    for group, cls in _TOKEN_CLASSES:
        if ttype in group:
            return cls
    return None


def _lexer_for(language: str) -> Lexer | None:
    try:
        return get_lexer_by_name(language, stripnl=False, ensurenl=False)
    except ClassNotFound:
        return None


def tokenize(source: str, language: str, lexer: Lexer) -> list[Node]:
    """Turn ``source`` into text and ``span.token`` nodes, merging runs of one kind."""
    nodes: list[Node] = []
    current: str | None = None
    buffer: list[str] = []

    def flush() -> None:
        if not buffer:
            return
        value = "".join(buffer)
        if current is None:
            nodes.append(text(value))
        else:
            nodes.append(element("span", {"className": ["token", current]}, [text(value)]))
        buffer.clear()

    try:
        for ttype, value in lexer.get_tokens(source):
            if not value:
                continue
            cls = token_class(ttype)
            if cls != current:
                flush()
                current = cls
            buffer.append(value)
    except Exception as exc:
        raise HighlightError(language, exc) from exc
    flush()
    return nodes


class SyntaxHighlighter(Transform):
    name = "highlight"

    def apply(self, tree: Node, context: CompileContext) -> Node:
        skip = {lang.lower() for lang in context.config.highlight.skip_languages}
        for node in walk(tree):
            code = code_of(node)
            if code is None:
                continue
            language = language_of(code)
            if not language or language.lower() in skip:
                continue

            lexer = _lexer_for(language)
            if lexer is None:
                context.logger.debug("no lexer for %r, leaving block plain", language)
                continue

            try:
                code.children = tokenize(text_content(code), language, lexer)
            except HighlightError as exc:
                context.logger.warning("%s; leaving block plain", exc)
                continue

            classes = node.properties.setdefault("className", [])
            if f"language-{language}" not in classes:
                classes.append(f"language-{language}")
        return tree
