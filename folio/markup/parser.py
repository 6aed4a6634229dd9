"""Markdown -> document tree, with MDX-style component tags.

Components are tags whose name starts with an uppercase letter, e.g.
``<Callout kind="tip">`` or ``<YouTube id="abc" />``. Props may be quoted
strings, bare words, bare flags (``true``) or ``{...}`` JSON expressions.
"""

from __future__ import annotations

import json
import re
from typing import Any

from markdown_it import MarkdownIt
from markdown_it.rules_block import StateBlock
from markdown_it.rules_inline import StateInline
from markdown_it.token import Token

from folio.config.models import MarkupConfig
from folio.errors import MarkupSyntaxError
from folio.markup.models import Node, element, set_language, text

_COMPONENT_TAG_RE = re.compile(
    r"""<(?P<close>/)?(?P<name>[A-Z][A-Za-z0-9_.]*)"""
    r"""(?P<attrs>(?:"[^"]*"|'[^']*'|\{(?:[^{}]|\{[^{}]*\})*\}|[^"'{}<>/]|/(?!>))*?)"""
    r"""\s*(?P<self>/)?>""",
    re.DOTALL,
)

_ATTR_RE = re.compile(
    r"""\s*(?P<key>[A-Za-z_:][\w:.-]*)"""
    r"""(?:\s*=\s*(?:"(?P<dq>[^"]*)"|'(?P<sq>[^']*)'|\{(?P<expr>(?:[^{}]|\{[^{}]*\})*)\}|(?P<bare>[^\s"'=<>`{}]+)))?""",
    re.DOTALL,
)


# ---------------------------------------------------------------------------
# markdown-it rules
# ---------------------------------------------------------------------------


def _component_block(state: StateBlock, startLine: int, endLine: int, silent: bool) -> bool:
    """A component tag standing alone on its line(s)."""
    if state.sCount[startLine] - state.blkIndent >= 4:
        return False

    pos = state.bMarks[startLine] + state.tShift[startLine]
    match = _COMPONENT_TAG_RE.match(state.src, pos)
    if match is None:
        return False

    # Nothing but whitespace may follow the tag on its last line
    next_line = startLine
    while next_line < endLine and state.eMarks[next_line] < match.end():
        next_line += 1
    if next_line >= endLine:
        return False
    if state.src[match.end():state.eMarks[next_line]].strip():
        return False

    if silent:
        return True

    token = state.push("mdx_component", "", 0)
    token.content = match.group(0)
    token.map = [startLine, next_line + 1]
    token.block = True
    state.line = next_line + 1
    return True


def _component_inline(state: StateInline, silent: bool) -> bool:
    if state.src[state.pos] != "<":
        return False
    match = _COMPONENT_TAG_RE.match(state.src, state.pos)
    if match is None:
        return False
    if not silent:
        token = state.push("mdx_component", "", 0)
        token.content = match.group(0)
    state.pos = match.end()
    return True


def create_markdown(config: MarkupConfig) -> MarkdownIt:
    """CommonMark with tables, strikethrough, raw HTML and component tags."""
    md = MarkdownIt("commonmark", {"html": True, "typographer": config.typographer})
    md.enable(["table", "strikethrough"])
    if config.typographer:
        md.enable(["replacements", "smartquotes"])
    md.block.ruler.before(
        "html_block",
        "mdx_component",
        _component_block,
        {"alt": ["paragraph", "reference", "blockquote"]},
    )
    md.inline.ruler.before("html_inline", "mdx_component", _component_inline)
    return md


# ---------------------------------------------------------------------------
# Component tags
# ---------------------------------------------------------------------------


def parse_props(source: str, name: str, line: int | None = None) -> dict[str, Any]:
    """Parse the attribute section of a component tag into props."""
    props: dict[str, Any] = {}
    pos = 0
    source = source.rstrip()
    while pos < len(source):
        match = _ATTR_RE.match(source, pos)
        if match is None or match.end() == pos:
            raise MarkupSyntaxError(f"malformed attributes in <{name}>: {source[pos:].strip()!r}", line)
        key = match.group("key")
        if match.group("dq") is not None:
            value: Any = match.group("dq")
        elif match.group("sq") is not None:
            value = match.group("sq")
        elif match.group("expr") is not None:
            expr = match.group("expr").strip()
            try:
                value = json.loads(expr)
            except json.JSONDecodeError as exc:
                raise MarkupSyntaxError(
                    f"unsupported expression {{{expr}}} for prop {key!r} of <{name}>", line
                ) from exc
        elif match.group("bare") is not None:
            value = match.group("bare")
        else:
            value = True
        props[key] = value
        pos = match.end()
    return props


class _Tag:
    def __init__(self, source: str, line: int | None) -> None:
        match = _COMPONENT_TAG_RE.fullmatch(source)
        if match is None:
            raise MarkupSyntaxError(f"malformed component tag {source!r}", line)
        self.name = match.group("name")
        self.closing = match.group("close") is not None
        self.self_closing = match.group("self") is not None
        if self.closing and (self.self_closing or match.group("attrs").strip()):
            raise MarkupSyntaxError(f"malformed closing tag {source!r}", line)
        self.props = {} if self.closing else parse_props(match.group("attrs"), self.name, line)


# ---------------------------------------------------------------------------
# Token stream -> tree
# ---------------------------------------------------------------------------

_SKIP_ATTRS = {"alt"}


def _properties(token: Token) -> dict[str, Any]:
    props: dict[str, Any] = {}
    for key, value in token.attrs.items():
        if key in _SKIP_ATTRS:
            continue
        if key == "class":
            props["className"] = str(value).split()
        else:
            props[key] = value
    return props


def _code_block(token: Token) -> Node:
    content = token.content[:-1] if token.content.endswith("\n") else token.content
    code = element("code", children=[text(content)] if content else [])
    info = token.info.strip() if token.type == "fence" else ""
    if info:
        language, _, meta = info.partition(" ")
        set_language(code, language)
        if meta.strip():
            code.properties["dataMeta"] = meta.strip()
    return element("pre", children=[code])


class TreeBuilder:
    """Builds a ``Node`` tree from a markdown-it token stream.

    Element and component containers share one stack, so a component opened
    in one block can wrap several markdown blocks and must be closed at the
    same nesting level it was opened at.
    """

    def __init__(self) -> None:
        self.root = Node(type="root")
        self._stack: list[tuple[Node, int | None]] = [(self.root, None)]

    @property
    def _top(self) -> Node:
        return self._stack[-1][0]

    def build(self, tokens: list[Token]) -> Node:
        self._feed(tokens)
        if len(self._stack) > 1:
            node, line = self._stack[-1]
            raise MarkupSyntaxError(f"unclosed component <{node.name}>", line)
        return self.root

    def _append(self, node: Node) -> None:
        children = self._top.children
        if node.type == "text" and children and children[-1].type == "text":
            children[-1].value = (children[-1].value or "") + (node.value or "")
            return
        children.append(node)

    def _feed(self, tokens: list[Token]) -> None:
        for token in tokens:
            line = token.map[0] + 1 if token.map else None
            if token.hidden:
                # Paragraph wrappers in tight lists
                if token.children:
                    self._feed_inline(token, line)
                continue

            if token.nesting == 1:
                node = element(token.tag, _properties(token))
                self._append(node)
                self._stack.append((node, line))
            elif token.nesting == -1:
                self._close_element(token, line)
            elif token.type == "inline":
                self._feed_inline(token, line)
            else:
                self._leaf(token, line)

    def _feed_inline(self, token: Token, line: int | None) -> None:
        depth = len(self._stack)
        self._feed(token.children or [])
        if len(self._stack) != depth:
            node, _ = self._stack[-1]
            raise MarkupSyntaxError(f"unclosed component <{node.name}>", line)

    def _close_element(self, token: Token, line: int | None) -> None:
        node, opened_at = self._stack[-1]
        if node.type == "component":
            raise MarkupSyntaxError(f"unclosed component <{node.name}>", opened_at)
        self._stack.pop()

    def _leaf(self, token: Token, line: int | None) -> None:
        kind = token.type
        if kind == "mdx_component":
            self._component(_Tag(token.content, line), line)
        elif kind in ("fence", "code_block"):
            self._append(_code_block(token))
        elif kind == "code_inline":
            self._append(element("code", children=[text(token.content)]))
        elif kind == "softbreak":
            self._append(text("\n"))
        elif kind == "hardbreak":
            self._append(element("br"))
        elif kind == "hr":
            self._append(element("hr"))
        elif kind == "image":
            props = _properties(token)
            props["alt"] = "".join(child.content for child in token.children or [])
            self._append(element("img", props))
        elif kind in ("html_block", "html_inline"):
            self._raw(token.content, line)
        elif token.content:
            self._append(text(token.content))

    def _raw(self, content: str, line: int | None) -> None:
        """Raw HTML, with any component tags inside it lifted out as components."""
        pos = 0
        for match in _COMPONENT_TAG_RE.finditer(content):
            if match.start() > pos:
                self._append(Node(type="raw", value=content[pos:match.start()]))
            tag_line = line + content.count("\n", 0, match.start()) if line is not None else None
            self._component(_Tag(match.group(0), tag_line), tag_line)
            pos = match.end()
        if pos < len(content):
            self._append(Node(type="raw", value=content[pos:]))

    def _component(self, tag: _Tag, line: int | None) -> None:
        if tag.closing:
            node, _ = self._stack[-1]
            if node.type != "component" or node.name != tag.name:
                expected = f"</{node.name}>" if node.type == "component" else "no closing tag"
                raise MarkupSyntaxError(f"unexpected </{tag.name}> (expected {expected})", line)
            self._stack.pop()
            return

        node = Node(type="component", name=tag.name, properties=tag.props)
        self._append(node)
        if not tag.self_closing:
            self._stack.append((node, line))


def parse(md: MarkdownIt, body: str) -> Node:
    return TreeBuilder().build(md.parse(body))
