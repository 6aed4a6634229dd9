"""Document tree and compile-result models."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any, Literal, Protocol, runtime_checkable

from pydantic import BaseModel, Field

from folio.config.models import RehypeTransformName, RemarkTransformName


class Node(BaseModel):
    """One node of the compiled document tree.

    ``element`` nodes carry an HTML ``tag``; ``component`` nodes carry the
    component ``name`` and its props in ``properties``; ``text`` and ``raw``
    nodes carry ``value`` (raw is pre-rendered HTML passed through verbatim).
    """

    type: Literal["root", "element", "text", "raw", "component"]
    tag: str | None = None
    name: str | None = None
    properties: dict[str, Any] = Field(default_factory=dict)
    children: list[Node] = Field(default_factory=list)
    value: str | None = None

    def has_class(self, cls: str) -> bool:
        return cls in self.properties.get("className", [])


class TocEntry(BaseModel):
    depth: int
    id: str
    text: str


class CompiledBody(BaseModel):
    """Serializable result of compiling a document body."""

    tree: Node
    components: list[str] = Field(default_factory=list)
    toc: list[TocEntry] = Field(default_factory=list)


@runtime_checkable
class Component(Protocol):
    """Presentational component bound in a component table."""

    def render(self, props: dict[str, Any], children: str) -> str: ...


ComponentTable = Mapping[str, Component]

DEFAULT_REMARK_TRANSFORMS: tuple[RemarkTransformName, ...] = ("autolink-headings", "slug", "code-titles")
DEFAULT_REHYPE_TRANSFORMS: tuple[RehypeTransformName, ...] = ("highlight",)


@dataclass(frozen=True)
class RenderOptions:
    """Per-compile options: the component table and the ordered transform names."""

    components: ComponentTable = field(default_factory=dict)
    remark_transforms: tuple[str, ...] = DEFAULT_REMARK_TRANSFORMS
    rehype_transforms: tuple[str, ...] = DEFAULT_REHYPE_TRANSFORMS


# ---------------------------------------------------------------------------
# Tree helpers
# ---------------------------------------------------------------------------


def element(tag: str, properties: dict[str, Any] | None = None, children: list[Node] | None = None) -> Node:
    return Node(type="element", tag=tag, properties=properties or {}, children=children or [])


def text(value: str) -> Node:
    return Node(type="text", value=value)


def walk(node: Node) -> Iterator[Node]:
    """Depth-first, document-order traversal including ``node`` itself."""
    yield node
    for child in node.children:
        yield from walk(child)


def text_content(node: Node) -> str:
    if node.type == "text":
        return node.value or ""
    return "".join(text_content(child) for child in node.children)


HEADING_TAGS = ("h1", "h2", "h3", "h4", "h5", "h6")


def is_heading(node: Node) -> bool:
    return node.type == "element" and node.tag in HEADING_TAGS


def code_of(node: Node) -> Node | None:
    """Return the ``code`` child when ``node`` is a ``pre > code`` block."""
    if node.type != "element" or node.tag != "pre" or len(node.children) != 1:
        return None
    child = node.children[0]
    if child.type == "element" and child.tag == "code":
        return child
    return None


def language_of(code: Node) -> str | None:
    for cls in code.properties.get("className", []):
        if cls.startswith("language-"):
            return cls[len("language-"):]
    return None


def set_language(code: Node, language: str | None) -> None:
    classes = [c for c in code.properties.get("className", []) if not c.startswith("language-")]
    if language:
        classes.insert(0, f"language-{language}")
    if classes:
        code.properties["className"] = classes
    else:
        code.properties.pop("className", None)
