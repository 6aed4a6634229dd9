"""Reference HTML renderer for compiled bodies.

This is the rendering boundary: the compiled tree plus a component table
go in, an HTML string comes out.
"""

from __future__ import annotations

import html
import re
from typing import Any

from folio.errors import UnresolvedComponentError
from folio.markup.models import CompiledBody, ComponentTable, Node

_VOID_TAGS = {"br", "hr", "img", "input", "meta", "link", "source", "wbr"}
_CAMEL_RE = re.compile(r"(?<!^)(?=[A-Z])")


def _attr_name(key: str) -> str:
    if key == "className":
        return "class"
    if key.startswith(("data", "aria")) and key != key.lower():
        return _CAMEL_RE.sub("-", key).lower()
    return key.lower()


def _attrs(properties: dict[str, Any]) -> str:
    parts: list[str] = []
    for key, value in properties.items():
        if value is None or value is False:
            continue
        name = _attr_name(key)
        if value is True:
            parts.append(f" {name}")
            continue
        if isinstance(value, list):
            value = " ".join(str(v) for v in value)
        parts.append(f' {name}="{html.escape(str(value), quote=True)}"')
    return "".join(parts)


def render_node(node: Node, components: ComponentTable) -> str:
    if node.type == "text":
        return html.escape(node.value or "", quote=False)
    if node.type == "raw":
        return node.value or ""

    inner = "".join(render_node(child, components) for child in node.children)
    if node.type == "root":
        return inner
    if node.type == "component":
        component = components.get(node.name or "")
        if component is None:
            raise UnresolvedComponentError(node.name or "")
        return component.render(dict(node.properties), inner)

    tag = node.tag or "div"
    if tag in _VOID_TAGS:
        return f"<{tag}{_attrs(node.properties)}>"
    return f"<{tag}{_attrs(node.properties)}>{inner}</{tag}>"


def render_html(compiled: CompiledBody, components: ComponentTable | None = None) -> str:
    """Render ``compiled`` to HTML, delegating component nodes to ``components``."""
    return render_node(compiled.tree, components or {})
