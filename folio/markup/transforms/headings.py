"""Heading anchors and self-links."""

from __future__ import annotations

from folio.markup.models import Node, element, is_heading, text_content, walk

from .pipeline import CompileContext, Transform


def _ensure_id(heading: Node, context: CompileContext) -> str:
    if "id" not in heading.properties:
        heading.properties["id"] = context.slugger.slug(text_content(heading))
    return heading.properties["id"]


class SlugHeadings(Transform):
    """Gives every heading an ``id`` derived from its text."""

    name = "slug"

    def apply(self, tree: Node, context: CompileContext) -> Node:
        for node in walk(tree):
            if is_heading(node):
                _ensure_id(node, context)
        return tree


def _has_anchor(heading: Node) -> bool:
    return bool(heading.children) and heading.children[0].tag == "a" and heading.children[0].has_class("anchor")


class AutolinkHeadings(Transform):
    """Prepends a self-link to every heading.

    Headings without an id get one from the shared slugger, so the result is
    the same whether this runs before or after ``SlugHeadings``.
    """

    name = "autolink-headings"

    def apply(self, tree: Node, context: CompileContext) -> Node:
        for node in walk(tree):
            if not is_heading(node) or _has_anchor(node):
                continue
            anchor_id = _ensure_id(node, context)
            link = element(
                "a",
                {"className": ["anchor"], "href": f"#{anchor_id}", "ariaHidden": "true", "tabIndex": -1},
                [element("span", {"className": ["icon", "icon-link"]})],
            )
            node.children.insert(0, link)
        return tree
