"""Splits ``lang:title`` info strings into a language and a block title."""

from __future__ import annotations

from folio.markup.models import Node, code_of, element, language_of, set_language, text, walk

from .pipeline import CompileContext, Transform


class CodeTitles(Transform):
    name = "code-titles"

    def apply(self, tree: Node, context: CompileContext) -> Node:
        for parent in walk(tree):
            if not any(code_of(child) for child in parent.children):
                continue
            children: list[Node] = []
            for child in parent.children:
                title = _hoist_title(child)
                if title:
                    children.append(element("div", {"className": ["remark-code-title"]}, [text(title)]))
                children.append(child)
            parent.children = children
        return tree


def _hoist_title(pre: Node) -> str | None:
    code = code_of(pre)
    if code is None:
        return None
    language = language_of(code)
    if not language or ":" not in language:
        return None

    language, _, title = language.partition(":")
    set_language(code, language or None)
    title = title.strip()
    if not title:
        return None
    pre.properties["dataTitle"] = title
    code.properties["dataTitle"] = title
    return title
