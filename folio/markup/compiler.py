"""MarkupCompiler — body text -> CompiledBody."""

from __future__ import annotations

import logging

from folio.config.models import MarkupConfig
from folio.errors import UnresolvedComponentError
from folio.markup.models import (
    CompiledBody,
    ComponentTable,
    Node,
    RenderOptions,
    TocEntry,
    is_heading,
    text_content,
    walk,
)
from folio.markup.parser import create_markdown, parse
from folio.markup.transforms import REHYPE_TRANSFORMS, REMARK_TRANSFORMS, CompileContext, build_pipeline


class MarkupCompiler:
    """Compiles document bodies into serializable trees.

    The result references components by name only; the table passed in
    ``RenderOptions`` is consulted to reject unknown names, never stored.
    """

    def __init__(self, config: MarkupConfig | None = None, *, logger: logging.Logger | None = None) -> None:
        self.config = config or MarkupConfig()
        self.logger = logger or logging.getLogger(__name__)
        self._md = create_markdown(self.config)

    def default_options(self, components: ComponentTable | None = None) -> RenderOptions:
        return RenderOptions(
            components=components or {},
            remark_transforms=tuple(self.config.remark_transforms),
            rehype_transforms=tuple(self.config.rehype_transforms),
        )

    def compile(self, body: str, options: RenderOptions | None = None) -> CompiledBody:
        """Parse ``body``, run the configured transforms and resolve components.

        Raises:
            MarkupSyntaxError: unbalanced or malformed component tags.
            UnresolvedComponentError: a component missing from ``options.components``.
        """
        options = options or self.default_options()
        remark = build_pipeline(options.remark_transforms, REMARK_TRANSFORMS)
        rehype = build_pipeline(options.rehype_transforms, REHYPE_TRANSFORMS)

        tree = parse(self._md, body)
        context = CompileContext(config=self.config, logger=self.logger)
        tree = remark.apply(tree, context)
        tree = rehype.apply(tree, context)

        used = resolve_components(tree, options.components)
        return CompiledBody(tree=tree, components=used, toc=table_of_contents(tree))


def resolve_components(tree: Node, components: ComponentTable) -> list[str]:
    """Return the sorted component names used in ``tree``; all must be bound."""
    used: set[str] = set()
    for node in walk(tree):
        if node.type != "component":
            continue
        if node.name not in components:
            raise UnresolvedComponentError(node.name or "")
        used.add(node.name)
    return sorted(used)


def table_of_contents(tree: Node) -> list[TocEntry]:
    return [
        TocEntry(depth=int(node.tag[1]), id=node.properties["id"], text=text_content(node).strip())
        for node in walk(tree)
        if is_heading(node) and "id" in node.properties
    ]
