"""Markup compilation: markdown with embedded components -> serializable tree."""

from .compiler import MarkupCompiler
from .models import (
    CompiledBody,
    Component,
    ComponentTable,
    Node,
    RenderOptions,
    TocEntry,
)
from .render import render_html

__all__ = [
    "CompiledBody",
    "Component",
    "ComponentTable",
    "MarkupCompiler",
    "Node",
    "RenderOptions",
    "TocEntry",
    "render_html",
]
