"""Folio - content pipeline for a portfolio/blog site: front matter, MDX-style markup, highlighting."""

from folio.config import FolioConfig, load_config
from folio.errors import (
    ContentError,
    ContentIOError,
    HighlightError,
    MarkupSyntaxError,
    MetadataParseError,
    NotFoundError,
    UnresolvedComponentError,
)
from folio.frontmatter import split_front_matter
from folio.markup import CompiledBody, MarkupCompiler, RenderOptions, render_html
from folio.pipeline import ContentEnvelope, ContentPipeline, SummaryReport
from folio.store import DocumentStore

__version__ = "0.1.0"

__all__ = [
    "CompiledBody",
    "ContentEnvelope",
    "ContentError",
    "ContentIOError",
    "ContentPipeline",
    "DocumentStore",
    "FolioConfig",
    "HighlightError",
    "MarkupCompiler",
    "MarkupSyntaxError",
    "MetadataParseError",
    "NotFoundError",
    "RenderOptions",
    "SummaryReport",
    "UnresolvedComponentError",
    "load_config",
    "render_html",
    "split_front_matter",
]
