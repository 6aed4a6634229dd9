"""Pydantic models returned by the content pipeline."""

from __future__ import annotations

from pydantic import BaseModel, Field

from folio.frontmatter.models import FrontMatter
from folio.markup.models import CompiledBody


class ContentEnvelope(BaseModel):
    """One fetched document: compiled body plus front matter with derived keys."""

    compiled: CompiledBody
    front_matter: FrontMatter


class SummaryError(BaseModel):
    file: str
    error: str


class SummaryReport(BaseModel):
    summaries: list[FrontMatter] = Field(default_factory=list)
    errors: list[SummaryError] = Field(default_factory=list)
