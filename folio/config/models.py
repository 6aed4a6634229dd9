from pydantic import BaseModel, Field, field_validator
from typing import Literal

RemarkTransformName = Literal["autolink-headings", "slug", "code-titles"]
RehypeTransformName = Literal["highlight"]


class ContentConfig(BaseModel):
    root_dir: str = "."
    data_dir: str = "data"
    extension: str = ".mdx"
    encoding: str = "utf-8"

    @field_validator("extension")
    @classmethod
    def validate_extension(cls, v: str) -> str:
        if not v.startswith(".") or len(v) < 2:
            raise ValueError(f"extension must look like '.mdx', got {v!r}")
        return v


class HighlightConfig(BaseModel):
    # Fenced blocks with these languages are never tokenized
    skip_languages: list[str] = Field(default_factory=lambda: ["text", "plaintext", "txt"])


class MarkupConfig(BaseModel):
    remark_transforms: list[RemarkTransformName] = Field(
        default_factory=lambda: ["autolink-headings", "slug", "code-titles"]
    )
    rehype_transforms: list[RehypeTransformName] = Field(default_factory=lambda: ["highlight"])
    highlight: HighlightConfig = Field(default_factory=HighlightConfig)
    typographer: bool = False


class SummaryConfig(BaseModel):
    on_error: Literal["skip", "abort"] = "skip"
    sort_key: str = "publishedAt"


class FolioConfig(BaseModel):
    content: ContentConfig = Field(default_factory=ContentConfig)
    markup: MarkupConfig = Field(default_factory=MarkupConfig)
    summaries: SummaryConfig = Field(default_factory=SummaryConfig)
    log_level: Literal["debug", "info", "warn", "error"] = "info"
    log_format: Literal["text", "json"] = "text"
