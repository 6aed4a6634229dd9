"""Error taxonomy for the content pipeline."""

from __future__ import annotations


class ContentError(Exception):
    """Base class for every error raised by the content pipeline."""


class NotFoundError(ContentError):
    """A content directory or document does not exist."""

    def __init__(self, path: str, content_type: str | None = None, slug: str | None = None) -> None:
        self.path = path
        self.content_type = content_type
        self.slug = slug
        super().__init__(f"Content not found: {path}")


class ContentIOError(ContentError):
    """Any read failure other than a missing path (permissions, decoding, ...)."""

    def __init__(self, path: str, cause: Exception) -> None:
        self.path = path
        super().__init__(f"Failed to read {path}: {cause}")
        self.__cause__ = cause


class MetadataParseError(ContentError):
    """The leading front-matter block could not be parsed into a mapping."""

    def __init__(self, message: str, source: str = "<string>") -> None:
        self.source = source
        super().__init__(f"{source}: {message}")


class MarkupSyntaxError(ContentError):
    """The document body could not be parsed."""

    def __init__(self, message: str, line: int | None = None) -> None:
        self.line = line
        where = f" (line {line})" if line is not None else ""
        super().__init__(f"{message}{where}")


class UnresolvedComponentError(ContentError):
    """The body references a component that is not in the component table."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unresolved component: <{name}>")


class HighlightError(ContentError):
    """Tokenizing a code block failed. Never escapes the compiler."""

    def __init__(self, language: str, cause: Exception) -> None:
        self.language = language
        super().__init__(f"Highlighting {language!r} failed: {cause}")
        self.__cause__ = cause
