"""Splits a raw document into its YAML front matter and body."""

from __future__ import annotations

import re

import yaml
from pydantic import ValidationError

from folio.errors import MetadataParseError
from folio.frontmatter.models import FrontMatter, front_matter_adapter

_OPEN_RE = re.compile(r"\A---[ \t]*\r?\n")
_CLOSE_RE = re.compile(r"^---[ \t]*\r?$", re.MULTILINE)


def split_front_matter(doc: str, source: str = "<string>") -> tuple[FrontMatter, str]:
    """Split ``doc`` into (front matter, body).

    The block must open on the very first line with ``---`` and close with a
    ``---`` line. Without an opening fence the whole document is the body.

    Keys must be strings. A key such as ``2021:`` is rejected rather than
    coerced to ``"2021"``, which is stricter than front-matter loaders that
    stringify keys; authors quote such keys instead.

    Raises:
        MetadataParseError: unclosed fence, invalid YAML, a block that is not
            a mapping, or values YAML can express but front matter cannot
            (binary, sets, non-string keys).
    """
    text = doc[1:] if doc.startswith("\ufeff") else doc

    opening = _OPEN_RE.match(text)
    if opening is None:
        return {}, doc

    closing = _CLOSE_RE.search(text, opening.end())
    if closing is None:
        raise MetadataParseError("unclosed front-matter block (missing closing ---)", source)

    yaml_str = text[opening.end():closing.start()]
    body = text[closing.end():]
    if body.startswith("\r\n"):
        body = body[2:]
    elif body.startswith("\n"):
        body = body[1:]

    try:
        data = yaml.safe_load(yaml_str)
    except yaml.YAMLError as exc:
        raise MetadataParseError(f"YAML parse error: {exc}", source) from exc

    if data is None:
        return {}, body
    if not isinstance(data, dict):
        raise MetadataParseError(f"front matter is not a mapping, got {type(data).__name__}", source)

    try:
        metadata = front_matter_adapter.validate_python(data, strict=True)
    except ValidationError as exc:
        raise MetadataParseError(f"unsupported front-matter value: {exc}", source) from exc

    return metadata, body


def word_count(body: str) -> int:
    """Number of whitespace-delimited tokens in ``body``."""
    return len(body.split())
