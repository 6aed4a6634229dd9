"""DocumentStore — lists and reads raw documents under <root>/<data_dir>."""

from __future__ import annotations

import os
from pathlib import Path

from folio.config.models import ContentConfig
from folio.errors import ContentIOError, NotFoundError


def _check_segment(segment: str, what: str) -> str:
    """Reject identifiers that would leave the content directory."""
    if not segment or segment in (".", "..") or "/" in segment or "\\" in segment or "\x00" in segment:
        raise NotFoundError(f"<invalid {what} {segment!r}>")
    return segment


class DocumentStore:
    """Read-only view over the content directory.

    Multi-document types live at ``<root>/<data_dir>/<type>/<slug><ext>``,
    singleton pages at ``<root>/<data_dir>/<type><ext>``. Nothing is cached.
    The root is made absolute once, here; later working-directory changes
    do not move it.
    """

    def __init__(self, config: ContentConfig) -> None:
        self.config = config
        self.root = Path(config.root_dir).expanduser().resolve()
        self.data_dir = self.root / config.data_dir
        self.extension = config.extension

    def list_documents(self, content_type: str) -> list[str]:
        """Return the entry names of a type directory in filesystem order."""
        directory = self.data_dir / _check_segment(content_type, "type")
        try:
            return os.listdir(directory)
        except (FileNotFoundError, NotADirectoryError) as exc:
            raise NotFoundError(str(directory), content_type=content_type) from exc
        except OSError as exc:
            raise ContentIOError(str(directory), exc) from exc

    def slugs(self, content_type: str) -> list[str]:
        """Sorted slugs of the documents of a type that carry the content extension."""
        return sorted(
            name[: -len(self.extension)]
            for name in self.list_documents(content_type)
            if name.endswith(self.extension) and len(name) > len(self.extension)
        )

    def path_for(self, content_type: str, slug: str | None = None) -> Path:
        _check_segment(content_type, "type")
        if slug is None:
            return self.data_dir / f"{content_type}{self.extension}"
        return self.data_dir / content_type / f"{_check_segment(slug, 'slug')}{self.extension}"

    def read_document(self, content_type: str, slug: str | None = None) -> str:
        """Read one document. ``slug=None`` reads the singleton page named by the type."""
        path = self.path_for(content_type, slug)
        try:
            text = path.read_text(encoding=self.config.encoding)
        except (FileNotFoundError, IsADirectoryError, NotADirectoryError) as exc:
            raise NotFoundError(str(path), content_type=content_type, slug=slug) from exc
        except (OSError, UnicodeDecodeError) as exc:
            raise ContentIOError(str(path), exc) from exc
        return text
