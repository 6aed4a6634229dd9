"""ContentPipeline — store -> front matter -> markup compiler."""

from __future__ import annotations

import logging

from folio.config.models import FolioConfig
from folio.errors import ContentError
from folio.frontmatter import FrontMatter, split_front_matter, word_count
from folio.markup import ComponentTable, MarkupCompiler
from folio.pipeline.models import ContentEnvelope, SummaryError, SummaryReport
from folio.store import DocumentStore


class ContentPipeline:
    """Public entry point for listing and fetching content.

    Stateless between calls: every fetch re-reads and recompiles. The root
    directory comes from ``config.content.root_dir``; nothing depends on the
    process working directory beyond how that path is interpreted.
    """

    def __init__(
        self,
        config: FolioConfig | None = None,
        components: ComponentTable | None = None,
        *,
        logger: logging.Logger | None = None,
    ) -> None:
        self.config = config or FolioConfig()
        self.components = dict(components or {})
        self.logger = logger or logging.getLogger(__name__)
        self.store = DocumentStore(self.config.content)
        self.compiler = MarkupCompiler(self.config.markup, logger=self.logger)

    # -- Public API ----------------------------------------------------------

    def list_items(self, content_type: str) -> list[str]:
        """Filenames under a content type, in filesystem order."""
        return self.store.list_documents(content_type)

    def fetch_item(self, content_type: str, slug: str | None = None) -> ContentEnvelope:
        """Read, split and compile one document."""
        metadata, body = self._read_and_split(content_type, slug)

        compiled = self.compiler.compile(body, self.compiler.default_options(self.components))
        self.logger.debug(
            "compiled %s/%s: %d nodes, components=%s",
            content_type, slug, len(compiled.tree.children), compiled.components,
        )
        return ContentEnvelope(compiled=compiled, front_matter=self._with_derived(metadata, body, content_type, slug))

    def fetch_all_summaries(self, content_type: str) -> SummaryReport:
        """Front matter of every document of a type, sorted by filename.

        Bodies are not compiled. With ``summaries.on_error == "skip"`` a
        failing document is reported in ``errors`` and the rest still load;
        with ``"abort"`` the first failure propagates.
        """
        report = SummaryReport()
        for slug in self.store.slugs(content_type):
            try:
                metadata, body = self._read_and_split(content_type, slug)
            except ContentError as exc:
                if self.config.summaries.on_error == "abort":
                    raise
                name = f"{slug}{self.config.content.extension}"
                report.errors.append(SummaryError(file=name, error=str(exc)))
                self.logger.error("Skipping %s/%s: %s", content_type, name, exc)
                continue
            report.summaries.append(self._with_derived(metadata, body, content_type, slug))

        self.logger.info(
            "Loaded %d %s summaries (%d failed)", len(report.summaries), content_type, len(report.errors)
        )
        return report

    # -- Internals -----------------------------------------------------------

    def _read_and_split(self, content_type: str, slug: str | None) -> tuple[FrontMatter, str]:
        raw = self.store.read_document(content_type, slug)
        source = str(self.store.path_for(content_type, slug))
        self.logger.debug("read %s (%d chars)", source, len(raw))

        metadata, body = split_front_matter(raw, source=source)
        self.logger.debug("split %s: keys=%s", source, sorted(metadata))
        return metadata, body

    def _with_derived(self, metadata: FrontMatter, body: str, content_type: str, slug: str | None) -> FrontMatter:
        derived: FrontMatter = {"wordCount": word_count(body), "slug": slug}
        for key in derived:
            if key in metadata:
                self.logger.warning(
                    "%s/%s: front matter key %r is derived; authored value %r replaced by %r",
                    content_type, slug, key, metadata[key], derived[key],
                )
        return {**metadata, **derived}
