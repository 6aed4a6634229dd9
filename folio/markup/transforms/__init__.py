"""Tree transforms applied by the markup compiler, keyed by their configured names."""

from .pipeline import CompileContext, Transform, TransformPipeline
from .headings import AutolinkHeadings, SlugHeadings
from .code_titles import CodeTitles
from .highlight import SyntaxHighlighter

# Text-level transforms (run first, in configured order)
REMARK_TRANSFORMS: dict[str, type[Transform]] = {
    "autolink-headings": AutolinkHeadings,
    "slug": SlugHeadings,
    "code-titles": CodeTitles,
}

# Tree-level transforms (run after the text-level ones)
REHYPE_TRANSFORMS: dict[str, type[Transform]] = {
    "highlight": SyntaxHighlighter,
}


def build_pipeline(names: list[str] | tuple[str, ...], registry: dict[str, type[Transform]]) -> TransformPipeline:
    """Instantiate the named transforms, preserving their order."""
    unknown = [n for n in names if n not in registry]
    if unknown:
        raise ValueError(f"Unknown transform(s): {', '.join(unknown)} (known: {', '.join(registry)})")
    return TransformPipeline([registry[n]() for n in names])


__all__ = [
    "AutolinkHeadings",
    "CodeTitles",
    "CompileContext",
    "REHYPE_TRANSFORMS",
    "REMARK_TRANSFORMS",
    "SlugHeadings",
    "SyntaxHighlighter",
    "Transform",
    "TransformPipeline",
    "build_pipeline",
]
