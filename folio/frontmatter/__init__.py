"""Front-matter extraction for content documents."""

from .models import RESERVED_KEYS, FrontMatter, FrontMatterValue
from .splitter import split_front_matter, word_count

__all__ = [
    "FrontMatter",
    "FrontMatterValue",
    "RESERVED_KEYS",
    "split_front_matter",
    "word_count",
]
