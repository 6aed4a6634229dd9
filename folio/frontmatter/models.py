"""Typed front-matter values."""

from __future__ import annotations

from datetime import date, datetime
from typing import Union

from typing_extensions import TypeAliasType

from pydantic import TypeAdapter

# YAML scalars and collections that may appear in a metadata block.
FrontMatterValue = TypeAliasType(
    "FrontMatterValue",
    Union[
        bool,
        int,
        float,
        str,
        datetime,
        date,
        None,
        list["FrontMatterValue"],
        dict[str, "FrontMatterValue"],
    ],
)

FrontMatter = dict[str, FrontMatterValue]

# Keys the pipeline derives itself; authored values under these names are overwritten.
RESERVED_KEYS = ("wordCount", "slug")

front_matter_adapter: TypeAdapter[FrontMatter] = TypeAdapter(FrontMatter)
