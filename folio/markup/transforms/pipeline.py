"""TransformPipeline — runs ordered transforms over a document tree."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from folio.config.models import MarkupConfig
from folio.markup.models import Node
from folio.markup.slugger import Slugger


@dataclass
class CompileContext:
    """State shared by the transforms of a single compile call."""

    config: MarkupConfig
    slugger: Slugger = field(default_factory=Slugger)
    logger: logging.Logger = field(default_factory=lambda: logging.getLogger("folio.markup"))


class Transform(ABC):
    name: str = ""

    @abstractmethod
    def apply(self, tree: Node, context: CompileContext) -> Node:
        """Transform the tree. May mutate it in place; returns the tree to continue with."""
        ...


class TransformPipeline:
    def __init__(self, transforms: list[Transform]):
        self.transforms = transforms

    def apply(self, tree: Node, context: CompileContext) -> Node:
        for t in self.transforms:
            tree = t.apply(tree, context)
        return tree
