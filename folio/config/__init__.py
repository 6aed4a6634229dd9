from .loader import load_config
from .models import (
    ContentConfig,
    FolioConfig,
    HighlightConfig,
    MarkupConfig,
    SummaryConfig,
)

__all__ = [
    "ContentConfig",
    "FolioConfig",
    "HighlightConfig",
    "MarkupConfig",
    "SummaryConfig",
    "load_config",
]
