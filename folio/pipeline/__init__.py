"""Pipeline orchestration: list, fetch and summarise content documents."""

from .listing import filter_by_title, sort_by_published
from .models import ContentEnvelope, SummaryError, SummaryReport
from .orchestrator import ContentPipeline

__all__ = [
    "ContentEnvelope",
    "ContentPipeline",
    "SummaryError",
    "SummaryReport",
    "filter_by_title",
    "sort_by_published",
]
