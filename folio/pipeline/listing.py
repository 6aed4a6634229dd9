"""Helpers for listing pages built from summaries."""

from __future__ import annotations

from datetime import date, datetime, time, timezone

from folio.frontmatter import FrontMatter, FrontMatterValue


def _as_datetime(value: FrontMatterValue) -> datetime | None:
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=timezone.utc)
    if isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value)
        except ValueError:
            return None
        return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)
    return None


def sort_by_published(summaries: list[FrontMatter], key: str = "publishedAt") -> list[FrontMatter]:
    """Newest first; summaries without a usable date go last in their original order."""
    dated = [(s, _as_datetime(s.get(key))) for s in summaries]
    with_date = [pair for pair in dated if pair[1] is not None]
    without = [s for s, when in dated if when is None]
    with_date.sort(key=lambda pair: pair[1], reverse=True)
    return [s for s, _ in with_date] + without


def filter_by_title(summaries: list[FrontMatter], query: str) -> list[FrontMatter]:
    """Case-insensitive substring match on ``title``. An empty query keeps everything."""
    needle = query.strip().lower()
    if not needle:
        return list(summaries)
    return [s for s in summaries if isinstance(s.get("title"), str) and needle in s["title"].lower()]
