"""
Page view aggregation.
"""

import logging
from datetime import datetime
from typing import Dict, Iterable, Optional

from .models import PageAggregate, PageKey, StatsSummary, ViewEvent
from .time_utils import (
    BEIJING_OFFSET_HOURS,
    beijing_now,
    parse_recorded_at,
    shift_to_offset,
    start_of_day,
)

logger = logging.getLogger(__name__)


def is_recorded_today(event: ViewEvent, today_start: datetime,
                      offset_hours: int = BEIJING_OFFSET_HOURS) -> bool:
    """Check whether an event falls on or after the shifted start of today.

    Events with a missing or unparseable timestamp never count as today.
    """
    recorded_at = parse_recorded_at(event.recorded_at)
    if recorded_at is None:
        return False
    return shift_to_offset(recorded_at, offset_hours) >= today_start


def group_by_page(events: Iterable[ViewEvent]) -> Dict[PageKey, PageAggregate]:
    """Count events per (url, title) page in first-occurrence order."""
    page_groups: Dict[PageKey, PageAggregate] = {}
    for event in events:
        key = event.page_key
        if key not in page_groups:
            page_groups[key] = PageAggregate(url=event.url, title=event.title)
        page_groups[key].count += 1
    return page_groups


def process_stats_data(events: Iterable[ViewEvent], now: Optional[datetime] = None,
                       tz_offset_hours: int = BEIJING_OFFSET_HOURS) -> StatsSummary:
    """Aggregate view events into the stats summary.

    Args:
        events: View events in log order
        now: Reference instant (defaults to the current time)
        tz_offset_hours: Fixed UTC offset that defines "today"

    Returns:
        StatsSummary with counters and pages sorted by descending count
    """
    events = list(events)
    today_start = start_of_day(beijing_now(now, tz_offset_hours))

    today_views = sum(1 for event in events if is_recorded_today(event, today_start, tz_offset_hours))
    page_groups = group_by_page(events)

    # sorted() is stable, so equal counts keep first-occurrence order
    pages = sorted(page_groups.values(), key=lambda page: page.count, reverse=True)

    logger.debug("Aggregated %d events into %d pages (today starts %s)",
                 len(events), len(pages), today_start.isoformat())

    return StatsSummary(
        total_views=len(events),
        today_views=today_views,
        unique_pages=len(page_groups),
        pages=pages
    )
