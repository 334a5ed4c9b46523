# Stats service package for page view statistics

from .models import ViewEvent, PageAggregate, StatsSummary
from .errors import StatsPageError, DataUnavailable, OutputWriteFailure
from .loader import load_view_events
from .aggregator import process_stats_data, group_by_page, is_recorded_today
from .renderer import render_stats_page, write_stats_page
from .service import StatsPageService
from .logging_config import (
    setup_logging,
    stop_logging,
    get_logger,
)

__all__ = [
    "ViewEvent",
    "PageAggregate",
    "StatsSummary",
    "StatsPageError",
    "DataUnavailable",
    "OutputWriteFailure",
    "load_view_events",
    "process_stats_data",
    "group_by_page",
    "is_recorded_today",
    "render_stats_page",
    "write_stats_page",
    "StatsPageService",
    "setup_logging",
    "stop_logging",
    "get_logger",
]
