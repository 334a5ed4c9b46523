"""
Stats Page Service

Runs the load → aggregate → render pipeline that produces the stats page.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

from .aggregator import process_stats_data
from .loader import load_view_events
from .models import StatsSummary
from .renderer import DEFAULT_UPDATE_INTERVAL_MINUTES, render_stats_page, write_stats_page
from .time_utils import BEIJING_OFFSET_HOURS, utc_now

logger = logging.getLogger(__name__)


class StatsPageService:
    """Service that regenerates the static stats page from the access log."""

    def __init__(
        self,
        logs_file: Union[str, Path],
        output_file: Union[str, Path],
        tz_offset_hours: int = BEIJING_OFFSET_HOURS,
        update_interval_minutes: int = DEFAULT_UPDATE_INTERVAL_MINUTES,
        escape_html: bool = False
    ):
        """Initialize the stats page service.

        Args:
            logs_file: JSON access log to read
            output_file: HTML file to (over)write
            tz_offset_hours: Fixed UTC offset that defines "today"
            update_interval_minutes: Refresh interval shown on the page
            escape_html: Whether to HTML-escape page titles and urls
        """
        self.logs_file = Path(logs_file)
        self.output_file = Path(output_file)
        self.tz_offset_hours = tz_offset_hours
        self.update_interval_minutes = update_interval_minutes
        self.escape_html = escape_html

    @classmethod
    def from_config(cls, paths_config, report_config) -> 'StatsPageService':
        """Create the service from configuration sections."""
        return cls(
            logs_file=paths_config.logs_file,
            output_file=paths_config.output_file,
            tz_offset_hours=report_config.tz_offset_hours,
            update_interval_minutes=report_config.update_interval_minutes,
            escape_html=report_config.escape_html
        )

    def generate(self, now: Optional[datetime] = None) -> StatsSummary:
        """Regenerate the stats page.

        The output file is only touched once loading and aggregation succeeded.

        Args:
            now: Reference instant for "today" and the page timestamp

        Returns:
            The StatsSummary that was rendered

        Raises:
            DataUnavailable: If the access log cannot be loaded
            OutputWriteFailure: If the page cannot be written
        """
        now = now or utc_now()
        logger.info("Reading access log %s", self.logs_file)
        events = load_view_events(self.logs_file)

        stats = process_stats_data(events, now=now, tz_offset_hours=self.tz_offset_hours)
        logger.info("Aggregated %d views (%d today) across %d pages",
                    stats.total_views, stats.today_views, stats.unique_pages)

        html = render_stats_page(
            stats,
            now=now,
            tz_offset_hours=self.tz_offset_hours,
            update_interval_minutes=self.update_interval_minutes,
            escape_html=self.escape_html
        )
        write_stats_page(html, self.output_file)
        return stats
