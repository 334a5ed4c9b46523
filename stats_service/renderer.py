"""
Stats page rendering.

Renders a StatsSummary into a self-contained HTML document using the Jinja2
template shipped in ``templates/stats-page.html``.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Optional, Union

from jinja2 import Environment

from .errors import OutputWriteFailure
from .models import StatsSummary
from .time_utils import BEIJING_OFFSET_HOURS, beijing_now, format_report_time

logger = logging.getLogger(__name__)

TEMPLATE_PATH = Path(__file__).parent / "templates" / "stats-page.html"
DEFAULT_UPDATE_INTERVAL_MINUTES = 15


def _blank(value: Any) -> Any:
    """Render missing values as an empty string."""
    return "" if value is None else value


def get_stats_page_template() -> str:
    """Load the stats page template HTML from the package templates directory."""
    return TEMPLATE_PATH.read_text(encoding='utf-8')


def _create_environment(escape_html: bool) -> Environment:
    env = Environment(autoescape=escape_html, keep_trailing_newline=True)
    env.filters["blank"] = _blank
    return env


def render_stats_page(
    stats: StatsSummary,
    now: Optional[datetime] = None,
    tz_offset_hours: int = BEIJING_OFFSET_HOURS,
    update_interval_minutes: int = DEFAULT_UPDATE_INTERVAL_MINUTES,
    escape_html: bool = False
) -> str:
    """Render the stats page HTML.

    Title and url values are inserted verbatim unless ``escape_html`` is set.

    Args:
        stats: Aggregated statistics
        now: Generation instant (defaults to the current time)
        tz_offset_hours: Fixed UTC offset used for the displayed timestamp
        update_interval_minutes: Refresh interval shown in the update banner
        escape_html: Whether to HTML-escape interpolated values

    Returns:
        Complete HTML document
    """
    template = _create_environment(escape_html).from_string(get_stats_page_template())
    generated_at = format_report_time(beijing_now(now, tz_offset_hours))
    return template.render(
        stats=stats,
        generated_at=generated_at,
        tz_offset_hours=tz_offset_hours,
        update_interval_minutes=update_interval_minutes
    )


def write_stats_page(html: str, output_path: Union[str, Path]) -> Path:
    """Write the rendered page, replacing any existing file.

    The page is written to a temporary sibling file first and moved into
    place, so a failed write leaves the previous page intact.

    Raises:
        OutputWriteFailure: If the file cannot be written
    """
    output_path = Path(output_path)
    temp_path = output_path.with_name(f"{output_path.name}.tmp")
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(temp_path, 'w', encoding='utf-8') as f:
            f.write(html)
        # Move temporary file to final location
        temp_path.replace(output_path)
    except OSError as e:
        temp_path.unlink(missing_ok=True)
        raise OutputWriteFailure(f"Cannot write stats page {output_path}: {e}", output_path) from e

    logger.info("Stats page written to %s (%d bytes)", output_path, len(html.encode('utf-8')))
    return output_path
