"""
generate_stats_page.py – Regenerate the static page view stats report

Reads the JSON access log written by the log collector, aggregates it into
total / today / per-page counts and writes a self-contained HTML page. Meant to
be run on a schedule; every run recomputes everything from the log.

Paths and report settings come from ``config_manager`` (defaults, optional
``stats_page_config.json``, then ``STATS_*`` environment variables).
"""

from __future__ import annotations

import sys
from datetime import datetime
from typing import Optional

from config_manager import ConfigManager, config_manager
from stats_service import StatsPageService, get_logger, setup_logging, stop_logging

_LOG = get_logger(__name__)


def main(config: Optional[ConfigManager] = None, now: Optional[datetime] = None) -> None:
    config = config or config_manager

    try:
        setup_logging(debug=config.get_app_config().debug)
        service = StatsPageService.from_config(
            config.get_paths_config(),
            config.get_report_config()
        )
        stats = service.generate(now=now)

        print("✅ 统计页面生成成功")
        print(f"📊 总访问次数: {stats.total_views}")
        print(f"📅 今日访问次数: {stats.today_views}")
        print(f"🌐 唯一页面: {stats.unique_pages}")

    except Exception as e:
        print(f"❌ 生成统计页面失败: {type(e).__name__}: {e}", file=sys.stderr)
        _LOG.debug("Stats page generation failed", exc_info=True)
        sys.exit(1)
    finally:
        stop_logging()


if __name__ == "__main__":
    main()
