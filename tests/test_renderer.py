"""
Tests for stats page rendering and writing.
"""

import re
from pathlib import Path
from datetime import datetime, timezone

import pytest

from stats_service.errors import OutputWriteFailure
from stats_service.models import PageAggregate, StatsSummary
from stats_service.renderer import get_stats_page_template, render_stats_page, write_stats_page
from stats_service.time_utils import format_report_time

NOW = datetime(2025, 1, 15, 4, 5, 6, tzinfo=timezone.utc)


@pytest.fixture
def stats():
    return StatsSummary(
        total_views=7,
        today_views=3,
        unique_pages=2,
        pages=[
            PageAggregate(url="/posts/hello", title="Hello World", count=5),
            PageAggregate(url="/about", title="关于", count=2),
        ]
    )


class TestRenderStatsPage:
    """Test the rendered HTML document."""

    def test_document_structure(self, stats):
        html = render_stats_page(stats, now=NOW)

        assert html.startswith("<!DOCTYPE html>")
        assert '<html lang="zh-CN">' in html
        assert "📊 页面访问统计" in html
        assert "</html>" in html
        # self-contained: no external assets
        assert "<link" not in html
        assert "<script" not in html

    def test_summary_cards(self, stats):
        html = render_stats_page(stats, now=NOW)

        numbers = re.findall(r'<div class="stat-number">(\d+)</div>', html)
        assert numbers == ["7", "3", "2"]

    def test_rows_follow_page_order(self, stats):
        html = render_stats_page(stats, now=NOW)

        titles = re.findall(r'<td class="title-cell">(.*?)</td>', html)
        urls = re.findall(r'<td class="url-cell">(.*?)</td>', html)
        counts = re.findall(r'<td class="count-cell">(.*?)</td>', html)
        assert titles == ["Hello World", "关于"]
        assert urls == ["/posts/hello", "/about"]
        assert counts == ["5", "2"]

    def test_generation_time_in_utc8(self, stats):
        html = render_stats_page(stats, now=NOW)

        # banner and footer both carry the timestamp
        assert html.count("2025/01/15 12:05:06") == 2
        assert "基于北京时间 (UTC+8)" in html

    def test_update_interval(self, stats):
        html = render_stats_page(stats, now=NOW, update_interval_minutes=30)

        assert "每30分钟更新一次" in html

    def test_empty_stats(self):
        html = render_stats_page(StatsSummary(), now=NOW)

        assert re.findall(r'<div class="stat-number">(\d+)</div>', html) == ["0", "0", "0"]
        assert '<td class="title-cell">' not in html

    def test_missing_fields_render_empty(self):
        stats = StatsSummary(total_views=1, unique_pages=1,
                             pages=[PageAggregate(url=None, title=None, count=1)])

        html = render_stats_page(stats, now=NOW)

        assert '<td class="title-cell"></td>' in html
        assert '<td class="url-cell"></td>' in html
        assert "None" not in html

    def test_values_inserted_verbatim_by_default(self):
        stats = StatsSummary(total_views=1, unique_pages=1,
                             pages=[PageAggregate(url="/q?a=1&b=2", title="<b>Bold</b>", count=1)])

        html = render_stats_page(stats, now=NOW)

        assert '<td class="title-cell"><b>Bold</b></td>' in html
        assert '<td class="url-cell">/q?a=1&b=2</td>' in html

    def test_escape_html_option(self):
        stats = StatsSummary(total_views=1, unique_pages=1,
                             pages=[PageAggregate(url="/q?a=1&b=2", title="<script>x</script>", count=1)])

        html = render_stats_page(stats, now=NOW, escape_html=True)

        assert "<script>x</script>" not in html
        assert "&lt;script&gt;x&lt;/script&gt;" in html
        assert "/q?a=1&amp;b=2" in html
        # template markup itself is untouched
        assert '<div class="stat-number">1</div>' in html

    def test_template_ships_with_package(self):
        assert "{{ stats.total_views }}" in get_stats_page_template()


class TestFormatReportTime:
    """Test the zh-CN style timestamp."""

    def test_zero_padded(self):
        assert format_report_time(datetime(2025, 3, 4, 5, 6, 7)) == "2025/03/04 05:06:07"

    def test_24_hour_clock(self):
        assert format_report_time(datetime(2025, 12, 31, 23, 59, 59)) == "2025/12/31 23:59:59"


class TestWriteStatsPage:
    """Test writing the output file."""

    def test_write_creates_file(self, tmp_path):
        output = tmp_path / "stats-page.html"

        result = write_stats_page("<p>关于</p>", output)

        assert result == output
        assert output.read_text(encoding="utf-8") == "<p>关于</p>"

    def test_write_overwrites_existing(self, tmp_path):
        output = tmp_path / "stats-page.html"
        output.write_text("old content that is much longer than the new one", encoding="utf-8")

        write_stats_page("new", output)

        assert output.read_text(encoding="utf-8") == "new"

    def test_write_creates_parent_dirs(self, tmp_path):
        output = tmp_path / "public" / "stats" / "index.html"

        write_stats_page("x", output)

        assert output.exists()

    def test_write_failure(self, tmp_path):
        # target path is an existing directory
        with pytest.raises(OutputWriteFailure) as exc_info:
            write_stats_page("x", tmp_path)

        assert exc_info.value.path == tmp_path
        assert isinstance(exc_info.value.__cause__, OSError)

    def test_failed_write_keeps_previous_page(self, tmp_path, monkeypatch):
        output = tmp_path / "stats-page.html"
        output.write_text("previous report", encoding="utf-8")

        def fail_replace(self, target):
            raise OSError("disk full")

        monkeypatch.setattr(Path, "replace", fail_replace)

        with pytest.raises(OutputWriteFailure):
            write_stats_page("new report", output)

        assert output.read_text(encoding="utf-8") == "previous report"
        assert list(tmp_path.iterdir()) == [output]

    def test_no_temporary_file_left_behind(self, tmp_path):
        output = tmp_path / "stats-page.html"

        write_stats_page("x", output)

        assert list(tmp_path.iterdir()) == [output]
