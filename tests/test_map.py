"""
Tests for report map rendering
"""
import pytest
from datetime import datetime, timezone

import sys
sys.path.insert(0, '.')

from src.reports.models import Location, Report, ReportStatus, Severity
from src.visualization.map_generator import (
    build_popup_html,
    create_reports_map,
    get_report_radius,
    save_reports_map,
)


def make_report(report_id, severity, lat=17.0, lng=78.0, status=ReportStatus.PENDING,
                description="Overflowing drain"):
    return Report(
        id=report_id,
        user_name="Asha",
        description=description,
        location=Location(lat, lng),
        severity=severity,
        date=datetime(2026, 3, 1, 9, 0, tzinfo=timezone.utc),
        status=status,
    )


class TestReportsMap:
    """Test suite for create_reports_map."""

    def test_empty_map_uses_default_center(self):
        report_map = create_reports_map([])

        assert report_map.location == [20.5937, 78.9629]

    def test_center_is_centroid(self):
        reports = [
            make_report("a", Severity.HIGH, lat=10.0, lng=70.0),
            make_report("b", Severity.LOW, lat=20.0, lng=80.0),
        ]

        report_map = create_reports_map(reports)

        assert report_map.location == [15.0, 75.0]

    def test_focus_centers_on_report(self):
        focus = make_report("a", Severity.HIGH, lat=12.5, lng=77.5)

        report_map = create_reports_map([focus], focus=focus)

        assert report_map.location == [12.5, 77.5]

    def test_markers_use_indicator_colors(self):
        reports = [
            make_report("a", Severity.HIGH),
            make_report("b", Severity.MEDIUM),
        ]

        html = create_reports_map(reports).get_root().render()

        assert "#ef4444" in html
        assert "#eab308" in html

    def test_popup_escapes_user_text(self):
        report = make_report("a", Severity.LOW, description="<script>alert(1)</script>")

        popup = build_popup_html(report)

        assert "<script>" not in popup
        assert "&lt;script&gt;" in popup

    def test_resolved_markers_are_smaller(self):
        open_report = make_report("a", Severity.HIGH)
        resolved = make_report("b", Severity.HIGH, status=ReportStatus.RESOLVED)

        assert get_report_radius(resolved) < get_report_radius(open_report)

    def test_save(self, tmp_path):
        output = tmp_path / "map.html"

        path = save_reports_map([make_report("a", Severity.HIGH)], output_path=str(output))

        assert path == str(output)
        assert output.exists()
