"""
Map Visualization Module for Sanitary Map AI

Generates interactive maps using Folium to display sanitation reports
colored by their severity indicator.
"""

import html
import logging
from typing import Optional, Sequence

import folium
from folium.plugins import MarkerCluster

from src.core.config import settings
from src.core.geo_utils import calculate_centroid
from src.reports.models import Report, ReportStatus, Severity, SEVERITY_INDICATORS

logger = logging.getLogger(__name__)

STATUS_LABELS = {
    ReportStatus.PENDING: "Pending",
    ReportStatus.IN_PROGRESS: "In Progress",
    ReportStatus.RESOLVED: "Resolved",
}


def get_report_radius(report: Report) -> int:
    """Marker radius; resolved reports shrink so open issues stand out."""
    if report.status == ReportStatus.RESOLVED:
        return 6
    return 10


def build_popup_html(report: Report) -> str:
    """Popup body for one report. User-supplied text is escaped."""
    color = report.indicator.hex
    return f"""
    <div style="font-family: Arial; min-width: 200px;">
        <h4 style="margin: 0; color: {color};">{report.severity.value.capitalize()} Priority</h4>
        <hr style="margin: 5px 0;">
        <b>Reported by:</b> {html.escape(report.user_name)}<br>
        <b>Status:</b> {STATUS_LABELS[report.status]}<br>
        <b>Location:</b> {report.location.lat:.4f}, {report.location.lng:.4f}<br>
        <b>Date:</b> {report.date.strftime("%Y-%m-%d %H:%M")} UTC<br>
        <b>Description:</b> {html.escape(report.description)}
    </div>
    """


def create_reports_map(
    reports: Sequence[Report],
    center: Optional[tuple[float, float]] = None,
    zoom: Optional[int] = None,
    focus: Optional[Report] = None,
    title: str = "Sanitary Map Dashboard",
    cluster_markers: bool = True,
) -> folium.Map:
    """
    Create an interactive map of the report board.

    Args:
        reports: Reports to plot
        center: Map center (lat, lng). Auto-calculated if None.
        zoom: Initial zoom level (1-18)
        focus: Report to center on at street zoom, opening its popup
        title: Map title
        cluster_markers: Cluster markers when zoomed out

    Returns:
        Folium Map object
    """
    if focus is not None:
        center = (focus.location.lat, focus.location.lng)
        zoom = zoom or settings.map_focus_zoom
    elif center is None:
        center = calculate_centroid(
            (r.location.lat, r.location.lng) for r in reports
        ) or (settings.map_center_latitude, settings.map_center_longitude)

    report_map = folium.Map(
        location=center,
        zoom_start=zoom or settings.map_zoom,
        tiles="OpenStreetMap",
    )

    if not reports:
        logger.warning("No reports provided, creating empty map")
        return report_map

    if cluster_markers and focus is None:
        marker_group = MarkerCluster(name="Reports")
    else:
        marker_group = folium.FeatureGroup(name="Reports")

    for report in reports:
        color = report.indicator.hex
        popup = folium.Popup(
            build_popup_html(report),
            max_width=300,
            show=focus is not None and report.id == focus.id,
        )

        folium.CircleMarker(
            location=[report.location.lat, report.location.lng],
            radius=get_report_radius(report),
            popup=popup,
            tooltip=f"{report.severity.value} - {STATUS_LABELS[report.status]}",
            color=color,
            fill=True,
            fill_color=color,
            fill_opacity=0.7,
            weight=2,
        ).add_to(marker_group)

    marker_group.add_to(report_map)

    title_html = f'''
    <div style="position: fixed;
                top: 10px; left: 50px;
                background-color: rgba(255,255,255,0.9);
                padding: 10px 20px;
                border-radius: 5px;
                z-index: 9999;
                font-family: Arial;">
        <h3 style="margin: 0; color: #1f2937;">{html.escape(title)}</h3>
        <p style="margin: 5px 0 0 0; color: #4b5563; font-size: 12px;">
            {len(reports)} reports
        </p>
    </div>
    '''
    report_map.get_root().html.add_child(folium.Element(title_html))

    legend_rows = "".join(
        f'<span style="color: {SEVERITY_INDICATORS[s].hex};">●</span> {s.value.capitalize()}<br>'
        for s in (Severity.HIGH, Severity.MEDIUM, Severity.LOW)
    )
    legend_html = f'''
    <div style="position: fixed;
                bottom: 30px; right: 30px;
                background-color: rgba(255,255,255,0.9);
                padding: 10px;
                border-radius: 5px;
                z-index: 9999;
                font-family: Arial;
                font-size: 12px;">
        <b>Priority</b><br>
        {legend_rows}
    </div>
    '''
    report_map.get_root().html.add_child(folium.Element(legend_html))

    logger.info(f"Created map with {len(reports)} reports")
    return report_map


def save_reports_map(
    reports: Sequence[Report],
    output_path: str = "sanitary_map.html",
    **kwargs
) -> str:
    """
    Generate and save a report map as HTML.

    Args:
        reports: Reports to plot
        output_path: Path to save HTML file
        **kwargs: Passed to create_reports_map

    Returns:
        Path to saved file
    """
    report_map = create_reports_map(reports, **kwargs)
    report_map.save(output_path)
    logger.info(f"Map saved to {output_path}")

    return output_path
