#!/usr/bin/env python3
"""
Sanitary Map AI - Generate Report Map
Loads the report board from the configured store and writes an interactive map.
"""
import argparse
import asyncio
import os
import sys

# Add src to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from dotenv import load_dotenv

# Load environment variables before settings are read
load_dotenv()

from src.core.config import get_settings
from src.core.logging import setup_logging
from src.reports.exceptions import NotFound, PersistenceError
from src.reports.models import ReportStatus, Severity
from src.reports.repository import ReportRepository
from src.storage.factory import create_store
from src.visualization.map_generator import save_reports_map


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Render the sanitation report board to HTML")
    parser.add_argument("-o", "--output", default="sanitary_map.html", help="Output HTML file")
    parser.add_argument("--severity", choices=[s.value for s in Severity])
    parser.add_argument("--status", choices=[s.value for s in ReportStatus])
    parser.add_argument("--focus", metavar="REPORT_ID", help="Center the map on one report")
    return parser.parse_args(argv)


async def load_reports(repository: ReportRepository):
    try:
        await repository.load_all()
    finally:
        await repository.store.close()


def main(argv=None) -> int:
    args = parse_args(argv)
    config = get_settings()
    setup_logging(config)

    print("=" * 60)
    print("Sanitary Map AI - Generating Report Map")
    print("=" * 60)

    repository = ReportRepository(create_store(config), key_prefix=config.report_key_prefix)

    try:
        asyncio.run(load_reports(repository))
    except PersistenceError as e:
        print(f"ERROR: could not load reports from {config.store_backend} store: {e}")
        return 1

    try:
        focus = repository.get(args.focus) if args.focus else None
    except NotFound:
        print(f"ERROR: report {args.focus} not found")
        return 1

    reports = repository.filter(
        severity=Severity(args.severity) if args.severity else None,
        status=ReportStatus(args.status) if args.status else None,
    )

    stats = repository.statistics()
    print(f"\nLoaded {stats['total_reports']} reports")
    for level, count in stats["by_severity"].items():
        print(f"  {level:<8} {count}")

    path = save_reports_map(reports, output_path=args.output, focus=focus)
    print(f"\nMap saved to: {os.path.abspath(path)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
