"""Traffic Analytics entry point.

Usage:
    python -m traffic_analytics [OPTIONS]

Options:
    --config PATH    Path to YAML config file
    --profile NAME   Profile name (dev, prod, test)
    --records PATH   Read sessions from a JSON dump instead of the backend
    --date DAY       Show a custom day (YYYY-MM-DD) instead of today
    --help           Show this help message
    --version        Show version
"""

import argparse
import json
import logging
import sys
from datetime import date
from pathlib import Path

from dotenv import load_dotenv

from . import __version__
from .config import TrafficConfig
from .config.loader import load_config
from .config.profiles import detect_profile
from .dashboard import DateOption, TrafficDashboard, timeline_series, weekly_chart
from .sources import HttpSessionSource, InMemorySessionSource, SessionSource


def setup_logging(level: str, fmt: str | None = None) -> None:
    """Configure logging based on config."""
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=numeric_level,
        format=fmt or "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )


def _parse_day(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"Invalid date '{value}', expected YYYY-MM-DD") from e


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="traffic_analytics",
        description="Traffic Analytics - game-session timeline and weekly histogram",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m traffic_analytics                          # Today, auto-detected profile
  python -m traffic_analytics --profile prod           # Production backend
  python -m traffic_analytics --date 2024-05-01        # A custom day
  python -m traffic_analytics --records dump.json      # Offline, from a JSON dump

Environment:
  TRAFFIC_PROFILE        Set profile (dev, prod, test)
  TRAFFIC_BACKEND_URL    Override the backend base URL
""",
    )

    parser.add_argument(
        "--config",
        type=Path,
        help="Path to YAML config file",
        metavar="PATH",
    )

    parser.add_argument(
        "--profile",
        choices=["dev", "prod", "test"],
        help="Configuration profile to use",
    )

    parser.add_argument(
        "--records",
        type=Path,
        metavar="PATH",
        help="JSON dump with categories, records and weekly_records",
    )

    parser.add_argument(
        "--date",
        type=_parse_day,
        metavar="YYYY-MM-DD",
        help="Show this day on the timeline instead of today",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"Traffic Analytics v{__version__}",
    )

    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Load config and exit (for testing)",
    )

    return parser.parse_args(argv)


def build_source(config: TrafficConfig, records_path: Path | None) -> SessionSource:
    """Pick the session source: a JSON dump if given, else the backend."""
    if records_path is not None:
        return InMemorySessionSource.from_json_file(records_path)
    return HttpSessionSource(
        base_url=config.backend.base_url,
        timeout=config.backend.timeout,
    )


def render(dashboard: TrafficDashboard, fallback_color: str) -> dict[str, object]:
    """Collect the chart payloads of a loaded dashboard."""
    active = dashboard.active_date
    return {
        "date": active.isoformat() if active else None,
        "timeline": timeline_series(dashboard.timeline),
        "weekly": weekly_chart(
            dashboard.weekly_series,
            dashboard.category_colors,
            fallback=fallback_color,
        ),
    }


def main(argv: list[str] | None = None) -> int:
    """Main entry point for Traffic Analytics.

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    load_dotenv()
    args = parse_args(argv)

    # Load configuration
    try:
        if args.config:
            config = load_config(path=args.config)
        elif args.profile:
            config = load_config(profile=args.profile)
        else:
            # Auto-detect profile
            profile = detect_profile()
            config = load_config(profile=profile.value)
    except FileNotFoundError as e:
        print(f"Error: Config file not found: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        return 1

    # Setup logging
    setup_logging(config.logging.level, config.logging.format)
    logger = logging.getLogger("traffic_analytics")

    logger.info(f"Traffic Analytics v{__version__}")
    logger.info(f"Profile: {args.profile or detect_profile().value}")
    logger.info(f"Log level: {config.logging.level}")

    if args.dry_run:
        logger.info("Dry run mode - exiting after config load")
        logger.info(f"Backend: {config.backend.base_url}")
        logger.info(f"Date option: {config.dashboard.default_date_option}")
        return 0

    try:
        source = build_source(config, args.records)
        dashboard = TrafficDashboard.from_config(config, source)
    except (FileNotFoundError, ValueError) as e:
        logger.error(f"Failed to initialize dashboard: {e}")
        return 1

    if args.date is not None:
        dashboard.set_date_option(DateOption.CUSTOM)
        dashboard.set_selected_date(args.date)
        dashboard.load_categories()
    else:
        dashboard.start()

    print(json.dumps(render(dashboard, config.dashboard.fallback_color), indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
