"""
snapshot.py

Fetch top movers once and write the dashboard as a static HTML file.

Usage:
    python -m capitalflow.snapshot                        # writes dashboard.html
    python -m capitalflow.snapshot --out public/index.html
    python -m capitalflow.snapshot --config other.yaml
"""

import argparse
from pathlib import Path

from capitalflow.core.config import load_settings
from capitalflow.core.errors import ConfigError
from capitalflow.core.logger import setup_logger
from capitalflow.pipeline import PipelineStatus, fetch_market_data_sync, render_static_widgets
from capitalflow.render.page import render_page
from capitalflow.render.sinks import PageSinks


def write_snapshot(settings, out_path: Path) -> PipelineStatus:
    """Render every widget into fresh sinks and write the page to out_path."""
    sinks = PageSinks()
    status = fetch_market_data_sync(settings, sinks)
    render_static_widgets(sinks)

    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(render_page(sinks, title=settings.page_title), encoding="utf-8")
    return status


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Write a static market dashboard page")
    parser.add_argument("--config", type=Path, help="Path to config.yaml")
    parser.add_argument("--out", type=Path, default=Path("dashboard.html"), help="Output HTML file")
    args = parser.parse_args(argv)

    try:
        settings = load_settings(args.config)
    except ConfigError as e:
        print(f"Invalid config: {e}")
        return 1

    logger = setup_logger(settings.log_level, log_dir=settings.log_dir)
    if not settings.api_key:
        logger.error("ALPHAVANTAGE_API_KEY not found in environment, .env or config.yaml.")
        return 1

    status = write_snapshot(settings, args.out)
    logger.info(f"Wrote {args.out} (market data {status.value})")
    return 0 if status is PipelineStatus.SUCCEEDED else 1


if __name__ == "__main__":
    raise SystemExit(main())
