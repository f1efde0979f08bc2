"""Application entry point for Pixel Vacuum."""
from __future__ import annotations

import argparse
import logging
from pathlib import Path

from pixel_vacuum.app.app import PixelVacuumApp
from pixel_vacuum.core.config import load_app_config
from pixel_vacuum.utils.logging_setup import setup_logging


def main() -> None:
    root = Path(__file__).resolve().parents[2]
    parser = argparse.ArgumentParser(description="Pixel Vacuum arcade game")
    parser.add_argument(
        "--config",
        type=Path,
        default=root / "config" / "app_config.json",
        help="Path to the JSON configuration file",
    )
    args = parser.parse_args()

    try:
        app_config = load_app_config(args.config)
    except (ValueError, TypeError, KeyError) as e:
        print(f"FATAL: Could not load {args.config}. Error: {e}")
        return

    setup_logging(app_config.logging)
    logging.info("--- Pixel Vacuum Starting ---")

    app = PixelVacuumApp(app_config=app_config)
    app.run()

    logging.info("--- Pixel Vacuum Shutting Down ---")


if __name__ == "__main__":
    main()
