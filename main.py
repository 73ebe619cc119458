#!/usr/bin/env python3
"""
Artworks table - Main entry point
"""
import argparse
import logging
import os
import sys
from pathlib import Path

# Add the project directory to sys.path for imports
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from simple_logger import Slogger
from artic_table.config import load_config
from artic_table.errors import ConfigError
from artic_table.ui.app import ArticTableApp


def setup_logging(log_file: str, log_level: str) -> None:
    """Send stdlib logging and Slogger to the same file; the TUI owns the terminal."""
    Path(log_file).parent.mkdir(parents=True, exist_ok=True)
    numeric_log_level = getattr(logging, log_level.upper(), logging.INFO)
    for handler in logging.root.handlers[:]:
        logging.root.removeHandler(handler)
    logging.basicConfig(
        level=numeric_log_level,
        format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
        handlers=[logging.FileHandler(log_file, mode='a', encoding='utf-8')],
    )
    Slogger.configure(log_file, log_level)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Browse Art Institute of Chicago artworks")
    parser.add_argument("--config", help="Path to a JSON config file. Default: ~/.artic_table_config.json")
    parser.add_argument("--page", type=int, help="1-based page to open first.")
    parser.add_argument("--log-file", help="Log file path. Overrides the config value.")
    parser.add_argument("--log-level", choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                        help="Logging level. Overrides the config value.")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)

    try:
        config = load_config(args.config)
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    if args.log_file:
        config["logging"]["path"] = args.log_file
    if args.log_level:
        config["logging"]["level"] = args.log_level
    if args.page is not None:
        if args.page < 1:
            print("--page must be 1 or greater", file=sys.stderr)
            return 2
        config["ui"]["start_page"] = args.page - 1

    setup_logging(config["logging"]["path"], config["logging"]["level"])
    Slogger.log("Starting artworks table...")

    app = ArticTableApp(config)
    app.run()
    return 0

if __name__ == "__main__":
    sys.exit(main())
