#!/usr/bin/env python3
"""
Command line entry point for the TA data collector.

Usage:
  python ta_cli.py
  python ta_cli.py <middleware> help
  python ta_cli.py <middleware> collect [OPTIONS] [ARGS]
  python ta_cli.py <middleware> assess --target "id1;id2"
  python ta_cli.py <middleware> report
  python ta_cli.py <middleware> run --help

Environment (.env in the working directory is loaded first):
  TA_OUTPUT_DIR   output root (default: ./output)
  TA_LOG_LEVEL    logging level (default: WARNING)
"""

from __future__ import annotations

from cli.dispatch import main as _main


def main() -> None:
    raise SystemExit(_main())


if __name__ == "__main__":
    main()
