"""
server.py — HTTP entry point for the PSCMS dashboard.

Usage:
    python -m src.dashboard.server
    python -m src.dashboard.server --port 8080 --debug
"""

from __future__ import annotations

import argparse

from src.common.config import Settings
from src.common.logging import setup_logging

from .app import create_app


def main() -> None:
    settings = Settings.load()

    parser = argparse.ArgumentParser(description="Run the PSCMS dashboard")
    parser.add_argument("--host", default=settings.server.host, help="Bind address")
    parser.add_argument("--port", type=int, default=settings.server.port, help="Port")
    parser.add_argument(
        "--debug",
        action="store_true",
        default=settings.server.debug,
        help="Enable Flask debug mode",
    )
    args = parser.parse_args()

    # Module loggers named src.* propagate here
    log = setup_logging(level=settings.log_level, module_name="src")

    app = create_app(settings=settings)
    log.info("Starting PSCMS dashboard on %s:%d", args.host, args.port)
    app.run(host=args.host, port=args.port, debug=args.debug)


if __name__ == "__main__":
    main()
