#!/usr/bin/env python
"""
Run the Axys auth API server.

The app bootstraps the persisted device session on startup, so the first
GET /api/auth/session answers with the splash route until the minimum
splash duration has passed.

Usage:
    python run_api.py
    python run_api.py --reload  # Development mode
    python run_api.py --log-level debug
"""

import argparse
import uvicorn

from shared.config import get_settings


def main():
    parser = argparse.ArgumentParser(description="Run Axys auth API server")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload")
    parser.add_argument("--host", type=str, help="Host to bind to")
    parser.add_argument("--port", type=int, help="Port to bind to")
    parser.add_argument(
        "--log-level",
        choices=["debug", "info", "warning", "error"],
        help="Override LOG_LEVEL",
    )
    args = parser.parse_args()

    settings = get_settings()
    log_level = args.log_level or settings.log_level.lower()

    uvicorn.run(
        "api:app",
        host=args.host or settings.host,
        port=args.port or settings.port,
        reload=args.reload or settings.reload,
        log_level=log_level,
    )


if __name__ == "__main__":
    main()
