"""Uvicorn runner for the Storefront API.

Command-line flags are applied as ``STOREFRONT_*`` environment variables
before the application module is imported, so they override the settings
loaded from the environment.

Usage:
    python src/server.py                     # Serve on 0.0.0.0:8080 with the demo catalog
    python src/server.py --port 9000         # Serve on another port
    python src/server.py --no-seed           # Start with an empty catalog
"""

import argparse
import os

import uvicorn

from storefront.config import settings


def main():
    parser = argparse.ArgumentParser(description="Storefront API server")
    parser.add_argument("--host", default=settings.host, help=f"Bind address (default: {settings.host})")
    parser.add_argument("--port", type=int, default=settings.port, help=f"Bind port (default: {settings.port})")
    parser.add_argument("--no-seed", action="store_true", help="Do not load the demo catalog")
    parser.add_argument("--log-level", help="Override the log level derived from the environment")
    parser.add_argument("--reload", action="store_true", help="Reload on source changes (development)")
    args = parser.parse_args()

    if args.no_seed:
        os.environ["STOREFRONT_SEED_CATALOG"] = "false"
    if args.log_level:
        os.environ["STOREFRONT_LOG_LEVEL"] = args.log_level

    uvicorn.run(
        "app:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_config=None,
    )


if __name__ == "__main__":
    main()
