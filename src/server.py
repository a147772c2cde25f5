"""Uvicorn runner for the storefront cart service.

Cart edits are serialized by in-process locks, so the service runs as a
single worker process.

Usage:
    python src/server.py                       # Host/port from settings
    python src/server.py --port 9000 --reload  # Local development
"""

import argparse

import uvicorn

from shared.config import get_settings


def main():
    settings = get_settings()

    parser = argparse.ArgumentParser(description="Storefront cart service runner")
    parser.add_argument("--host", default=settings.SERVICE_HOST, help="Interface to bind")
    parser.add_argument("--port", type=int, default=settings.SERVICE_PORT, help="Port to listen on")
    parser.add_argument("--reload", action="store_true", help="Restart on code changes")
    args = parser.parse_args()

    uvicorn.run(
        "app:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        workers=1,
        log_config=None,
    )


if __name__ == "__main__":
    main()
