"""
Command line entry point.

    python -m storefront serve --host 0.0.0.0 --port 8000
    python -m storefront init-db
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from pydantic import ValidationError

from storefront import __version__, db
from storefront.config import Settings, get_settings
from storefront.logs import configure_logging

logger = logging.getLogger(__name__)


def cmd_serve(args: argparse.Namespace, settings: Settings) -> int:
    import uvicorn

    from storefront.api import create_app

    logger.info("Serving on http://%s:%d (docs at /docs)", args.host, args.port)
    uvicorn.run(
        create_app(settings),
        host=args.host,
        port=args.port,
        log_config=None,
    )
    return 0


def cmd_init_db(args: argparse.Namespace, settings: Settings) -> int:
    async def _init() -> None:
        engine = db.create_engine(settings.database_url, echo=settings.debug)
        try:
            await db.create_schema(engine)
        finally:
            await engine.dispose()

    asyncio.run(_init())
    return 0


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="storefront",
        description="E-commerce backend: catalog, cart, checkout and order lifecycle.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", default="127.0.0.1", help="Bind address (default: 127.0.0.1)")
    serve_parser.add_argument("--port", "-p", type=int, default=8000, help="Port (default: 8000)")

    subparsers.add_parser("init-db", help="Create the database schema")

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = create_parser()
    args = parser.parse_args(argv)

    commands = {
        "serve": cmd_serve,
        "init-db": cmd_init_db,
    }
    cmd_func = commands.get(args.command)
    if cmd_func is None:
        parser.print_help()
        return 0

    try:
        settings = get_settings()
    except ValidationError as exc:
        print(f"storefront: invalid configuration\n{exc}", file=sys.stderr)
        return 2
    configure_logging(settings.log_level)

    return cmd_func(args, settings)


if __name__ == "__main__":
    sys.exit(main())
