from __future__ import annotations

import argparse
import asyncio
import sys
from typing import Optional

import uvicorn
from rich.console import Console

from .core.config import ConfigurationError, Settings, get_settings
from .core.errors import GreeterError
from .core.logging import configure_logging, get_logger, level_from_name
from .main import create_app
from .services.user_store import UserStore

console = Console(stderr=True)
logger = get_logger(component="cli")


def main(argv: Optional[list[str]] = None) -> None:
    """The main entry point for the CLI.

    Args:
        argv: The command-line arguments. Defaults to ``serve`` when no command is given.
    """
    argv = list(sys.argv[1:] if argv is None else argv)
    if not argv or (argv[0].startswith("-") and argv[0] not in {"-h", "--help"}):
        argv = ["serve", *argv]

    parser = _build_parser()
    args = parser.parse_args(argv)
    args.func(args)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Birthday greeter HTTP service")
    subparsers = parser.add_subparsers(dest="command")

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP service")
    serve_parser.add_argument("--host", default=None, help="Bind address (default from GREETER_HOST or 0.0.0.0)")
    serve_parser.add_argument("--port", type=int, default=None, help="Bind port (default from GREETER_PORT or 8080)")
    serve_parser.set_defaults(func=_cmd_serve)

    init_parser = subparsers.add_parser("init-db", help="Check connectivity and create the users table if missing")
    init_parser.set_defaults(func=_cmd_init_db)

    return parser


def _load_settings() -> Settings:
    try:
        settings = get_settings()
    except ConfigurationError as exc:
        configure_logging()
        logger.critical(str(exc))
        console.print(f"[red]{exc}[/red]")
        sys.exit(1)
    configure_logging(level=level_from_name(settings.log_level))
    return settings


def _cmd_serve(args: argparse.Namespace) -> None:
    settings = _load_settings()
    host = args.host or settings.host
    port = args.port or settings.port
    app = create_app(settings)
    logger.info("service_listening", host=host, port=port)
    uvicorn.run(app, host=host, port=port, lifespan="on", log_config=None)


async def _init_db(settings: Settings) -> None:
    store = await UserStore.open(settings.async_database_url)
    await store.close()


def _cmd_init_db(args: argparse.Namespace) -> None:
    settings = _load_settings()
    try:
        asyncio.run(_init_db(settings))
    except GreeterError as exc:
        logger.critical("failed to connect DB", error=exc.message)
        console.print(f"[red]failed to connect DB: {exc.message}[/red]")
        sys.exit(1)
    console.print("[green]users table is ready[/green]")


__all__ = ["main"]
