"""
fqdnproxy CLI — entry point for all operations.

Usage:
    fqdnproxy serve          # Start the API server
    fqdnproxy migrate        # Create the entries table
    fqdnproxy list           # Print stored FQDNs
    fqdnproxy version        # Show version
"""

from __future__ import annotations

import argparse
import logging
import sys


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="fqdnproxy",
        description="fqdnproxy — stored FQDN queries and an authenticated HTTPS GET proxy.",
    )
    parser.add_argument("--version", action="store_true", help="Show version and exit")

    subparsers = parser.add_subparsers(dest="command")

    # serve
    serve_parser = subparsers.add_parser("serve", help="Start the API server")
    serve_parser.add_argument("--host", default=None, help="Bind address (default: $FQDNPROXY_HOST)")
    serve_parser.add_argument(
        "--port", type=int, default=None, help="Port (default: $FQDNPROXY_PORT)"
    )

    # migrate
    subparsers.add_parser("migrate", help="Create the entries table on the configured backend")

    # list
    subparsers.add_parser("list", help="Print stored FQDNs")

    # version
    subparsers.add_parser("version", help="Show version")

    args = parser.parse_args(argv)

    if args.version or args.command == "version":
        from fqdnproxy import __version__

        print(f"fqdnproxy {__version__}")
        return 0

    if args.command == "serve":
        return _cmd_serve(args)
    elif args.command == "migrate":
        return _cmd_migrate(args)
    elif args.command == "list":
        return _cmd_list(args)
    else:
        parser.print_help()
        return 0


def _setup_logging() -> None:
    from fqdnproxy.api.middleware import CorrelationIdFilter
    from fqdnproxy.config import get_config

    logging.basicConfig(
        level=get_config().log_level,
        format="%(asctime)s %(levelname)s %(name)s [%(correlation_id)s]: %(message)s",
    )
    for handler in logging.getLogger().handlers:
        handler.addFilter(CorrelationIdFilter())


def _cmd_serve(args: argparse.Namespace) -> int:
    import uvicorn

    from fqdnproxy.api.app import create_app
    from fqdnproxy.config import get_config

    _setup_logging()
    cfg = get_config()
    host = args.host or cfg.server.host
    port = args.port or cfg.server.port

    print(f"Starting fqdnproxy on http://{host}:{port}")
    uvicorn.run(create_app(config=cfg), host=host, port=port, log_level=cfg.log_level.lower())
    return 0


def _cmd_migrate(args: argparse.Namespace) -> int:
    from fqdnproxy.entries.store import build_store
    from fqdnproxy.errors import StoreError

    _setup_logging()
    try:
        store = build_store()
    except ConnectionError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    try:
        store.init_schema()
    except StoreError as e:
        print(f"Error: migration failed: {e}", file=sys.stderr)
        return 1
    finally:
        store.close()
    print("auu_queries table ready.")
    return 0


def _cmd_list(args: argparse.Namespace) -> int:
    from fqdnproxy.entries.store import build_store
    from fqdnproxy.errors import StoreError

    try:
        store = build_store()
    except ConnectionError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    try:
        store.init_schema()
        for fqdn in store.list_fqdns():
            print(fqdn)
    except StoreError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    finally:
        store.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
