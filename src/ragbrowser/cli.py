"""CLI entry point for the RAG Web Browser servers and tools."""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ragbrowser.config.settings import Settings

LOG_LEVELS = ["debug", "info", "warning", "error"]


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="ragbrowser",
        description="RAG Web Browser — Web search and content extraction for AI agents",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=str,
        default=None,
        help="Path to YAML configuration file",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=LOG_LEVELS,
        default=None,
        help="Log level (overrides config)",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"ragbrowser {_get_version()}",
    )

    # Same options after the subcommand; SUPPRESS keeps a top-level value from being reset
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--config", "-c", type=str, default=argparse.SUPPRESS, help="Path to YAML configuration file")
    common.add_argument(
        "--log-level",
        type=str,
        choices=LOG_LEVELS,
        default=argparse.SUPPRESS,
        help="Log level (overrides config)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    http_parser = subparsers.add_parser("http", parents=[common], help="Run the HTTP REST API")
    http_parser.add_argument("--host", type=str, default=None, help="Server bind address (overrides config)")
    http_parser.add_argument("--port", "-p", type=int, default=None, help="Server port (overrides config)")
    http_parser.add_argument("--workers", "-w", type=int, default=None, help="Number of worker processes")
    http_parser.add_argument("--reload", action="store_true", help="Enable auto-reload for development")

    subparsers.add_parser("stdio", parents=[common], help="Run the MCP tool server on stdin/stdout")
    subparsers.add_parser("providers", parents=[common], help="Show which search providers are configured")

    search_parser = subparsers.add_parser("search", parents=[common], help="Run one search and print the results")
    search_parser.add_argument("query", type=str, help="Search keywords or a URL")
    search_parser.add_argument("--max-results", "-n", type=int, default=2, help="Maximum number of results")

    args = parser.parse_args(argv)

    settings = _load_settings(args.config)
    if args.log_level:
        settings.observability.log_level = args.log_level

    from ragbrowser.observability.logging import setup_logging

    # stdout belongs to the protocol in stdio mode
    setup_logging(settings.observability, stream=sys.stderr if args.command == "stdio" else None)

    if args.command == "http":
        if args.host:
            settings.server.host = args.host
        if args.port:
            settings.server.port = args.port
        if args.workers:
            settings.server.workers = args.workers
        _run_http(settings, args.reload)
    elif args.command == "stdio":
        _run_stdio(settings)
    elif args.command == "providers":
        _print_providers(settings)
    elif args.command == "search":
        sys.exit(asyncio.run(_run_search(settings, args.query, args.max_results)))


def _load_settings(config: str | None) -> Settings:
    from ragbrowser.config.settings import Settings

    if config:
        config_path = Path(config)
        if not config_path.exists():
            print(f"Error: Config file not found: {config_path}", file=sys.stderr)
            sys.exit(1)
        return Settings.from_yaml(config_path)
    return Settings()


def _run_http(settings: Settings, reload: bool) -> None:
    import uvicorn

    from ragbrowser.api.app import create_app

    if reload or settings.server.workers > 1:
        # Reload and worker processes need an import string; settings are re-read from the environment
        uvicorn.run(
            "ragbrowser.api.app:create_app",
            factory=True,
            host=settings.server.host,
            port=settings.server.port,
            workers=settings.server.workers if not reload else 1,
            reload=reload,
            log_level=settings.observability.log_level,
        )
        return

    uvicorn.run(
        create_app(settings),
        host=settings.server.host,
        port=settings.server.port,
        log_level=settings.observability.log_level,
    )


def _run_stdio(settings: Settings) -> None:
    from ragbrowser.providers.base.exceptions import ConfigurationError
    from ragbrowser.stdio.server import run_stdio

    try:
        run_stdio(settings)
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


def _print_providers(settings: Settings) -> None:
    from ragbrowser.providers.base.selector import ProviderSelector

    print("Available providers:")
    for descriptor in ProviderSelector(settings.provider_config()).list_available():
        status = "available" if descriptor.available else f"not available ({descriptor.reason})"
        print(f"  - {descriptor.type.value}: {status}")


async def _run_search(settings: Settings, query: str, max_results: int) -> int:
    """Smoke-test the configured provider with one real search."""
    from ragbrowser.core.service import WebSearchService
    from ragbrowser.models.query import WebSearchRequest
    from ragbrowser.providers.base.exceptions import ProviderError

    _print_providers(settings)
    try:
        service = WebSearchService(settings)
    except ProviderError as e:
        print(f"\nError: {e}", file=sys.stderr)
        return 1

    print(f"\nTesting configured provider: {service.provider_type.value}")
    print(f'Performing test search: "{query}"')

    await service.initialize()
    try:
        results = await service.search(WebSearchRequest(query=query, max_results=max_results))
    except ProviderError as e:
        print(f"\nSearch failed: {e}", file=sys.stderr)
        print("Check your API key, the selected provider (apify or tavily) and your connection.", file=sys.stderr)
        return 1
    finally:
        await service.shutdown()

    print(f"\nSearch completed! Found {len(results)} results:\n")
    for index, result in enumerate(results, start=1):
        print(f"Result {index}:")
        print(f"  Title: {result.title}")
        print(f"  URL: {result.url}")
        print(f"  Content Preview: {result.content[:200]}...")
        print(f"  Has Markdown: {'Yes' if result.markdown else 'No'}")
        if result.score is not None:
            print(f"  Score: {result.score}")
        print()
    return 0


def _get_version() -> str:
    """Get the package version."""
    try:
        from ragbrowser import __version__

        return __version__
    except ImportError:
        return "unknown"


if __name__ == "__main__":
    main()
