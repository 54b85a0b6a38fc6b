"""Command-line interface for articlepull."""

import argparse
import asyncio
import sys
from pathlib import Path
from typing import Optional

from rich.console import Console

from . import __version__
from .core.extractor import ArticleExtractor
from .errors import ExtractionError
from .http.client import ScrapeClient
from .logging_config import CLI_FORMAT, setup_logging
from .models.config import ServiceConfig
from .models.document import DocumentSnapshot, OutputFormat
from .models.events import EventType, ExtractionEvent
from .server import serve


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for CLI."""
    parser = argparse.ArgumentParser(
        prog="articlepull",
        description="Extract help-center articles as JSON, Markdown or plain text",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Extract an article as JSON (relative addresses use the base URL)
  articlepull extract photoshop/using/layers.html

  # Plain text with diagnostic fields
  articlepull extract https://helpx.adobe.com/photoshop/using/layers.html --format text --debug

  # Convert a saved page
  articlepull extract https://helpx.adobe.com/x.html --file page.html --format markdown

  # Run the HTTP service
  articlepull serve --port 8080
        """,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: from ARTICLEPULL_LOG_LEVEL or WARNING)",
    )

    subparsers = parser.add_subparsers(dest="command")

    extract = subparsers.add_parser("extract", help="Extract a single article")
    extract.add_argument("url", help="Absolute or relative article address")
    extract.add_argument(
        "--format",
        "-f",
        choices=[f.value for f in OutputFormat],
        default=OutputFormat.JSON.value,
        help="Output representation (default: json)",
    )
    extract.add_argument(
        "--file",
        type=Path,
        default=None,
        help="Read HTML from a local file instead of fetching it",
    )
    extract.add_argument(
        "--selector",
        "-s",
        default=None,
        help="CSS selector overriding template detection",
    )
    extract.add_argument(
        "--debug",
        action="store_true",
        help="Include template, selector and length diagnostics",
    )
    extract.add_argument(
        "--output",
        "-o",
        type=Path,
        default=None,
        help="Write the result to a file instead of stdout",
    )

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP service")
    serve_parser.add_argument("--host", default=None, help="Bind address (default: 0.0.0.0)")
    serve_parser.add_argument("--port", type=int, default=None, help="Port (default: 8080)")

    return parser


def run_extract(args: argparse.Namespace, config: ServiceConfig) -> int:
    """Run a single extraction with given arguments."""
    console = Console(stderr=True)
    extractor = ArticleExtractor()

    def on_event(event: ExtractionEvent) -> None:
        if not args.debug:
            return
        if event.type == EventType.TEMPLATE_CLASSIFIED:
            console.print(f"[dim]Template:[/dim] {event.template}")
        elif event.type in (EventType.REGION_SELECTED, EventType.READER_FALLBACK):
            console.print(f"[dim]Region:[/dim] {event.selector}")
        elif event.type == EventType.FOOTER_TRUNCATED:
            console.print(f"[dim]Footer cut at:[/dim] {event.message}")
        elif event.type == EventType.FRAGMENT_LOST:
            console.print(f"[yellow]Fragment reinserted:[/yellow] {event.message}")

    client = ScrapeClient(config)
    url = client.resolve_url(args.url)

    async def fetch() -> DocumentSnapshot:
        async with client:
            return await client.fetch(args.url)

    try:
        if args.file is not None:
            snapshot = DocumentSnapshot(raw_html=args.file.read_text(encoding="utf-8"), source_url=url)
        else:
            with console.status(f"Fetching {url}"):
                snapshot = asyncio.run(fetch())
        body, _ = extractor.render(
            snapshot,
            args.format,
            debug=args.debug,
            selector=args.selector,
            emit=on_event,
        )
    except ExtractionError as e:
        console.print(f"[red]Error ({e.code}):[/red] {e.message}")
        if e.details.get("available_selectors"):
            console.print("[dim]Available selectors:[/dim]")
            for entry in e.details["available_selectors"]:
                console.print(f"  {entry['tag']} id={entry['id']} class={entry['class']}")
        return 1
    except (OSError, UnicodeDecodeError) as e:
        console.print(f"[red]Error:[/red] {e}")
        return 1

    if args.output is not None:
        args.output.write_text(body, encoding="utf-8")
        console.print(f"[green]Wrote[/green] {args.output}")
    else:
        sys.stdout.write(body)
        if not body.endswith("\n"):
            sys.stdout.write("\n")
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    overrides: dict = {}
    if args.command == "serve":
        if args.host:
            overrides["host"] = args.host
        if args.port:
            overrides["port"] = args.port
    if args.log_level:
        overrides["log_level"] = args.log_level

    config = ServiceConfig.from_env()
    if overrides:
        config = config.model_copy(update=overrides)

    if args.command == "serve":
        setup_logging(args.log_level or config.log_level)
        serve(config)
        return 0

    setup_logging(args.log_level or "WARNING", format_string=CLI_FORMAT)
    return run_extract(args, config)


if __name__ == "__main__":
    sys.exit(main())
