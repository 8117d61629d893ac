"""Command-line entrypoint: one-shot search, stdio protocol server or HTTP."""

from __future__ import annotations

import argparse
import logging
import sys

import uvicorn

from checkfor.config import AppConfig, ConfigError, load_config
from checkfor.constants import DEFAULT_DIRS, SERVER_NAME, SERVER_VERSION
from checkfor.errors import DirectoryListingError
from checkfor.main import create_app
from checkfor.models import SearchRequest
from checkfor.protocol import dumps, serve_stdio
from checkfor.scanner import scan_all
from checkfor.updates import UpdateCheckError, check_for_update

logger = logging.getLogger(__name__)


def _split_list(raw: str) -> list[str]:
    return [item.strip() for item in raw.split(",") if item.strip()]


def _non_negative_int(raw: str) -> int:
    try:
        value = int(raw)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer: {raw!r}") from exc
    if value < 0:
        raise argparse.ArgumentTypeError("must not be negative")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=SERVER_NAME,
        description=(
            "Search the files of one or more directories (non-recursive) for a "
            "string. Runs as a stdio JSON-RPC tool server unless --cli is given."
        ),
    )
    parser.add_argument(
        "--cli",
        action="store_true",
        help="Run in CLI mode (default is MCP server mode).",
    )
    parser.add_argument(
        "--http",
        action="store_true",
        help="Serve the HTTP transport instead of stdio.",
    )
    parser.add_argument(
        "--dir",
        default="",
        help="Comma-separated list of directories to search (defaults to current directory).",
    )
    parser.add_argument("--search", default="", help="String to search for (required).")
    parser.add_argument(
        "--ext", default="", help="File extension to filter (e.g., .go, .rtf)."
    )
    parser.add_argument(
        "--exclude",
        default="",
        help="Comma-separated list of strings to exclude from results.",
    )
    parser.add_argument(
        "--case-insensitive",
        action="store_true",
        help="Perform case-insensitive search.",
    )
    parser.add_argument(
        "--whole-word", action="store_true", help="Match whole words only."
    )
    parser.add_argument(
        "--context",
        type=_non_negative_int,
        default=0,
        help="Number of context lines before and after match.",
    )
    parser.add_argument(
        "--hide-filter-stats",
        action="store_true",
        help="Hide original_matches and filtered_matches from output.",
    )
    parser.add_argument(
        "--check-update",
        action="store_true",
        help="Check whether a newer release is available (uses CHECKFOR_UPDATE_URL).",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {SERVER_VERSION}"
    )
    return parser


def request_from_args(args: argparse.Namespace) -> SearchRequest:
    return SearchRequest(
        search=args.search,
        dirs=tuple(_split_list(args.dir)) or DEFAULT_DIRS,
        ext=args.ext,
        exclude=tuple(_split_list(args.exclude)),
        case_insensitive=args.case_insensitive,
        whole_word=args.whole_word,
        context=args.context,
        hide_filter_stats=args.hide_filter_stats,
    )


def run_cli(args: argparse.Namespace, parser: argparse.ArgumentParser) -> int:
    if not args.search:
        print("Error: --search is required", file=sys.stderr)
        parser.print_usage(sys.stderr)
        return 1

    try:
        result = scan_all(request_from_args(args))
    except DirectoryListingError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print(dumps(result.to_dict()))
    return 0


def run_update_check(config: AppConfig) -> int:
    if not config.update_url:
        print("Error: CHECKFOR_UPDATE_URL is not set", file=sys.stderr)
        return 1
    try:
        status = check_for_update(SERVER_VERSION, config.update_url)
    except UpdateCheckError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if status.update_available:
        print(f"A new version is available: {status.latest} (current {status.current})")
    else:
        print(f"{SERVER_NAME} {status.current} is up to date")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config()
    except ConfigError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 2

    logging.basicConfig(
        level=config.log_level,
        stream=sys.stderr,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.check_update:
        return run_update_check(config)
    if args.cli:
        return run_cli(args, parser)
    if args.http:
        logger.info("serving HTTP on %s:%s", config.http_host, config.http_port)
        uvicorn.run(create_app(), host=config.http_host, port=config.http_port)
        return 0

    serve_stdio(sys.stdin, sys.stdout)
    return 0


if __name__ == "__main__":
    sys.exit(main())
