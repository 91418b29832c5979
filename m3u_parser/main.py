from __future__ import annotations

import argparse
import logging
import os

from dotenv import load_dotenv

from .parser import M3uParser
from .utils.http_client import DEFAULT_TIMEOUT, DEFAULT_USER_AGENT

load_dotenv()


def _env_str(name: str) -> str | None:
    value = os.getenv(name)
    if value is None or value == "":
        return None
    return value


def _env_int(name: str) -> int | None:
    value = _env_str(name)
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None


def _env_float(name: str) -> float | None:
    value = _env_str(name)
    if value is None:
        return None
    try:
        return float(value)
    except ValueError:
        return None


def _env_bool(name: str, default: bool = False) -> bool:
    value = _env_str(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _csv_arg(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    env_timeout = _env_float("M3U_TIMEOUT")
    parser = argparse.ArgumentParser(description="Parse, check and export M3U playlists.")
    parser.add_argument("source", nargs="?", default=_env_str("M3U_SOURCE"), help="Playlist URL or local file path")
    parser.add_argument(
        "--check-live",
        action=argparse.BooleanOptionalAction,
        default=_env_bool("M3U_CHECK_LIVE", default=True),
        help="Request every stream URL once and mark reachable ones as GOOD",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=DEFAULT_TIMEOUT if env_timeout is None else env_timeout,
        help="Timeout in seconds for the playlist download and each probe",
    )
    parser.add_argument("--user-agent", default=_env_str("M3U_USER_AGENT") or DEFAULT_USER_AGENT, help="User-Agent sent with probes")
    parser.add_argument("--workers", type=int, default=_env_int("M3U_WORKERS"), help="Optional cap on concurrent probes")
    parser.add_argument(
        "--filter",
        nargs=2,
        action="append",
        default=[],
        metavar=("KEY", "PATTERNS"),
        help="Keep streams whose KEY matches any comma-separated pattern",
    )
    parser.add_argument(
        "--exclude",
        nargs=2,
        action="append",
        default=[],
        metavar=("KEY", "PATTERNS"),
        help="Drop streams whose KEY matches any comma-separated pattern",
    )
    parser.add_argument("--sort", metavar="KEY", help="Sort streams by KEY")
    parser.add_argument("--desc", action="store_true", help="Sort in descending order")
    parser.add_argument("--nested-key", action="store_true", help="Treat keys as <key><splitter><nested_key>")
    parser.add_argument("--key-splitter", default="-", help="Splitter used with --nested-key")
    parser.add_argument("--random", action="store_true", help="Log one random stream after filtering")
    parser.add_argument("--output", default=_env_str("M3U_OUTPUT"), help="File to export the streams to")
    parser.add_argument(
        "--format",
        default=_env_str("M3U_FORMAT") or "json",
        help="Export format (json or m3u) when --output has no extension",
    )
    args = parser.parse_args(argv)
    if args.timeout <= 0:
        parser.error("--timeout (or M3U_TIMEOUT) must be greater than 0")
    return args


def configure_logging() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )


def main(argv: list[str] | None = None) -> int:
    configure_logging()
    args = parse_args(argv)
    if not args.source:
        logging.error("A playlist URL or file path is required (argument or M3U_SOURCE).")
        return 2

    with M3uParser(timeout=args.timeout, useragent=args.user_agent, workers=args.workers) as parser:
        parser.parse_m3u(args.source, check_live=args.check_live)
        if not len(parser):
            return 1

        for key, patterns in args.filter:
            parser.filter_by(key, _csv_arg(patterns), args.key_splitter, True, args.nested_key)
        for key, patterns in args.exclude:
            parser.filter_by(key, _csv_arg(patterns), args.key_splitter, False, args.nested_key)
        if args.sort:
            parser.sort_by(args.sort, args.key_splitter, not args.desc, args.nested_key)

        logging.info("%s streams selected.", len(parser))

        if args.random:
            stream = parser.get_random_stream(random_shuffle=False)
            if stream:
                logging.info("Random stream: %s | %s | %s", stream.title, stream.status.value, stream.url)

        if args.output:
            parser.to_file(args.output, args.format)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
