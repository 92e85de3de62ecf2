"""Startup settings: environment variables, overridden by command-line flags."""

import argparse
import os
from dataclasses import dataclass
from typing import Mapping, Sequence

DEFAULT_INITIAL_COOKIES = 10


@dataclass(frozen=True)
class Settings:
    initial_cookies: int = DEFAULT_INITIAL_COOKIES
    log_level: str = "INFO"
    logfmt_enabled: bool = True


def _non_negative_int(value: str) -> int:
    try:
        n = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected a whole number of cookies, got {value!r}") from None
    if n < 0:
        raise argparse.ArgumentTypeError(f"cookie count cannot be negative, got {n}")
    return n


def _truthy(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def build_arg_parser(environ: Mapping[str, str] | None = None) -> argparse.ArgumentParser:
    env = os.environ if environ is None else environ
    parser = argparse.ArgumentParser(
        prog="cookie-mcp",
        description="MCP server that rewards an LLM with cookies from a finite jar.",
    )
    # String defaults go through `type`, so a bad env value is reported like a bad flag.
    parser.add_argument(
        "-c", "--cookies",
        dest="initial_cookies",
        type=_non_negative_int,
        default=env.get("COOKIE_MCP_INITIAL_COOKIES", str(DEFAULT_INITIAL_COOKIES)),
        help="Cookies in the jar at startup (env: COOKIE_MCP_INITIAL_COOKIES, default: 10).",
    )
    parser.add_argument(
        "--log-level",
        default=env.get("COOKIE_MCP_LOG_LEVEL", "INFO"),
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
        help="Log level (env: COOKIE_MCP_LOG_LEVEL, default: INFO).",
    )
    parser.add_argument(
        "--plain-logs",
        action="store_true",
        default=not _truthy(env.get("COOKIE_MCP_LOGFMT", "1")),
        help="Plain log lines instead of logfmt (env: COOKIE_MCP_LOGFMT=0).",
    )
    return parser


def load_settings(
    argv: Sequence[str] | None = None,
    environ: Mapping[str, str] | None = None,
) -> Settings:
    args = build_arg_parser(environ).parse_args(argv)
    return Settings(
        initial_cookies=args.initial_cookies,
        log_level=args.log_level,
        logfmt_enabled=not args.plain_logs,
    )
