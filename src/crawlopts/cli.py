"""Command-line interface for crawlopts."""

import argparse
import json
import sys
import traceback
from pathlib import Path
from typing import Any

import yaml

from . import __version__
from .arguments import parse_optional_arguments
from .config import (
    OUTPUT_FORMATS,
    entries_from_config,
    get_config_path,
    init_config,
    load_config,
    merge_config,
)
from .console import error, info, success, warning
from .cookies import CookieRecord, load_cookies_from_file, parse_cookie_lines
from .exceptions import CrawlOptsError
from .headers import parse_custom_headers
from .segments import collect_entries, split_lines


def parse_args(args: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="crawlopts",
        description="Parse crawler header, headless option and cookie strings.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""\
Examples:
  crawlopts -H "User-Agent:Mozilla/5.0,X-Api-Key:secret"
  crawlopts --headless-options="--proxy-bypass-list=a.com,b.com,--disable-gpu"
  crawlopts --cookie "session=abc; Domain=example.com; Secure"
  crawlopts --cookie-file cookies.txt --json
""",
    )

    # Inputs
    parser.add_argument(
        "-H", "--header",
        action="append",
        metavar="HEADER",
        help="Custom header(s) as Name:value, comma-separated (repeatable)",
    )

    parser.add_argument(
        "--headless-options",
        action="append",
        metavar="OPTIONS",
        help="Headless browser option(s), comma-separated (repeatable)",
    )

    parser.add_argument(
        "--cookie", "--load-cookies-browser",
        dest="cookie",
        action="append",
        metavar="LINE",
        help="Cookie line(s) to load into the browser, newline-separated (repeatable)",
    )

    parser.add_argument(
        "--cookie-file",
        metavar="FILE",
        help="Load cookies from a cookies.txt or cookie-line file",
    )

    # Output
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print JSON instead of YAML",
    )

    # Configuration
    parser.add_argument(
        "--config",
        metavar="FILE",
        help="Use alternate config file",
    )

    parser.add_argument(
        "--init-config",
        action="store_true",
        help="Write a default config file and exit",
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Report ignored input",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    return parser.parse_args(args)


def build_options(config: dict[str, Any], args: argparse.Namespace) -> dict[str, Any]:
    """Parse config-file and command-line entries into typed options.

    Config entries come first so command-line entries win on collisions.
    """
    def report(line: str, reason: str) -> None:
        if args.verbose:
            warning(f"Cookie {line!r}: {reason}")

    header_entries = collect_entries(entries_from_config(config, "headers"))
    header_entries += collect_entries(args.header)

    argument_entries = collect_entries(entries_from_config(config, "headless_options"))
    argument_entries += collect_entries(args.headless_options)

    cookie_lines = collect_entries(entries_from_config(config, "cookies"), split_lines)
    cookie_lines += collect_entries(args.cookie, split_lines)

    cookies: list[CookieRecord] = []
    cookie_file = config.get("cookie_file")
    if cookie_file:
        cookies.extend(load_cookies_from_file(Path(cookie_file), report))
    cookies.extend(parse_cookie_lines(cookie_lines, report))

    return {
        "headers": parse_custom_headers(header_entries),
        "headless_options": parse_optional_arguments(argument_entries),
        "cookies": [cookie.to_dict() for cookie in cookies],
    }


def render_options(options: dict[str, Any], output_format: str) -> str:
    """Render parsed options as YAML or JSON."""
    if output_format == "json":
        return json.dumps(options, indent=2) + "\n"
    return yaml.safe_dump(options, sort_keys=False, allow_unicode=True)


def main(args: list[str] | None = None) -> int:
    """Main entry point.

    Args:
        args: Command-line arguments (for testing)

    Returns:
        Exit code (0 for success)
    """
    parsed_args = parse_args(args)
    config_path = Path(parsed_args.config).expanduser() if parsed_args.config else None

    # Handle --init-config
    if parsed_args.init_config:
        try:
            created = init_config(config_path)
        except (FileExistsError, OSError) as e:
            error(str(e))
            return 1
        success(f"Created config file: {created}")
        return 0

    try:
        config = load_config(config_path)
    except (ValueError, OSError) as e:
        error(f"Error loading config: {e}")
        return 1

    if parsed_args.verbose:
        info(f"Config: {config_path or get_config_path()}")

    # Apply CLI overrides
    overrides = {}
    if parsed_args.cookie_file:
        overrides["cookie_file"] = parsed_args.cookie_file
    if parsed_args.json:
        overrides["output_format"] = "json"
    if overrides:
        config = merge_config(config, overrides)

    try:
        options = build_options(config, parsed_args)
    except CrawlOptsError as e:
        error(str(e))
        return 1
    except Exception as e:
        error(f"Parsing options: {e}")
        if parsed_args.verbose:
            traceback.print_exc()
        return 1

    output_format = config.get("output_format", "yaml")
    if output_format not in OUTPUT_FORMATS:
        output_format = "yaml"
    sys.stdout.write(render_options(options, output_format))
    return 0


if __name__ == "__main__":
    sys.exit(main())
