"""Configuration loading and management for crawlopts."""

import copy
from pathlib import Path
from typing import Any

import yaml


# Default configuration values
DEFAULT_CONFIG: dict[str, Any] = {
    "headers": [],
    "headless_options": [],
    "cookies": [],
    "cookie_file": None,
    "output_format": "yaml",
}

OUTPUT_FORMATS = ("yaml", "json")

# Keys holding raw option entries: a string or a list of strings
ENTRY_KEYS = ("headers", "headless_options", "cookies")

# Default config file content with examples
DEFAULT_CONFIG_YAML = """\
# crawlopts configuration
# Location: ~/.crawlopts.yml
#
# Entries here are applied before command-line options, so values given on
# the command line win when the same header or flag appears in both.

# Custom HTTP headers, one "Name:value" entry per item
headers: []
#  - "User-Agent:Mozilla/5.0"
#  - "X-Api-Key:secret"

# Headless browser options; values may contain commas
headless_options: []
#  - "--proxy-bypass-list=localhost,127.0.0.1"
#  - "--disable-gpu"

# Cookie lines loaded into the browser
cookies: []
#  - "session=abc; Domain=example.com; Path=/; Secure; HttpOnly; SameSite=Lax"

# Cookie file (Netscape cookies.txt or one cookie line per row)
cookie_file: null

# Output format: yaml or json
output_format: yaml
"""


def get_config_path() -> Path:
    """Return the default config file path (~/.crawlopts.yml)."""
    return Path.home() / ".crawlopts.yml"


def config_exists(path: Path | None = None) -> bool:
    """Check if config file exists."""
    config_path = path or get_config_path()
    return config_path.exists()


def init_config(path: Path | None = None) -> Path:
    """Initialize default config file. Returns the path to the created file."""
    config_path = path or get_config_path()
    if config_path.exists():
        raise FileExistsError(f"Config file already exists: {config_path}")
    config_path.write_text(DEFAULT_CONFIG_YAML, encoding="utf-8")
    return config_path


def load_config(path: Path | None = None) -> dict[str, Any]:
    """Load configuration from file.

    Args:
        path: Optional path to config file. Uses ~/.crawlopts.yml if not specified.

    Returns:
        Config dict. Defaults are returned when the file does not exist.

    Raises:
        ValueError: If the file is not valid YAML or has an invalid value.
    """
    config_path = path or get_config_path()

    # Start with defaults
    config = copy.deepcopy(DEFAULT_CONFIG)

    if not config_path.exists():
        return config

    try:
        with open(config_path, encoding="utf-8") as f:
            file_config = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in config file {config_path}: {e}") from e

    if not isinstance(file_config, dict):
        raise ValueError(f"Config file {config_path} must contain a mapping")

    config = _merge_dicts(config, file_config)
    _validate(config, config_path)

    if config.get("output_format") not in OUTPUT_FORMATS:
        raise ValueError(
            f"Invalid output_format {config.get('output_format')!r} "
            f"(expected one of: {', '.join(OUTPUT_FORMATS)})"
        )

    # Expand paths
    if config.get("cookie_file"):
        config["cookie_file"] = str(Path(config["cookie_file"]).expanduser())

    return config


def _validate(config: dict[str, Any], config_path: Path) -> None:
    """Check value types that the parsers and CLI rely on."""
    for key in ENTRY_KEYS:
        value = config.get(key)
        if value is None or isinstance(value, str):
            continue
        if not isinstance(value, list) or not all(
            item is None or isinstance(item, str) for item in value
        ):
            raise ValueError(
                f"Invalid {key} in config file {config_path}: "
                "expected a string or a list of strings"
            )

    cookie_file = config.get("cookie_file")
    if cookie_file is not None and not isinstance(cookie_file, str):
        raise ValueError(
            f"Invalid cookie_file in config file {config_path}: expected a path string"
        )


def merge_config(
    file_config: dict[str, Any], cli_overrides: dict[str, Any]
) -> dict[str, Any]:
    """Merge CLI overrides into file configuration.

    CLI overrides take precedence over file config.
    """
    return _merge_dicts(file_config, cli_overrides)


def _merge_dicts(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dictionaries. Override values take precedence."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _merge_dicts(result[key], value)
        else:
            result[key] = value
    return result


def entries_from_config(config: dict[str, Any], key: str) -> list[str]:
    """Return a config entry list, accepting a single string or None."""
    value = config.get(key)
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    return [str(item) for item in value if item is not None]
