"""Configuration loading for wikiprojects."""

from pathlib import Path
from typing import Any

import yaml


# Default configuration values
DEFAULT_CONFIG: dict[str, Any] = {
    "catalogs": [],
    "include_builtin": True,
    "output": "text",
}

# Example config file content
DEFAULT_CONFIG_YAML = """\
# wikiprojects configuration
# Location: ~/.wikiprojects.yml

# Extra catalog files (YAML or JSON, mediawiki-projects-list format).
# Records override bundled records with the same name; later files win.
catalogs: []

# Load the catalog bundled with wikiprojects before the files above
include_builtin: true

# Output format: text or json
output: text
"""

OUTPUT_FORMATS = ("text", "json")


def get_config_path() -> Path:
    """Return the default config file path (~/.wikiprojects.yml)."""
    return Path.home() / ".wikiprojects.yml"


def init_config(path: Path | None = None) -> Path:
    """Write the example config file. Returns the path to the created file."""
    config_path = path or get_config_path()
    if config_path.exists():
        raise FileExistsError(f"Config file already exists: {config_path}")
    config_path.write_text(DEFAULT_CONFIG_YAML, encoding="utf-8")
    return config_path


def load_config(path: Path | None = None) -> dict[str, Any]:
    """Load configuration from file.

    A missing config file is not an error; the defaults are used.

    Args:
        path: Optional path to config file. Uses ~/.wikiprojects.yml if not specified.

    Returns:
        Config dict with defaults filled in
    """
    config_path = path or get_config_path()
    config = DEFAULT_CONFIG.copy()

    if not config_path.exists():
        return config

    try:
        with open(config_path, encoding="utf-8") as f:
            file_config = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in config file {config_path}: {e}") from e

    if not isinstance(file_config, dict):
        raise ValueError(f"Config file {config_path} must contain a mapping")

    config = merge_config(config, file_config)

    if config.get("output") not in OUTPUT_FORMATS:
        raise ValueError(
            f"Invalid output format {config.get('output')!r} in {config_path}, "
            f"expected one of: {', '.join(OUTPUT_FORMATS)}"
        )
    if isinstance(config.get("catalogs"), str):
        config["catalogs"] = [config["catalogs"]]

    return config


def merge_config(
    file_config: dict[str, Any], cli_overrides: dict[str, Any]
) -> dict[str, Any]:
    """Merge overrides into configuration. Override values take precedence."""
    result = file_config.copy()
    for key, value in cli_overrides.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = merge_config(result[key], value)
        else:
            result[key] = value
    return result


def catalog_paths(config: dict[str, Any]) -> list[Path]:
    """Return the configured extra catalog files as expanded paths."""
    return [Path(p).expanduser() for p in config.get("catalogs") or []]
