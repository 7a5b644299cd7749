"""
TOML-based config file loading for headnum.

Searches for `.headnum.toml`, `headnum.toml`, or `pyproject.toml [tool.headnum]`
walking up from the current directory. Config values are merged with CLI flags
using three-way precedence: explicit CLI flags > config file > built-in defaults.

Example `headnum.toml`:

    start-level = 2
    depth = 3

    [[levels]]
    style = "chinese_upper"
    display-format = "{}、"

    [[levels]]
    style = "arabic"
    separator = "."

    [file-discovery]
    extend-exclude = ["drafts/"]
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, TypeVar, cast

from headnum.numbering.config_model import NumberingConfig

if sys.version_info >= (3, 11):
    import tomllib  # pyright: ignore[reportUnreachable]
else:
    import tomli as tomllib  # type: ignore[no-redef]  # pyright: ignore[reportUnreachable]


@dataclass
class HeadnumConfig:
    """
    Parsed config from a TOML file. Fields are `None` when not set in the config,
    allowing the merge logic to distinguish "not configured" from "explicitly set
    to default value".
    """

    # Numbering
    start_level: int | None = None
    depth: int | None = None
    prepend_parent_number: bool | None = None
    remove_existing: bool | None = None
    levels: list[dict[str, Any]] | None = None
    # File discovery
    include: list[str] | None = None
    extend_include: list[str] | None = None
    exclude: list[str] | None = None
    extend_exclude: list[str] | None = None
    files_max_size: int | None = None
    respect_gitignore: bool | None = None

    def numbering_config(self) -> NumberingConfig:
        """The numbering settings from this file, over the built-in defaults."""
        data: dict[str, Any] = {}
        for name in ("start_level", "depth", "prepend_parent_number", "remove_existing"):
            value = getattr(self, name)
            if value is not None:
                data[name] = value
        if self.levels is not None:
            data["level_configs"] = self.levels
        return NumberingConfig.from_dict(data)


# Config file search order (first match wins within each directory level)
_CONFIG_FILENAMES = [".headnum.toml", "headnum.toml", "pyproject.toml"]

_VALID_FIELDS = {f.name for f in fields(HeadnumConfig)}

# Sub-tables whose keys merge into the top level. `levels` is an array of tables
# and is kept as is.
_SECTIONS = {"numbering", "file-discovery", "file_discovery"}


def find_config_file(start_dir: Path) -> Path | None:
    """
    Walk up from `start_dir` looking for a config file. Returns the first
    found, or `None`. Search order per directory: `.headnum.toml` >
    `headnum.toml` > `pyproject.toml` (only if it has `[tool.headnum]`).
    """
    current = start_dir.resolve()
    while True:
        for filename in _CONFIG_FILENAMES:
            candidate = current / filename
            if candidate.is_file():
                if filename == "pyproject.toml":
                    if _pyproject_has_headnum_section(candidate):
                        return candidate
                else:
                    return candidate
        parent = current.parent
        if parent == current:
            break
        current = parent
    return None


def _pyproject_has_headnum_section(path: Path) -> bool:
    """Check if a pyproject.toml has a [tool.headnum] section."""
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
        return "headnum" in data.get("tool", {})
    except (tomllib.TOMLDecodeError, OSError):
        return False


def load_config(config_path: Path) -> HeadnumConfig:
    """
    Load a `HeadnumConfig` from a TOML file. Supports both standalone
    `headnum.toml` / `.headnum.toml` and `pyproject.toml` (extracts
    `[tool.headnum]`). TOML kebab-case keys are mapped to Python snake_case.
    Raises `ValueError` for invalid TOML.
    """
    try:
        data = tomllib.loads(config_path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        raise ValueError(f"Invalid config file {config_path}: {e}") from e

    if config_path.name == "pyproject.toml":
        data = data.get("tool", {}).get("headnum", {})

    return _parse_config_data(data)


def _parse_config_data(data: dict[str, Any]) -> HeadnumConfig:
    """Parse a flat or sectioned TOML dict into HeadnumConfig."""
    flat: dict[str, Any] = {}
    for key, value in data.items():
        if key in _SECTIONS and isinstance(value, dict):
            for sub_key, sub_value in cast(dict[str, Any], value).items():
                flat[sub_key] = sub_value
        else:
            flat[key] = value

    mapped: dict[str, Any] = {}
    for key, value in flat.items():
        snake_key = key.replace("-", "_")
        if snake_key in _VALID_FIELDS:
            mapped[snake_key] = value

    return HeadnumConfig(**mapped)


_T = TypeVar("_T")


def merge_cli_with_config(
    cli_opts: _T,
    config: HeadnumConfig | None,
    explicit_flags: set[str],
) -> _T:
    """
    Merge CLI options with config file settings.

    Precedence: explicit CLI flags > config file > built-in defaults.
    """
    if config is None:
        return cli_opts

    for cfg_field in fields(HeadnumConfig):
        cfg_value = getattr(config, cfg_field.name)
        if cfg_value is None:
            continue  # Not set in config

        if cfg_field.name in explicit_flags:
            continue

        if hasattr(cli_opts, cfg_field.name):
            setattr(cli_opts, cfg_field.name, cfg_value)

    return cli_opts
