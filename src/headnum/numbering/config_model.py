"""
Configuration model for heading numbering.

`NumberingConfig` holds the global knobs plus one `LevelConfig` per numbered
heading level. Index `i` of `level_configs` always corresponds to heading level
`start_level + i`.

The serialized shape (used by the JSON settings store and TOML config files) is:

    {
        "startLevel": 1,
        "depth": 3,
        "removeExisting": true,
        "prependParentNumber": true,
        "autoGenerateOnChange": false,
        "levelConfigs": [
            {"style": "1", "displayFormat": "{}", "separator": "."},
            ...
        ]
    }

Keys may also be given in kebab-case (`start-level`, `display-format`), which is
what TOML files use.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any, cast

from headnum.numbering.number_styles import NumberStyle, parse_style

MAX_LEVEL = 8

# Placeholder replaced by the formatted numeral in a display format.
PLACEHOLDER = "{}"


@dataclass
class LevelConfig:
    """
    Numbering settings for one heading level.

    `separator` is appended between this level's segment and the next deeper one.
    An empty separator means none; `None` means unset, which the stripper treats
    as "any common punctuation".
    """

    style: NumberStyle = NumberStyle.arabic
    display_format: str = PLACEHOLDER
    separator: str | None = ""

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"style": self.style.code, "displayFormat": self.display_format}
        if self.separator is not None:
            data["separator"] = self.separator
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> LevelConfig:
        norm = _normalize_keys(data)
        return cls(
            style=parse_style(norm.get("style", NumberStyle.arabic)),
            display_format=norm.get("display_format") or PLACEHOLDER,
            separator=norm.get("separator"),
        )


# Used by the prefix composer when a level has no config entry at all.
MISSING_LEVEL_CONFIG = LevelConfig(
    style=NumberStyle.arabic, display_format=PLACEHOLDER, separator="."
)


def _default_level_configs() -> list[LevelConfig]:
    styles = ["1", "a", "i", "A", "I", "一", "1", "a"]
    return [LevelConfig(style=parse_style(code)) for code in styles]


@dataclass
class NumberingConfig:
    """
    Global numbering settings. Defaults number all eight levels starting at H1,
    strip existing numbers before generating, and prefix deeper levels with their
    parents' numbers.
    """

    start_level: int = 1
    depth: int = MAX_LEVEL
    prepend_parent_number: bool = True
    remove_existing: bool = True
    auto_generate_on_change: bool = False
    level_configs: list[LevelConfig] = field(default_factory=_default_level_configs)

    @property
    def end_level(self) -> int:
        """Deepest numbered heading level (may exceed 8, which no heading reaches)."""
        return self.start_level + self.depth - 1

    def in_range(self, level: int) -> bool:
        return self.start_level <= level <= self.end_level

    def level_config(self, index: int) -> LevelConfig:
        """Config for `level_configs[index]`, or the composer default if missing."""
        if 0 <= index < len(self.level_configs):
            return self.level_configs[index]
        return MISSING_LEVEL_CONFIG

    def set_start_level(self, start_level: int) -> None:
        _check_level_range("start_level", start_level)
        self.start_level = start_level

    def set_depth(self, depth: int) -> None:
        """Set the depth, appending default level configs so every level has one."""
        _check_level_range("depth", depth)
        self.depth = depth
        while len(self.level_configs) < depth:
            self.level_configs.append(LevelConfig())

    def snapshot(self) -> NumberingConfig:
        """Independent copy, so one numbering pass sees a consistent config."""
        return copy.deepcopy(self)

    def to_dict(self) -> dict[str, Any]:
        return {
            "startLevel": self.start_level,
            "depth": self.depth,
            "removeExisting": self.remove_existing,
            "prependParentNumber": self.prepend_parent_number,
            "autoGenerateOnChange": self.auto_generate_on_change,
            "levelConfigs": [lc.to_dict() for lc in self.level_configs],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> NumberingConfig:
        """
        Build a config from stored data, merged over the defaults. Unknown keys are
        ignored; invalid styles or levels raise `ValueError`.
        """
        norm = _normalize_keys(data)
        config = cls()
        if "start_level" in norm:
            config.set_start_level(int(norm["start_level"]))
        if "level_configs" in norm:
            raw_levels = cast(list[dict[str, Any]], norm["level_configs"])
            config.level_configs = [LevelConfig.from_dict(item) for item in raw_levels]
        if "depth" in norm:
            config.set_depth(int(norm["depth"]))
        else:
            config.set_depth(config.depth)
        for key in ("prepend_parent_number", "remove_existing", "auto_generate_on_change"):
            if key in norm:
                setattr(config, key, bool(norm[key]))
        return config


# Stored settings use camelCase (and the older "removeExisting" name); TOML uses kebab-case.
_KEY_ALIASES: dict[str, str] = {
    "startlevel": "start_level",
    "prependparentnumber": "prepend_parent_number",
    "removeexisting": "remove_existing",
    "removeexistingongenerate": "remove_existing",
    "autogenerateonchange": "auto_generate_on_change",
    "levelconfigs": "level_configs",
    "levels": "level_configs",
    "displayformat": "display_format",
    "format": "display_format",
}


def _normalize_keys(data: dict[str, Any]) -> dict[str, Any]:
    result: dict[str, Any] = {}
    for key, value in data.items():
        flat = key.replace("-", "").replace("_", "").lower()
        result[_KEY_ALIASES.get(flat, flat)] = value
    return result


def _check_level_range(name: str, value: int) -> None:
    if not 1 <= value <= MAX_LEVEL:
        raise ValueError(f"{name} must be between 1 and {MAX_LEVEL}, got {value}")
