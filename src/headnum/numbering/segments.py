"""
Composition of heading number prefixes from per-level segments.

A segment is one level's numeral wrapped in its display format, e.g. "(2)" for
format "({})". A prefix chains the segments from the first rendered level down to
the heading's own level, putting each level's separator between it and the next:

    levels:  H1 "{}" sep "."   H2 "({})" sep ""   H3 "{}" sep ""
    counters [2, 1, 3] at H3 -> "2.(1)3"
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from headnum.numbering.config_model import PLACEHOLDER, LevelConfig, NumberingConfig
from headnum.numbering.number_styles import format_number


def compose_segment(numeral: str, display_format: str) -> str:
    """
    Wrap a numeral in a display format. Only the first placeholder is replaced;
    a format without a placeholder is used verbatim.
    """
    if not display_format or display_format == PLACEHOLDER:
        return numeral
    return display_format.replace(PLACEHOLDER, numeral, 1)


def compose_prefix(
    level: int,
    counters: Sequence[int],
    config: NumberingConfig,
    overrides: Mapping[int, LevelConfig] | None = None,
) -> str:
    """
    Build the full number prefix for a heading at `level`.

    `counters` is indexed by heading level (index 0 unused). `overrides` maps a
    level-config index to a config used instead of the stored one, which is how
    previews show unsaved edits.
    """
    last = min(level, config.end_level)
    first = config.start_level
    if not config.prepend_parent_number and level > config.start_level:
        first = config.start_level + 1

    rendered: list[tuple[str, str]] = []
    for current in range(first, last + 1):
        index = current - config.start_level
        level_config = (overrides or {}).get(index) or config.level_config(index)
        counter = counters[current] if current < len(counters) else 0
        numeral = format_number(counter, level_config.style)
        if not numeral:
            # Zero counter (e.g. an H2 before any H1): no segment at all.
            continue
        segment = compose_segment(numeral, level_config.display_format)
        rendered.append((segment, level_config.separator or ""))

    parts: list[str] = []
    for i, (segment, separator) in enumerate(rendered):
        parts.append(segment)
        if i < len(rendered) - 1:
            parts.append(separator)
    return "".join(parts)


def preview_numbering(
    config: NumberingConfig,
    level: int,
    samples: Sequence[int] = (1, 2, 3),
    overrides: Mapping[int, LevelConfig] | None = None,
) -> list[str]:
    """
    Example prefixes for `level`: for each sample value, every counter from the
    start level down to `level` is set to that value (so 1.1, 2.2, 3.3).
    """
    previews: list[str] = []
    for sample in samples:
        counters = [0] * (max(level, config.end_level) + 1)
        for current in range(config.start_level, level + 1):
            counters[current] = sample
        previews.append(compose_prefix(level, counters, config, overrides))
    return previews
