"""
Heading numbering engine.

Walks a document line by line, keeping one counter per heading level:

- Non-heading lines pass through unchanged.
- Headings outside the configured level range only get their old numbers
  stripped (when enabled); counters are untouched.
- Headings in range are stripped (when enabled), then the counter for their level
  is advanced (deeper counters reset to zero) and a fresh prefix is written.

The engine is a pure text transform. Counters live in a `CounterVector` created
for each pass and returned with the result, so passes never leak state.

Usage:
    from headnum.numbering.engine import generate_heading_numbers

    generate_heading_numbers("# Title\\n## Sub", config)  # "# 1 Title\\n## 1.1 Sub"
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

from headnum.numbering.config_model import MAX_LEVEL, NumberingConfig
from headnum.numbering.headings import parse_heading
from headnum.numbering.segments import compose_prefix
from headnum.numbering.stripping import build_prefix_matcher


@dataclass
class CounterVector:
    """
    Per-level heading counters. Index 0 is unused; 1..8 are heading levels.

    Example:
        counters.advance(1)  # [_, 1, 0, 0, ...]
        counters.advance(2)  # [_, 1, 1, 0, ...]
        counters.advance(1)  # [_, 2, 0, 0, ...]
    """

    values: list[int] = field(default_factory=lambda: [0] * (MAX_LEVEL + 1))

    def advance(self, level: int) -> None:
        """Reset every deeper level to zero and increment `level`."""
        for deeper in range(level + 1, len(self.values)):
            self.values[deeper] = 0
        self.values[level] += 1

    def __getitem__(self, level: int) -> int:
        return self.values[level]

    def __len__(self) -> int:
        return len(self.values)

    def __iter__(self) -> Iterator[int]:
        return iter(self.values)


@dataclass
class NumberingResult:
    """Output of one numbering pass."""

    text: str
    counters: CounterVector
    numbered: int  # Headings that received a prefix


def number_headings(text: str, config: NumberingConfig) -> NumberingResult:
    """
    Number every in-range heading in `text`. Lines are split and rejoined on "\\n".
    """
    config = config.snapshot()
    matcher = build_prefix_matcher(config) if config.remove_existing else None
    counters = CounterVector()
    numbered = 0
    new_lines: list[str] = []

    for line in text.split("\n"):
        heading = parse_heading(line)
        if heading is None:
            new_lines.append(line)
            continue

        title = matcher.strip(heading.title, heading.level) if matcher else heading.title

        if not config.in_range(heading.level):
            new_lines.append(heading.render(title))
            continue

        counters.advance(heading.level)
        prefix = compose_prefix(heading.level, counters.values, config)
        if prefix:
            title = f"{prefix} {title}"
            numbered += 1
        new_lines.append(heading.render(title))

    return NumberingResult(text="\n".join(new_lines), counters=counters, numbered=numbered)


def generate_heading_numbers(text: str, config: NumberingConfig) -> str:
    """Number every in-range heading in `text` and return the new text."""
    return number_headings(text, config).text
