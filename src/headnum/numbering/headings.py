"""Line-level heading classification."""

from __future__ import annotations

import re
from dataclasses import dataclass

HEADING_MARKER = "#"

# 1-8 markers, whitespace, then a non-empty title.
HEADING_PATTERN = re.compile(r"^(#{1,8})\s+(\S.*)$")


@dataclass(frozen=True)
class HeadingLine:
    """A parsed heading line, e.g. "## 1.2 Details" -> level 2, title "1.2 Details"."""

    markers: str
    title: str

    @property
    def level(self) -> int:
        return len(self.markers)

    def render(self, title: str | None = None) -> str:
        return f"{self.markers} {self.title if title is None else title}"


def parse_heading(line: str) -> HeadingLine | None:
    """Parse a heading line, or return None for any other line."""
    match = HEADING_PATTERN.match(line)
    if not match:
        return None
    return HeadingLine(markers=match.group(1), title=match.group(2))


def is_heading(line: str) -> bool:
    return HEADING_PATTERN.match(line) is not None
