"""
Heading numbering core: numeral styles, prefix composition, the numbering
engine, and prefix stripping.
"""

from headnum.numbering.config_model import LevelConfig, NumberingConfig
from headnum.numbering.engine import (
    CounterVector,
    NumberingResult,
    generate_heading_numbers,
    number_headings,
)
from headnum.numbering.number_styles import NumberStyle, format_number, parse_style
from headnum.numbering.segments import compose_prefix, compose_segment, preview_numbering
from headnum.numbering.stripping import (
    build_prefix_matcher,
    strip_heading_line,
    strip_heading_numbers,
    strip_title,
)

__all__ = [
    "CounterVector",
    "LevelConfig",
    "NumberStyle",
    "NumberingConfig",
    "NumberingResult",
    "build_prefix_matcher",
    "compose_prefix",
    "compose_segment",
    "format_number",
    "generate_heading_numbers",
    "number_headings",
    "parse_style",
    "preview_numbering",
    "strip_heading_line",
    "strip_heading_numbers",
    "strip_title",
]
