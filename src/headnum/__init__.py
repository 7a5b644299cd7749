"""
headnum: automatic multi-level heading numbers for Markdown documents.
"""

from headnum.numbering import (
    LevelConfig,
    NumberingConfig,
    NumberStyle,
    generate_heading_numbers,
    number_headings,
    strip_heading_numbers,
)

__all__ = [
    "LevelConfig",
    "NumberStyle",
    "NumberingConfig",
    "generate_heading_numbers",
    "number_headings",
    "strip_heading_numbers",
]
