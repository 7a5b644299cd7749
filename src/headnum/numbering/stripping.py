"""
Removal of existing heading numbers.

Stripping runs in two passes over a heading title:

1. A configured pass, built from the current per-level display formats and
   separators, that recognizes the prefixes the numbering engine writes
   (e.g. "1.2 ", "第一章 ", "(a) ") and removes them together with the following
   whitespace. Inside a wrapped format such as "第{}章" any numeral style is
   accepted and the whitespace may be missing ("第三章结论").

2. A generic fallback pass that repeatedly removes one leading numbering-like
   token, such as "1.", "(2)", "iv)", "A.", "一、" or "①", to catch hand-typed
   numbers and numbers written with an older configuration.

Known limitation: the fallback is deliberately aggressive, so a title that really
starts with something like "A. " or "2024 " loses that text. Neither pass ever
strips a title down to nothing.

Usage:
    from headnum.numbering.stripping import strip_heading_numbers

    strip_heading_numbers("# 1 Title\\n## 1.1 Sub", config)  # "# Title\\n## Sub"
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from headnum.numbering.config_model import PLACEHOLDER, LevelConfig, NumberingConfig
from headnum.numbering.headings import parse_heading
from headnum.numbering.number_styles import NumberStyle, parse_style

log = logging.getLogger(__name__)


# === Numeral classes ===

_DIGITS = r"\d+"
CJK_NUMERAL_CHARS = "零一二三四五六七八九十百千"
# Enclosed alphanumerics, enclosed CJK letters, and CJK compatibility blocks.
CIRCLED_RANGES = "①-⓿㈀-㋿㌀-㏿"

_STYLE_TOKENS: dict[NumberStyle, str] = {
    NumberStyle.arabic: _DIGITS,
    NumberStyle.alpha_lower: r"[a-z]{1,3}",
    NumberStyle.alpha_upper: r"[A-Z]{1,3}",
    NumberStyle.roman_lower: r"[ivxlcdm]+",
    NumberStyle.roman_upper: r"[IVXLCDM]+",
    NumberStyle.chinese_upper: rf"[{CJK_NUMERAL_CHARS}]+",
    NumberStyle.circled: rf"[{CIRCLED_RANGES}]+",
}

# Any numeral the engine can write in any style. Roman letters are latin letters.
ANY_NUMERAL = rf"(?:{_DIGITS}|[A-Za-z]+|[{CJK_NUMERAL_CHARS}]+|[{CIRCLED_RANGES}]+)"

# Separator class used when a level's separator is unset.
_GENERIC_SEPARATOR = r"[.)\-、,，:：]?"


def numeral_pattern(style: NumberStyle | str) -> str:
    """
    Pattern for one numeral of the given style. Decimal digits are always
    accepted, since out-of-range values render as decimal.
    """
    token = _STYLE_TOKENS[parse_style(style)]
    if token == _DIGITS:
        return token
    return rf"(?:{token}|{_DIGITS})"


def _split_format(level_config: LevelConfig) -> tuple[str, str, str]:
    return (level_config.display_format or PLACEHOLDER).partition(PLACEHOLDER)


def segment_pattern(level_config: LevelConfig) -> str:
    """
    Pattern for one level's segment followed by its (optional) separator.

    A placeholder wrapped in literal text ("第{}章", "({})") accepts a numeral of
    any style, so prefixes written before a style change still match. A bare
    placeholder only accepts the level's own style and decimal digits.
    """
    before, placeholder, after = _split_format(level_config)
    if placeholder:
        if before or after:
            numeral = ANY_NUMERAL
        else:
            numeral = numeral_pattern(level_config.style)
        segment = re.escape(before) + numeral + re.escape(after)
    else:
        # No placeholder: the format is a constant literal.
        segment = re.escape(before)

    separator = level_config.separator
    if separator is None:
        separator_part = _GENERIC_SEPARATOR
    elif separator == "":
        separator_part = ""
    else:
        separator_part = f"(?:{re.escape(separator)})?"
    return f"(?:{segment}){separator_part}"


def prefix_tail(level_config: LevelConfig) -> str:
    """
    Whitespace after a level's prefix. It is optional when the format closes the
    numeral with literal text ("第一章结论"), otherwise at least one space must
    separate the prefix from the title.
    """
    _before, placeholder, after = _split_format(level_config)
    if placeholder and after.strip():
        return r"\s*"
    return r"\s+(?=\S)"


def _prefix_body(segments: list[str]) -> str:
    """
    Prefix for the last level in `segments`. Parent segments are optional, since
    zero counters and `prepend_parent_number=False` both leave them out.
    """
    *parents, own = segments
    return "".join(f"(?:{segment})?" for segment in parents) + f"(?:{own})"


def _compile_prefix(alternatives: list[str]) -> re.Pattern[str]:
    return re.compile("^(?:" + "|".join(alternatives) + ")")


# === Fallback ===

_FALLBACK_TOKEN = (
    rf"(?:\d+|[IVXLCDM]+|[ivxlcdm]+|[A-Za-z]|[{CJK_NUMERAL_CHARS}]+|[{CIRCLED_RANGES}]+)"
)
_PUNCT = r"[.)\-、,，:：]"

FALLBACK_PATTERN = re.compile(
    r"^\s*(?:"
    rf"[(\[（【]{_FALLBACK_TOKEN}[)\]）】]"  # (1) [a] （一） 【iv】
    rf"|{_FALLBACK_TOKEN}[)\]）】]"  # 1) a) 一）
    rf"|[{CIRCLED_RANGES}]+"  # ① ㉑
    rf"|{_FALLBACK_TOKEN}(?:\.{_FALLBACK_TOKEN})+(?={_PUNCT}|\s)"  # 1.2 I.A
    rf"|(?:\d+|[{CJK_NUMERAL_CHARS}]+)(?={_PUNCT}|\s)"  # 1. 1 一、
    rf"|(?:[IVXLCDM]+|[ivxlcdm]+|[A-Za-z])(?={_PUNCT})"  # A. iv.
    r")[.)\-、,，:：\s]*"
)


def strip_fallback(title: str) -> str:
    """Repeatedly remove leading numbering-like tokens until nothing changes."""
    while True:
        stripped = FALLBACK_PATTERN.sub("", title, count=1).lstrip()
        if stripped == title or not stripped:
            return title
        title = stripped


# === Matcher ===


@dataclass(frozen=True)
class PrefixMatcher:
    """
    Compiled stripper for one configuration.

    `level_patterns` holds the configured pattern for each numbered heading level;
    `any_level_pattern` accepts the prefix of any numbered level and is used for
    deeper headings and titles stripped without a level. Both are empty when the
    configuration could not be turned into patterns, in which case only the
    fallback pass runs.
    """

    level_patterns: dict[int, re.Pattern[str]] = field(default_factory=dict)
    any_level_pattern: re.Pattern[str] | None = None
    start_level: int = 1

    @property
    def is_fallback(self) -> bool:
        return self.any_level_pattern is None

    def pattern_for(self, level: int | None) -> re.Pattern[str] | None:
        if level is None:
            return self.any_level_pattern
        if level in self.level_patterns:
            return self.level_patterns[level]
        if level < self.start_level:
            # Never numbered under this configuration.
            return None
        return self.any_level_pattern

    def strip(self, title: str, level: int | None = None) -> str:
        pattern = self.pattern_for(level)
        if pattern is not None:
            stripped = pattern.sub("", title, count=1)
            if stripped.strip():
                title = stripped
        return strip_fallback(title)


def build_prefix_matcher(config: NumberingConfig) -> PrefixMatcher:
    """
    Build the configured prefix patterns. Never raises: a malformed level config
    gives a fallback-only matcher.
    """
    count = min(config.depth, len(config.level_configs))
    if count <= 0:
        return PrefixMatcher(start_level=config.start_level)
    try:
        level_configs = config.level_configs[:count]
        segments = [segment_pattern(level_config) for level_config in level_configs]
        alternatives = [
            f"(?:{_prefix_body(segments[: i + 1])})+{prefix_tail(level_config)}"
            for i, level_config in enumerate(level_configs)
        ]
        level_patterns = {
            config.start_level + i: _compile_prefix([alternative])
            for i, alternative in enumerate(alternatives)
        }
        any_level_pattern = _compile_prefix(alternatives)
    except (re.error, TypeError, AttributeError, KeyError, ValueError) as e:
        log.debug("Using fallback heading number stripping, bad level config: %s", e)
        return PrefixMatcher(start_level=config.start_level)
    return PrefixMatcher(
        level_patterns=level_patterns,
        any_level_pattern=any_level_pattern,
        start_level=config.start_level,
    )


# === Public API ===


def strip_title(
    title: str,
    config: NumberingConfig,
    level: int | None = None,
    matcher: PrefixMatcher | None = None,
) -> str:
    """
    Remove any existing number prefix from a heading title. Pass the heading
    `level` when known; without it, a prefix of any numbered level is accepted.
    """
    if matcher is None:
        matcher = build_prefix_matcher(config)
    return matcher.strip(title, level)


def strip_heading_line(
    line: str, config: NumberingConfig, matcher: PrefixMatcher | None = None
) -> str:
    """Remove the number prefix from a heading line; other lines pass through."""
    heading = parse_heading(line)
    if heading is None:
        return line
    return heading.render(strip_title(heading.title, config, heading.level, matcher))


def strip_heading_numbers(text: str, config: NumberingConfig) -> str:
    """Remove number prefixes from every heading in a document."""
    config = config.snapshot()
    matcher = build_prefix_matcher(config)
    return "\n".join(strip_heading_line(line, config, matcher) for line in text.split("\n"))
