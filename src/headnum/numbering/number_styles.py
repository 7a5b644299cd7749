"""
Numeral styles for heading numbers.

Each style maps a positive counter value to the text shown in a heading prefix:

- arabic: 1, 2, 3, 10, 100
- alpha_lower / alpha_upper: a, b, ... z, aa, ab, ... zzz
- roman_lower / roman_upper: i, ii, iii, iv / I, II, III, IV
- chinese_upper: 一, 二, ... 一十, 一十一, ... 九百九十九
- circled: ①, ②, ... ⑳, ㉑, ... ㊿

Styles with a bounded domain (alpha, chinese_upper, circled) fall back to the
decimal rendering outside it. A counter of zero or less renders as "".

Usage:
    from headnum.numbering.number_styles import NumberStyle, format_number

    format_number(27, NumberStyle.alpha_lower)  # "aa"
"""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum


class NumberStyle(str, Enum):
    """Numeral style for one heading level."""

    arabic = "arabic"  # 1, 2, 3, 10, 100
    alpha_lower = "alpha_lower"  # a, b, c, ... z, aa, ab
    alpha_upper = "alpha_upper"  # A, B, C, ... Z, AA, AB
    roman_lower = "roman_lower"  # i, ii, iii, iv, v
    roman_upper = "roman_upper"  # I, II, III, IV, V
    chinese_upper = "chinese_upper"  # 一, 二, 三, ... 一十
    circled = "circled"  # ①, ②, ③

    @property
    def code(self) -> str:
        """Short code used in stored settings ("1", "a", "A", "i", "I", "一", "①")."""
        return _STYLE_CODES[self]


_STYLE_CODES: dict[NumberStyle, str] = {
    NumberStyle.arabic: "1",
    NumberStyle.alpha_lower: "a",
    NumberStyle.alpha_upper: "A",
    NumberStyle.roman_lower: "i",
    NumberStyle.roman_upper: "I",
    NumberStyle.chinese_upper: "一",
    NumberStyle.circled: "①",
}

_CODES_TO_STYLES = {code: style for style, code in _STYLE_CODES.items()}


def parse_style(value: str | NumberStyle) -> NumberStyle:
    """
    Parse a style from its name ("roman_upper", "roman-upper") or its short
    code ("I"). Raises `ValueError` for anything else.
    """
    if isinstance(value, NumberStyle):
        return value
    if value in _CODES_TO_STYLES:
        return _CODES_TO_STYLES[value]
    name = value.strip().replace("-", "_").lower()
    try:
        return NumberStyle(name)
    except ValueError:
        valid = ", ".join(s.value for s in NumberStyle)
        raise ValueError(f"Unknown numeral style: {value!r} (expected one of: {valid})") from None


# === Domain limits ===

ALPHA_MAX = 18278  # "zzz" = 26 + 26**2 + 26**3
CHINESE_MAX = 999
CIRCLED_MAX = 50


# === Number Conversion Functions ===


def int_to_roman(n: int) -> str:
    """Convert an integer to uppercase Roman numeral string."""
    if n <= 0:
        raise ValueError("Roman numerals must be positive")
    result = []
    for value, numeral in [
        (1000, "M"),
        (900, "CM"),
        (500, "D"),
        (400, "CD"),
        (100, "C"),
        (90, "XC"),
        (50, "L"),
        (40, "XL"),
        (10, "X"),
        (9, "IX"),
        (5, "V"),
        (4, "IV"),
        (1, "I"),
    ]:
        while n >= value:
            result.append(numeral)
            n -= value
    return "".join(result)


def int_to_alpha(n: int) -> str:
    """Convert an integer to uppercase alphabetic string (A, B, ..., Z, AA, AB, ...)."""
    if n <= 0:
        raise ValueError("Alpha values must be positive")
    result = []
    while n > 0:
        n -= 1
        result.append(chr(ord("A") + (n % 26)))
        n //= 26
    return "".join(reversed(result))


CHINESE_DIGITS = "零一二三四五六七八九"
CHINESE_UNITS = ["", "十", "百", "千"]


def int_to_chinese(n: int) -> str:
    """
    Convert 1..999 to an uppercase Chinese numeral, e.g. 10 -> "一十",
    101 -> "一百零一", 110 -> "一百一十". Other values render as decimal.
    """
    if n <= 0 or n > CHINESE_MAX:
        return str(n)
    if n < 10:
        return CHINESE_DIGITS[n]

    digits = [int(d) for d in str(n)]
    result = ""
    for i, digit in enumerate(digits):
        unit_index = len(digits) - 1 - i
        if digit == 0:
            # Only one zero glyph per run, never leading.
            if result and not result.endswith(CHINESE_DIGITS[0]):
                result += CHINESE_DIGITS[0]
        else:
            result += CHINESE_DIGITS[digit] + CHINESE_UNITS[unit_index]
    return result.rstrip(CHINESE_DIGITS[0])


def int_to_circled(n: int) -> str:
    """
    Convert 1..50 to an enclosed numeral glyph. Unicode splits these across three
    runs: ①..⑳ (U+2460), ㉑..㉟ (U+3251) and ㊱..㊿ (U+32B1). Other values render
    as decimal.
    """
    if 1 <= n <= 20:
        return chr(0x2460 + n - 1)
    if 21 <= n <= 35:
        return chr(0x3251 + n - 21)
    if 36 <= n <= CIRCLED_MAX:
        return chr(0x32B1 + n - 36)
    return str(n)


def _alpha(n: int) -> str:
    return int_to_alpha(n) if n <= ALPHA_MAX else str(n)


_FORMATTERS: dict[NumberStyle, Callable[[int], str]] = {
    NumberStyle.arabic: str,
    NumberStyle.alpha_lower: lambda n: _alpha(n).lower(),
    NumberStyle.alpha_upper: _alpha,
    NumberStyle.roman_lower: lambda n: int_to_roman(n).lower(),
    NumberStyle.roman_upper: int_to_roman,
    NumberStyle.chinese_upper: int_to_chinese,
    NumberStyle.circled: int_to_circled,
}


def format_number(value: int, style: NumberStyle) -> str:
    """
    Render a counter value in the given style. Returns "" for `value <= 0`, which
    callers treat as "no segment".
    """
    if value <= 0:
        return ""
    return _FORMATTERS[parse_style(style)](value)
