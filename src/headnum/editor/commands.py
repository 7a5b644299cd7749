"""
The two user commands, applied to an editor.

Each command reads the whole document once and writes it back once, so the host
sees a single edit it can undo as a unit.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from headnum.editor.surface import EditorSurface
from headnum.numbering.config_model import NumberingConfig
from headnum.numbering.engine import number_headings
from headnum.numbering.stripping import strip_heading_numbers


def generate_heading_numbers(
    editor: EditorSurface, config: NumberingConfig, preserve_cursor: bool = True
) -> int:
    """
    Renumber all headings in the editor. Returns the number of headings that
    received a prefix.
    """
    cursor = editor.get_cursor() if preserve_cursor else None
    result = number_headings(editor.get_full_text(), config)
    editor.set_full_text(result.text)
    if cursor is not None:
        editor.set_cursor(cursor)
    return result.numbered


def remove_heading_numbers(editor: EditorSurface, config: NumberingConfig) -> None:
    """Strip number prefixes from all headings in the editor."""
    editor.set_full_text(strip_heading_numbers(editor.get_full_text(), config))


@dataclass(frozen=True)
class Command:
    id: str
    name: str
    run: Callable[[EditorSurface, NumberingConfig], object]


COMMANDS: dict[str, Command] = {
    command.id: command
    for command in [
        Command("headnum-generate", "Generate heading numbers", generate_heading_numbers),
        Command("headnum-remove", "Remove heading numbers", remove_heading_numbers),
    ]
}
