"""
Editor integration: the editor interface, the generate/remove commands, and the
debounced auto-numbering trigger.
"""

from headnum.editor.auto_trigger import AutoNumberer, is_heading_modified
from headnum.editor.commands import COMMANDS, generate_heading_numbers, remove_heading_numbers
from headnum.editor.surface import ChangeEvent, EditorSurface, LineRange, Position, TextBuffer

__all__ = [
    "COMMANDS",
    "AutoNumberer",
    "ChangeEvent",
    "EditorSurface",
    "LineRange",
    "Position",
    "TextBuffer",
    "generate_heading_numbers",
    "is_heading_modified",
    "remove_heading_numbers",
]
