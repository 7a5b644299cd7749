"""
Automatic renumbering after edits to heading lines.

`AutoNumberer.on_change` is subscribed to an editor's change notifications. When
auto-generation is enabled and an edit touches a heading line, it schedules one
regeneration after a short delay. Another qualifying edit before the delay has
elapsed cancels the pending run and starts the delay again, so a burst of typing
results in a single pass.
"""

from __future__ import annotations

import asyncio
import logging
import re
from collections.abc import Callable

from headnum.editor.commands import generate_heading_numbers
from headnum.editor.surface import ChangeEvent, EditorSurface
from headnum.numbering.config_model import NumberingConfig

log = logging.getLogger(__name__)

DEFAULT_DELAY = 0.5  # seconds

# Looser than a full heading match: "## " counts even before a title is typed.
_HEADING_START = re.compile(r"^#{1,8}\s")


def is_heading_modified(editor: EditorSurface, event: ChangeEvent | None) -> bool:
    """
    Whether any changed line is a heading line. Changed lines that no longer exist
    are skipped; any other failure while inspecting the editor counts as "no
    heading changed".
    """
    try:
        if event is None or not event.changes:
            return False
        for change in event.changes:
            for line in range(change.from_line, change.to_line + 1):
                try:
                    text = editor.get_line(line)
                except IndexError:
                    # Deleted by the same edit.
                    continue
                if _HEADING_START.match(text):
                    return True
        return False
    except Exception:
        log.exception("Could not check edited lines for headings")
        return False


class AutoNumberer:
    """
    Debounced regeneration. `get_config` is called each time, so changes to the
    settings take effect on the next edit.

    Must be used from within a running asyncio event loop.
    """

    def __init__(
        self, get_config: Callable[[], NumberingConfig], delay: float = DEFAULT_DELAY
    ) -> None:
        self._get_config = get_config
        self._delay = delay
        self._pending: asyncio.Task[None] | None = None
        self.runs: int = 0

    @property
    def pending(self) -> bool:
        return self._pending is not None and not self._pending.done()

    def on_change(self, editor: EditorSurface, event: ChangeEvent) -> None:
        if not self._get_config().auto_generate_on_change:
            return
        if is_heading_modified(editor, event):
            self.schedule(editor)

    def schedule(self, editor: EditorSurface) -> None:
        """Start (or restart) the delay before regenerating `editor`."""
        self.cancel()
        self._pending = asyncio.get_running_loop().create_task(self._regenerate_later(editor))

    def cancel(self) -> None:
        if self._pending is not None and not self._pending.done():
            self._pending.cancel()
        self._pending = None

    async def wait(self) -> None:
        """Wait for the pending regeneration, if any, to finish."""
        task = self._pending
        if task is not None:
            try:
                await task
            except asyncio.CancelledError:
                pass

    async def _regenerate_later(self, editor: EditorSurface) -> None:
        await asyncio.sleep(self._delay)
        try:
            count = generate_heading_numbers(editor, self._get_config())
        except Exception:
            log.exception("Automatic heading numbering failed")
            return
        self.runs += 1
        log.debug("Automatically numbered %s headings", count)
