"""Prompt controller: the public face of the line editor."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional

from .commands import CommandRegistry
from .cursor import move_cursor, step_left, step_right
from .document import BreakKind, Document
from .keyboard import KeyEvent
from .layout import Layout, PromptStyle
from .output import PendingOutput
from .reflow import Mutation, erase_prompt, rebuild, reflow
from .screen import CRLF, ScreenCodec
from .constants import PromptConstants

logger = logging.getLogger(__name__)


class Prompt:
    """Multi-line prompt buffer.

    Owns the document being composed, the cursor offset and the output
    not yet written to the terminal.  Every edit updates all three; the
    caller flushes the output and decides when the collected text is a
    complete command.
    """

    def __init__(self, style: Optional[PromptStyle] = None,
                 width: int = PromptConstants.DEFAULT_TERMINAL_WIDTH,
                 command_registry: Optional[CommandRegistry] = None, term=None):
        self._layout = Layout(width=width, style=style or PromptStyle())
        self._screen = ScreenCodec(term)
        self._document = Document()
        self._cursor = 0
        self._output = PendingOutput()
        # Set when the width changed without a redraw; lines may be too long until the next reflow
        self._stale_layout = False
        self.command_registry = command_registry or CommandRegistry()

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def document(self) -> Document:
        return self._document

    @property
    def layout(self) -> Layout:
        return self._layout

    @property
    def screen(self) -> ScreenCodec:
        return self._screen

    @property
    def pending(self) -> str:
        """Output accumulated since the last flush."""
        return self._output.getvalue()

    # --- Caller-facing surface ---

    def start_new(self) -> None:
        """Reset to an empty prompt showing the first line label."""
        self._output.clear()
        self._document = Document()
        self._cursor = 0
        self._stale_layout = False
        self._output.write(self._layout.style.prompt)

    def configure(self, width: int, reflow: bool = False) -> None:
        """Record the terminal width.

        The prompt is not redrawn unless ``reflow`` is set, so an already
        wrapped prompt keeps its old line breaks until the next full
        reflow.
        """
        if width == self._layout.width:
            return
        logger.debug(f"Terminal width changed from {self._layout.width} to {width}")
        self._layout = replace(self._layout, width=width)
        if len(self._document):
            self._stale_layout = True
        if reflow:
            self.reflow()

    def consume(self, key_event: KeyEvent) -> bool:
        """Dispatch a key event to the matching edit operation.

        Returns:
            True if the event was handled, False if it was ignored
        """
        handled = self.command_registry.execute(self, key_event)
        self._check_invariants()
        return handled

    def flush(self, surface) -> None:
        """Write pending output to the terminal surface and clear it."""
        data = self._output.drain()
        if data:
            surface.write(data)

    def collect(self) -> str:
        """Return the composed text; soft wraps are invisible to the caller."""
        return self._document.text(soft_break="")

    # --- Edit operations ---

    def insert_char(self, ch: str) -> None:
        """Insert a character at the cursor, wrapping if necessary."""
        if ch == "\n":
            self.insert_newline()
            return
        doc = self._document
        if self._cursor == len(doc):
            # Appending only touches the last line
            line = doc.line_of_offset(self._cursor)
            if self._layout.is_full(line, doc.line_length(line)):
                doc.insert_break(self._cursor, BreakKind.SOFT)
                self._output.write(CRLF + self._layout.style.wrap)
                self._cursor += 1
            doc.insert_char(self._cursor, ch)
            self._cursor += 1
            self._output.write(ch)
        else:
            pos = self._cursor
            target = self._content_index(pos) + 1
            self._reflow(lambda d: d.insert_char(pos, ch))
            self._restore_cursor(target)

    def insert_newline(self) -> None:
        """Insert a hard break at the cursor."""
        pos = self._cursor
        if pos == len(self._document):
            self._document.insert_break(pos, BreakKind.HARD)
            self._output.write(CRLF + self._layout.style.continuation)
            self._cursor += 1
            return
        # Text after the cursor may wrap differently on its new line.  The
        # erase counts the rows as drawn, before the break exists.
        target = self._content_index(pos) + 1
        self._reflow(lambda d: d.insert_break(pos, BreakKind.HARD))
        self._restore_cursor(target)

    def erase_previous_char(self) -> None:
        """Backspace."""
        pos = self._cursor
        if pos == 0:
            return
        kind = self._document.break_at(pos - 1)
        if kind is BreakKind.HARD:
            # Joins two lines, following lines must be reflowed
            target = self._content_index(pos - 1)
            self._reflow(lambda d: d.remove_range(pos - 1, pos))
        elif kind is BreakKind.SOFT:
            # A wrap marker has no content; remove the character before it too
            begin = max(pos, 2) - 2
            target = self._content_index(begin)
            self._reflow(lambda d: d.remove_range(begin, pos))
        elif pos == len(self._document):
            self._output.write(self._screen.erase_previous)
            self._document.remove_range(pos - 1, pos)
            self._cursor -= 1
            return
        else:
            target = self._content_index(pos - 1)
            self._reflow(lambda d: d.remove_range(pos - 1, pos))
        self._restore_cursor(target)

    def insert_tab(self) -> None:
        """Insert up to ``tab_width`` spaces without ever wrapping."""
        doc = self._document
        pos = self._cursor
        line = doc.line_of_offset(pos)
        room = self._layout.room(line, doc.line_length(line))
        if pos != len(doc):
            # A redrawn line reaching the last column gets a wrap marker
            room -= 1
        count = min(room, self._layout.style.tab_width)
        if count <= 0:
            return
        if pos == len(doc):
            for _ in range(count):
                doc.insert_char(self._cursor, " ")
                self._cursor += 1
            self._output.write(" " * count)
        else:
            target = self._content_index(pos) + count

            def insert_spaces(d: Document) -> None:
                for _ in range(count):
                    d.insert_char(pos, " ")

            self._reflow(insert_spaces)
            self._restore_cursor(target)

    def move_cursor_left(self) -> None:
        self._cursor = step_left(self._document, self._layout, self._screen, self._output, self._cursor)

    def move_cursor_right(self) -> None:
        self._cursor = step_right(self._document, self._layout, self._screen, self._output, self._cursor)

    def move_cursor_to_end(self) -> None:
        """Park the cursor after the last character, e.g. before submitting."""
        self._cursor = move_cursor(self._document, self._layout, self._screen, self._output,
                                   self._cursor, len(self._document))

    def reflow(self) -> None:
        """Redraw the whole prompt at the current width.

        Nothing is emitted when the line breaks are already correct.
        """
        rebuilt, redraw = rebuild(self._document, self._layout)
        self._stale_layout = False
        if rebuilt == self._document:
            return
        target = self._content_index(self._cursor)
        erase_prompt(self._document, self._screen, self._output, self._cursor)
        self._output.write(redraw)
        self._document = rebuilt
        self._cursor = len(rebuilt)
        self._restore_cursor(target)

    # --- Internals ---

    def _reflow(self, mutate: Optional[Mutation] = None) -> None:
        self._document, self._cursor = reflow(
            self._document, self._layout, self._screen, self._output, self._cursor, mutate
        )
        self._stale_layout = False

    def _content_index(self, offset: int) -> int:
        return offset - self._document.soft_breaks_before(offset)

    def _restore_cursor(self, content_index: int) -> None:
        """Navigate to the offset holding ``content_index`` user characters before it."""
        target = self._document.offset_of_content(content_index)
        self._cursor = move_cursor(self._document, self._layout, self._screen, self._output, self._cursor, target)

    def _check_invariants(self) -> None:
        assert 0 <= self._cursor <= len(self._document), "cursor out of range"
        if __debug__ and not self._stale_layout:
            layout = self._layout
            # Labels alone may not fit on absurdly narrow terminals
            if layout.width > max(layout.style.prompt_width, layout.style.continuation_width) + 1:
                for line in range(self._document.line_count()):
                    assert layout.label_width(line) + self._document.line_length(line) < layout.width, \
                        f"line {line} exceeds terminal width {layout.width}"
