"""Cursor navigation.

Translates logical offsets into screen rows and columns and emits the
relative motion needed to move the terminal cursor between them.
"""

from __future__ import annotations

from .document import Document
from .layout import Layout
from .output import PendingOutput
from .screen import CR, ScreenCodec


def line_and_column(document: Document, offset: int) -> tuple[int, int]:
    """Return the (line, column) of ``offset``; column excludes the label."""
    line = document.line_of_offset(offset)
    return line, offset - document.offset_of_line_start(line)


def screen_position(document: Document, layout: Layout, offset: int) -> tuple[int, int]:
    """Return the (row, column) on screen relative to the first prompt row."""
    line, column = line_and_column(document, offset)
    return line, layout.label_width(line) + column


def move_cursor(document: Document, layout: Layout, screen: ScreenCodec, output: PendingOutput,
                src: int, dst: int) -> int:
    """Move from ``src`` to ``dst``, emitting the minimal motion.

    Returns the new cursor offset.
    """
    src_row, src_col = screen_position(document, layout, src)
    dst_row, dst_col = screen_position(document, layout, dst)
    output.write(screen.vertical(dst_row - src_row))
    output.write(screen.horizontal(dst_col - src_col))
    return dst


def step_left(document: Document, layout: Layout, screen: ScreenCodec, output: PendingOutput,
              cursor: int) -> int:
    """Move one character left, wrapping to the end of the previous line."""
    if cursor == 0:
        return cursor
    if document.break_at(cursor - 1) is not None:
        line = document.line_of_offset(cursor - 1)
        output.write(CR + screen.up(1))
        output.write(screen.right(layout.label_width(line) + document.line_length(line)))
    else:
        output.write(screen.left(1))
    return cursor - 1


def step_right(document: Document, layout: Layout, screen: ScreenCodec, output: PendingOutput,
               cursor: int) -> int:
    """Move one character right, wrapping to the start of the next line."""
    if cursor == len(document):
        return cursor
    if document.break_at(cursor) is not None:
        output.write(CR + screen.down(1))
        output.write(screen.right(layout.style.continuation_width))
    else:
        output.write(screen.right(1))
    return cursor + 1
