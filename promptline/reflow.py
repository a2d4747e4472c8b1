"""Reflow engine: regenerate soft breaks and redraw the whole prompt."""

from __future__ import annotations

import logging
from typing import Callable, Optional

from .document import BreakKind, Document
from .layout import Layout
from .output import PendingOutput
from .screen import CR, CRLF, ScreenCodec

logger = logging.getLogger(__name__)

Mutation = Callable[[Document], None]


def erase_prompt(document: Document, screen: ScreenCodec, output: PendingOutput, cursor: int) -> int:
    """Clear every rendered prompt line and leave the cursor at the start.

    ``cursor`` must describe the current screen row of the terminal
    cursor.  Returns the new logical cursor (always 0).
    """
    line = document.line_of_offset(cursor)
    line_count = document.line_count()
    if line_count == 1:
        output.write(screen.clear_line)
        return 0

    # Move to the last line, then clear upwards
    output.write(CR)
    output.write(screen.down(line_count - 1 - line))
    output.write(screen.clear_eol)
    for _ in range(1, line_count):
        output.write(screen.up(1) + screen.clear_eol)
    return 0


def rebuild(document: Document, layout: Layout) -> tuple[Document, str]:
    """Recompute soft breaks for ``document``.

    Returns the rebuilt document and the output that draws it from the
    first label on an empty line.
    """
    style = layout.style
    rebuilt = Document()
    out = [style.prompt]
    line_width = style.prompt_width

    for ch, kind in document.items():
        if kind is BreakKind.SOFT:
            # Regenerated below, never carried over
            continue
        if kind is BreakKind.HARD:
            rebuilt.insert_break(len(rebuilt), BreakKind.HARD)
            out.append(CRLF + style.continuation)
            line_width = style.continuation_width
            continue
        rebuilt.insert_char(len(rebuilt), ch)
        out.append(ch)
        line_width += 1
        if line_width + 1 >= layout.width:
            rebuilt.insert_break(len(rebuilt), BreakKind.SOFT)
            out.append(CRLF + style.wrap)
            line_width = style.continuation_width

    return rebuilt, "".join(out)


def reflow(document: Document, layout: Layout, screen: ScreenCodec, output: PendingOutput,
           cursor: int, mutate: Optional[Mutation] = None) -> tuple[Document, int]:
    """Erase the prompt, apply ``mutate`` and redraw everything.

    Returns the rebuilt document and the cursor, which is left at its end.
    The caller moves the cursor back to the offset it wants.
    """
    erase_prompt(document, screen, output, cursor)
    if mutate is not None:
        mutate(document)
    rebuilt, redraw = rebuild(document, layout)
    logger.debug(f"Reflowed {len(rebuilt)} chars into {rebuilt.line_count()} lines at width {layout.width}")
    output.write(redraw)
    return rebuilt, len(rebuilt)
