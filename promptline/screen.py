"""Screen codec.

Encodes the handful of terminal primitives the prompt needs: relative
cursor motion, carriage return and line clearing.  The terminal is never
addressed absolutely.  Escape sequences come from the blessed terminal,
so they follow its terminfo entry.
"""

from __future__ import annotations

from typing import Optional

import blessed

CR = "\r"
CRLF = "\r\n"


class ScreenCodec:
    """Relative motion and clearing sequences for one terminal."""

    def __init__(self, term: Optional[blessed.Terminal] = None):
        self.term = term or blessed.Terminal()

    # Counts are always passed; the uncounted cursor-down capability is a
    # bare line feed on xterm.

    def up(self, n: int = 1) -> str:
        """Move the cursor up ``n`` rows."""
        return self.term.move_up(n) if n > 0 else ""

    def down(self, n: int = 1) -> str:
        """Move the cursor down ``n`` rows."""
        return self.term.move_down(n) if n > 0 else ""

    def left(self, n: int = 1) -> str:
        return self.term.move_left(n) if n > 0 else ""

    def right(self, n: int = 1) -> str:
        return self.term.move_right(n) if n > 0 else ""

    def vertical(self, delta: int) -> str:
        """Move down for a positive delta, up for a negative one."""
        return self.down(delta) if delta > 0 else self.up(-delta)

    def horizontal(self, delta: int) -> str:
        """Move right for a positive delta, left for a negative one."""
        return self.right(delta) if delta > 0 else self.left(-delta)

    @property
    def clear_eol(self) -> str:
        return self.term.clear_eol

    @property
    def clear_line(self) -> str:
        """Clear the current row, leaving the cursor in column 0."""
        return CR + self.term.clear_eol

    @property
    def erase_previous(self) -> str:
        """Backspace, overwrite with a blank, backspace again."""
        back = self.term.move_left
        return f"{back} {back}"
