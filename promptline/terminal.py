"""Terminal surface using Blessed for output and Curtsies for input."""

from __future__ import annotations

import sys
import select
from typing import Optional, Protocol

import blessed


class TerminalSurface(Protocol):
    """What the prompt needs from a terminal."""

    def write(self, data: bytes) -> None: ...

    def current_column_count(self) -> int: ...


class BlessedSurface:
    """Terminal surface backed by a blessed Terminal.

    The prompt renders inline (no fullscreen), so setup only enters raw
    input mode through curtsies.
    """

    def __init__(self, terminal: Optional[blessed.Terminal] = None):
        """Initialize with a terminal instance (or create one)."""
        self.term = terminal or blessed.Terminal()
        self._curtsies_input: Optional[object] = None
        self._curtsies_active: bool = False

    def setup(self):
        """Prepare raw key input."""
        if self._curtsies_input is None:
            try:
                from curtsies import Input  # type: ignore
                self._curtsies_input = Input(keynames='curtsies')  # type: ignore
                self._curtsies_input.__enter__()
                self._curtsies_active = True
            except Exception:
                # Justification: curtsies may fail to initialize in some
                # environments (CI, limited terminals, no tty). Fall back to
                # a no-input mode without crashing.
                self._curtsies_input = None
                self._curtsies_active = False

    def cleanup(self):
        """Restore the terminal."""
        if self._curtsies_input is not None:
            try:
                if self._curtsies_active:
                    # Exit raw mode context
                    self._curtsies_input.__exit__(None, None, None)  # type: ignore
            except Exception:
                # Justification: teardown should never crash the app. Any
                # failure to exit raw mode is non-fatal at this point.
                pass
            finally:
                self._curtsies_input = None
                self._curtsies_active = False
        self.flush()

    def write(self, data: bytes) -> None:
        """Write raw output bytes to the terminal stream."""
        stream = self.term.stream
        buffer = getattr(stream, 'buffer', None)
        if buffer is not None:
            # Keep ordering with anything already written as text
            stream.flush()
            buffer.write(data)
            buffer.flush()
        else:
            stream.write(data.decode('utf-8'))
            stream.flush()

    def write_text(self, text: str) -> None:
        self.write(text.encode('utf-8'))

    def flush(self) -> None:
        self.term.stream.flush()

    def current_column_count(self) -> int:
        """Terminal width in columns."""
        return self.term.width

    def get_key(self, timeout=None):
        """Get a single key token from the user.

        Args:
            timeout: Timeout in seconds (None for blocking, 0 for non-blocking)

        Returns:
            A curtsies key token string, or None on timeout or without input
        """
        if self._curtsies_input is None:
            return None
        if timeout is None:
            return str(next(self._curtsies_input))
        t = 0.0 if timeout == 0 else float(timeout)
        r, _, _ = select.select([sys.stdin], [], [], t)
        if not r:
            return None
        return str(next(self._curtsies_input))
