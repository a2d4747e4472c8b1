"""Interactive demo shell around the prompt buffer."""

from __future__ import annotations

import logging
import os
import select
import signal
from typing import Callable, Optional

from .constants import PromptConstants
from .keyboard import KeyboardHandler, KeyEvent, KeyType
from .prompt import Prompt
from .screen import CRLF
from .settings import load_prompt_style
from .terminal import BlessedSurface

logger = logging.getLogger(__name__)


def is_complete(text: str) -> bool:
    """Trivial completeness rule: the statement ends with a terminator."""
    return text.rstrip().endswith(PromptConstants.STATEMENT_TERMINATOR)


def echo_statement(text: str) -> str:
    return f"statement: {text.strip()!r}"


class Shell:
    """Reads keys, feeds the prompt and submits complete statements."""

    def __init__(self, surface: Optional[BlessedSurface] = None,
                 execute: Callable[[str], str] = echo_statement,
                 reflow_on_resize: bool = False):
        self.surface = surface or BlessedSurface()
        self.keyboard = KeyboardHandler(self.surface)
        self.prompt = Prompt(style=load_prompt_style(self.surface.term),
                             width=self.surface.current_column_count(),
                             term=self.surface.term)
        self.execute = execute
        self.reflow_on_resize = reflow_on_resize
        self.running = False
        self._resize_pipe_r, self._resize_pipe_w = os.pipe()

    def _handle_resize(self, signum, frame):
        """Handle terminal resize signal."""
        del signum, frame  # Unused
        # Write to pipe to wake up select()
        os.write(self._resize_pipe_w, b'R')

    def handle_key_event(self, key_event: KeyEvent) -> None:
        """Process one key event and flush the resulting output."""
        if key_event.is_ctrl and key_event.value == 'd' and not self.prompt.collect():
            self.running = False
            self.surface.write_text(CRLF)
            return
        self.prompt.consume(key_event)
        if key_event.key_type == KeyType.ENTER and is_complete(self.prompt.collect()):
            self.submit()
        self.prompt.flush(self.surface)

    def submit(self) -> None:
        """Run the collected statement and start a new prompt."""
        text = self.prompt.collect()
        logger.info(f"Submitting statement of {len(text)} chars")
        self.prompt.move_cursor_to_end()
        self.prompt.flush(self.surface)
        doc = self.prompt.document
        if doc.line_length(doc.line_count() - 1) == 0:
            # Result replaces the empty continuation line
            lead = self.prompt.screen.clear_line
        else:
            lead = CRLF
        result = self.execute(text)
        self.surface.write_text(lead + result.replace("\n", CRLF) + CRLF)
        self.prompt.start_new()

    def handle_resize(self) -> None:
        width = self.surface.current_column_count()
        self.prompt.configure(width, reflow=self.reflow_on_resize)
        self.prompt.flush(self.surface)

    def run(self) -> None:
        """Run the shell loop until Ctrl-D on an empty prompt."""
        self.surface.setup()
        self.running = True
        original_winch_handler = signal.signal(signal.SIGWINCH, self._handle_resize)
        try:
            self.prompt.start_new()
            self.prompt.flush(self.surface)
            while self.running:
                ready, _, _ = select.select([0, self._resize_pipe_r], [], [])
                if self._resize_pipe_r in ready:
                    os.read(self._resize_pipe_r, 1024)
                    self.handle_resize()
                elif 0 in ready:
                    key_event = self.keyboard.get_key_event(timeout=0)
                    if key_event:
                        self.handle_key_event(key_event)
        except KeyboardInterrupt:
            pass
        finally:
            signal.signal(signal.SIGWINCH, original_winch_handler)
            os.close(self._resize_pipe_r)
            os.close(self._resize_pipe_w)
            self.surface.cleanup()
