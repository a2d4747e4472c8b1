"""Promptline CLI entry point.

Allows running via `python -m promptline` and provides the console script
defined in `pyproject.toml`.
"""

from __future__ import annotations

import logging
import os
import sys

from .constants import PromptConstants
from .version import get_version_string


def _escape_bytes(s: str) -> str:
    """Return a printable representation of raw key string."""
    return s.encode('unicode_escape').decode('ascii')


def _configure_logging() -> None:
    """Log to a file when PROMPTLINE_LOG is set; the terminal belongs to the prompt."""
    path = os.environ.get(PromptConstants.LOG_ENV_VAR)
    if not path:
        return
    logging.basicConfig(
        filename=path,
        level=logging.DEBUG,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )


def run_keyboard_test() -> None:
    """Print parsed key events until ESC is pressed."""
    from .terminal import BlessedSurface
    from .keyboard import KeyboardHandler, KeyEvent, KeyType

    print("Keyboard test mode - press keys to see parsed events.")
    print("Quit with ESC.")

    surface = BlessedSurface()
    surface.setup()
    kb = KeyboardHandler(surface)
    try:
        while True:
            ev: KeyEvent | None = kb.get_key_event(timeout=None)
            if not ev:
                continue
            if ev.key_type == KeyType.OTHER and ev.value in ('esc', 'escape'):
                print("Exiting keyboard test.", end="\r\n")
                break
            parts = [f"type={ev.key_type.value}", f"value={ev.value!r}", f"raw='{_escape_bytes(ev.raw)}'"]
            flags = [name for name, on in (('alt', ev.is_alt), ('ctrl', ev.is_ctrl), ('meta', ev.is_meta)) if on]
            if flags:
                parts.append(f"flags={'+'.join(flags)}")
            print(' '.join(parts), end="\r\n")
    finally:
        surface.cleanup()


def main() -> None:
    args = sys.argv[1:]
    if args and args[0] in ("--version", "-V"):
        print(get_version_string())
        return
    _configure_logging()
    if args and args[0] in ('--keytest', '--keyboard-test'):
        run_keyboard_test()
        return

    # Lazy import to avoid importing terminal deps for --version
    from .shell import Shell
    Shell(reflow_on_resize='--reflow-on-resize' in args).run()
    print("Goodbye!")


if __name__ == "__main__":  # pragma: no cover
    main()
