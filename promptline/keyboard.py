"""Keyboard input handling using curtsies-style tokens."""

from typing import Optional
from dataclasses import dataclass
from enum import Enum


class KeyType(Enum):
    """Key classifications the prompt understands."""
    REGULAR = "regular"  # A printable character
    ENTER = "enter"
    BACKSPACE = "backspace"
    TAB = "tab"
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    OTHER = "other"  # Anything else (escape, function keys, ...)


@dataclass
class KeyEvent:
    """Represents a parsed keyboard event, independent of the input library."""
    key_type: KeyType
    value: str  # The character for REGULAR keys, otherwise the key name
    raw: str = ""  # The raw token the event was parsed from
    is_alt: bool = False
    is_ctrl: bool = False
    is_meta: bool = False

    @property
    def has_modifier(self) -> bool:
        return self.is_alt or self.is_ctrl or self.is_meta

    @classmethod
    def char(cls, ch: str) -> "KeyEvent":
        """Convenience constructor for an unmodified printable key."""
        return cls(key_type=KeyType.REGULAR, value=ch, raw=ch)

    @classmethod
    def special(cls, key_type: KeyType) -> "KeyEvent":
        return cls(key_type=key_type, value=key_type.value, raw=f"<{key_type.value.upper()}>")


_NAMED_KEYS = {
    'left': KeyType.LEFT,
    'right': KeyType.RIGHT,
    'up': KeyType.UP,
    'down': KeyType.DOWN,
    'enter': KeyType.ENTER,
    'return': KeyType.ENTER,
    'backspace': KeyType.BACKSPACE,
    'tab': KeyType.TAB,
}

# Control characters terminals send for named keys
_CONTROL_KEYS = {
    'j': KeyType.ENTER,
    'm': KeyType.ENTER,
    'i': KeyType.TAB,
    'h': KeyType.BACKSPACE,
}


def parse_key(key) -> KeyEvent:
    """Parse a curtsies key token into a KeyEvent.

    Args:
        key: curtsies token such as 'a', '<LEFT>', '<Ctrl-j>' or '<Esc+b>'

    Returns:
        Parsed KeyEvent
    """
    key_str = str(key)

    # Curtsies-style key names like '<LEFT>', '<Ctrl-x>', '<Alt-left>'
    if len(key_str) > 2 and key_str.startswith('<') and key_str.endswith('>'):
        name = key_str[1:-1]
        # Support both '-' and '+' as modifier separators (e.g., '<Esc+u>')
        lower = name.lower().replace('+', '-')
        parts = lower.split('-') if '-' in lower else [lower]
        mods = set(parts[:-1])
        base = parts[-1]
        is_alt = 'alt' in mods or 'esc' in mods
        is_ctrl = 'ctrl' in mods
        is_meta = 'meta' in mods

        if is_ctrl and base in _CONTROL_KEYS and not (is_alt or is_meta):
            key_type = _CONTROL_KEYS[base]
            return KeyEvent(key_type=key_type, value=key_type.value, raw=key_str)
        if base in _NAMED_KEYS:
            return KeyEvent(key_type=_NAMED_KEYS[base], value=base, raw=key_str,
                            is_alt=is_alt, is_ctrl=is_ctrl, is_meta=is_meta)
        # Map named whitespace tokens to regular characters
        if base in ('space', 'spacebar', 'spc'):
            return KeyEvent(key_type=KeyType.REGULAR, value=' ', raw=key_str,
                            is_alt=is_alt, is_ctrl=is_ctrl, is_meta=is_meta)
        if len(base) == 1 and mods:
            return KeyEvent(key_type=KeyType.REGULAR, value=base, raw=key_str,
                            is_alt=is_alt, is_ctrl=is_ctrl, is_meta=is_meta)
        # Fallback: escape, function keys, home/end and unknown tokens
        return KeyEvent(key_type=KeyType.OTHER, value=base, raw=key_str,
                        is_alt=is_alt, is_ctrl=is_ctrl, is_meta=is_meta)

    if len(key_str) == 1:
        if key_str in ('\r', '\n'):
            return KeyEvent(key_type=KeyType.ENTER, value='enter', raw=key_str)
        if key_str == '\t':
            return KeyEvent(key_type=KeyType.TAB, value='tab', raw=key_str)
        if key_str in ('\x7f', '\x08'):
            return KeyEvent(key_type=KeyType.BACKSPACE, value='backspace', raw=key_str)
        if key_str == '\x1b':
            return KeyEvent(key_type=KeyType.OTHER, value='escape', raw=key_str)
        o = ord(key_str)
        if 1 <= o <= 26:  # Ctrl-A .. Ctrl-Z
            return KeyEvent(key_type=KeyType.REGULAR, value=chr(ord('a') + o - 1),
                            raw=key_str, is_ctrl=True)
        return KeyEvent(key_type=KeyType.REGULAR, value=key_str, raw=key_str)

    # Empty or multi-character payloads are not single keys
    return KeyEvent(key_type=KeyType.OTHER, value=key_str, raw=key_str)


class KeyboardHandler:
    """Reads key tokens from a terminal interface and parses them."""

    def __init__(self, terminal_interface):
        """Initialize with a terminal interface."""
        self.terminal = terminal_interface

    def get_key_event(self, timeout: Optional[float] = None) -> Optional[KeyEvent]:
        """Get next key event, or None if no key arrived before the timeout."""
        key = self.terminal.get_key(timeout)
        if not key:
            return None
        return parse_key(key)
