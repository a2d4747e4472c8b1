"""Promptline - the line-editing core of a multi-line terminal prompt."""

from .document import Document, BreakKind
from .keyboard import KeyEvent, KeyType, parse_key
from .layout import Layout, PromptStyle
from .prompt import Prompt
from .screen import ScreenCodec

__all__ = [
    'Document',
    'BreakKind',
    'KeyEvent',
    'KeyType',
    'parse_key',
    'Layout',
    'PromptStyle',
    'Prompt',
    'ScreenCodec',
]
