"""Test the blessed-backed terminal surface and label measurement."""

import io
import re
from unittest.mock import MagicMock, patch

import blessed
import pytest
from promptline.layout import Layout, PromptStyle, default_labels
from promptline.terminal import BlessedSurface

_SGR = re.compile(r'\x1b\[[0-9;]*m')
TERM = blessed.Terminal(kind='xterm-256color', force_styling=True)


def make_term(width=80):
    term = MagicMock()
    term.width = width
    term.length.side_effect = lambda text: len(_SGR.sub('', text))
    return term


class BinaryStream(io.StringIO):
    """Text stream exposing a bytes buffer, like sys.stdout."""

    def __init__(self):
        super().__init__()
        self.buffer = io.BytesIO()


def test_write_goes_to_binary_buffer():
    term = make_term()
    term.stream = BinaryStream()
    surface = BlessedSurface(term)
    surface.write("duckdb> é".encode('utf-8'))
    assert term.stream.buffer.getvalue() == "duckdb> é".encode('utf-8')


def test_write_falls_back_to_text_stream():
    term = make_term()
    term.stream = io.StringIO()
    surface = BlessedSurface(term)
    surface.write(b"\x1b[2K\r")
    assert term.stream.getvalue() == "\x1b[2K\r"


def test_column_count_comes_from_terminal():
    surface = BlessedSurface(make_term(width=42))
    assert surface.current_column_count() == 42


def test_get_key_without_input_returns_none():
    surface = BlessedSurface(make_term())
    assert surface.get_key(timeout=0) is None


def test_setup_tolerates_curtsies_failure():
    term = make_term()
    term.stream = io.StringIO()
    surface = BlessedSurface(term)
    with patch('curtsies.Input', side_effect=OSError("not a tty")):
        surface.setup()
    assert surface._curtsies_input is None
    surface.cleanup()


class FakeInput:
    """Stands in for curtsies.Input."""

    def __init__(self, keys):
        self.keys = list(keys)
        self.entered = False
        self.exit_args = None

    def __enter__(self):
        self.entered = True
        return self

    def __exit__(self, *args):
        self.exit_args = args

    def __next__(self):
        return self.keys.pop(0)


def test_setup_and_cleanup_enter_and_exit_raw_mode():
    term = make_term()
    term.stream = io.StringIO()
    surface = BlessedSurface(term)
    fake_input = FakeInput(['<LEFT>'])
    with patch('curtsies.Input', return_value=fake_input):
        surface.setup()
    assert fake_input.entered

    assert surface.get_key() == '<LEFT>'

    surface.cleanup()
    assert fake_input.exit_args == (None, None, None)
    assert surface._curtsies_input is None


def test_default_labels_are_bold_on_a_styled_terminal():
    prompt, continuation, wrap = default_labels(TERM)
    assert prompt == TERM.bold + "duckdb" + TERM.normal + "> "
    assert continuation == TERM.bold + "   ..." + TERM.normal + "> "
    assert wrap == TERM.bold + "   .." + TERM.normal + ">> "
    assert default_labels() == ("duckdb> ", "   ...> ", "   ..>> ")


def test_measured_style_strips_escape_sequences():
    style = PromptStyle.measured(TERM)
    assert style.prompt.startswith(TERM.bold)
    assert style.prompt_width == 8
    assert style.continuation_width == 8
    assert style.tab_width == 2


def test_measured_style_rejects_mismatched_wrap_label():
    with pytest.raises(ValueError):
        PromptStyle.measured(TERM, prompt="> ", continuation="... ", wrap=">> ")


def test_layout_geometry():
    style = PromptStyle(prompt="> ", continuation="... ", wrap="..> ",
                        prompt_width=2, continuation_width=4)
    layout = Layout(width=10, style=style)
    assert layout.label_width(0) == 2
    assert layout.label_width(3) == 4
    assert layout.room(0, 0) == 7
    assert layout.room(1, 5) == 0
    assert not layout.is_full(0, 6)
    assert layout.is_full(0, 7)
    with pytest.raises(ValueError):
        Layout(width=-1)
