import os
from unittest.mock import MagicMock, patch

import blessed
import pytest
from promptline.keyboard import KeyEvent, KeyType
from promptline.layout import PromptStyle
from promptline.shell import Shell, echo_statement, is_complete

STYLE = PromptStyle(prompt="duckdb> ", continuation="   ...> ", wrap="   ..>> ",
                    prompt_width=8, continuation_width=8)

CTRL_D = KeyEvent(key_type=KeyType.REGULAR, value='d', raw='<Ctrl-d>', is_ctrl=True)
TERM = blessed.Terminal(kind='xterm-256color', force_styling=True)


def make_surface(width=80):
    surface = MagicMock()
    surface.term = TERM
    surface.current_column_count.return_value = width
    return surface


@pytest.fixture
def shell():
    with patch('promptline.shell.load_prompt_style', return_value=STYLE):
        sh = Shell(surface=make_surface(), execute=lambda text: f"ran {text.strip()}")
    sh.prompt.start_new()
    yield sh
    os.close(sh._resize_pipe_r)
    os.close(sh._resize_pipe_w)


def type_text(shell, text):
    for ch in text:
        shell.handle_key_event(KeyEvent.char(ch))


def written(surface):
    """All bytes and text sent to the surface, decoded."""
    out = []
    for name, args, _ in surface.method_calls:
        if name == 'write':
            out.append(args[0].decode('utf-8'))
        elif name == 'write_text':
            out.append(args[0])
    return ''.join(out)


def test_is_complete():
    assert is_complete("select 1;")
    assert is_complete("select 1;  \n")
    assert not is_complete("select 1")
    assert not is_complete("")


def test_echo_statement():
    assert echo_statement("select 1;\n") == "statement: 'select 1;'"


def test_typing_is_echoed(shell):
    type_text(shell, "sel")
    assert written(shell.surface) == "duckdb> sel"


def test_enter_on_incomplete_statement_continues(shell):
    type_text(shell, "select 1")
    shell.handle_key_event(KeyEvent.special(KeyType.ENTER))
    assert shell.prompt.collect() == "select 1\n"
    assert written(shell.surface).endswith("\r\n   ...> ")


def test_enter_on_complete_statement_submits(shell):
    type_text(shell, "select 1;")
    shell.handle_key_event(KeyEvent.special(KeyType.ENTER))
    assert shell.prompt.collect() == ""
    assert shell.prompt.cursor == 0
    out = written(shell.surface)
    assert out == ("duckdb> select 1;"
                   "\r\n   ...> "
                   "\r\x1b[Kran select 1;\r\n"
                   "duckdb> ")


def test_submit_from_middle_of_statement(shell):
    type_text(shell, "select 1;")
    shell.handle_key_event(KeyEvent.special(KeyType.LEFT))
    shell.handle_key_event(KeyEvent.special(KeyType.ENTER))
    out = written(shell.surface)
    # Cursor parks after the trailing ";" before the result is printed
    assert out.endswith("\x1b[1C\r\nran select 1\r\n;\r\nduckdb> ")
    assert shell.prompt.collect() == ""


def test_ctrl_d_on_empty_prompt_stops(shell):
    shell.running = True
    shell.handle_key_event(CTRL_D)
    assert not shell.running
    shell.surface.write_text.assert_called_once_with("\r\n")


def test_ctrl_d_with_text_is_ignored(shell):
    type_text(shell, "x")
    shell.running = True
    shell.handle_key_event(CTRL_D)
    assert shell.running
    assert shell.prompt.collect() == "x"


def test_resize_updates_width(shell):
    type_text(shell, "hello world")
    shell.surface.current_column_count.return_value = 12
    shell.handle_resize()
    assert shell.prompt.layout.width == 12
    # Without reflow the existing lines stay as they are
    assert shell.prompt.document.line_count() == 1


def test_resize_with_reflow_rewraps(shell):
    shell.reflow_on_resize = True
    type_text(shell, "hello world")
    shell.surface.current_column_count.return_value = 12
    shell.handle_resize()
    assert shell.prompt.document.text(soft_break="|") == "hel|lo |wor|ld"
    assert shell.prompt.collect() == "hello world"


def test_run_handles_resize_then_exits():
    surface = make_surface()
    with patch('promptline.shell.load_prompt_style', return_value=STYLE):
        sh = Shell(surface=surface)

    surface.current_column_count.return_value = 40
    with patch.object(sh.keyboard, 'get_key_event', return_value=CTRL_D):
        with patch('promptline.shell.select.select') as mock_select:
            mock_select.side_effect = [
                ([sh._resize_pipe_r], [], []),  # Resize pipe ready
                ([0], [], []),  # stdin ready
            ]
            os.write(sh._resize_pipe_w, b'R')
            sh.run()

    surface.setup.assert_called_once_with()
    surface.cleanup.assert_called_once_with()
    assert sh.prompt.layout.width == 40
    assert not sh.running
    assert written(surface).startswith("duckdb> ")
