"""Unit tests for key decoding and the POSIX keyboard handler."""

from __future__ import annotations

import sys

import pytest

from pomotask_cli.models.focus import keyboard as keyboard_mod
from pomotask_cli.models.focus.keyboard import KeyboardHandler, decode_keys


# ---------------------------------------------------------------------------
# decode_keys
# ---------------------------------------------------------------------------


class TestDecodeKeys:
    def test_printable_characters(self):
        assert decode_keys("ab?") == ["a", "b", "?"]

    @pytest.mark.parametrize(
        "data, expected",
        [
            ("\r", "enter"),
            ("\n", "enter"),
            ("\t", "tab"),
            ("\x7f", "backspace"),
            ("\x08", "backspace"),
            ("\x03", "ctrl+c"),
            ("\x15", "ctrl+u"),
        ],
    )
    def test_control_characters(self, data, expected):
        assert decode_keys(data) == [expected]

    @pytest.mark.parametrize(
        "data, expected",
        [
            ("\x1b[A", "up"),
            ("\x1b[B", "down"),
            ("\x1bOC", "right"),
            ("\x1bOD", "left"),
            ("\x1b[Z", "shift+tab"),
        ],
    )
    def test_escape_sequences(self, data, expected):
        assert decode_keys(data) == [expected]

    def test_lone_escape(self):
        assert decode_keys("\x1b") == ["escape"]

    def test_escape_followed_by_key(self):
        assert decode_keys("\x1bq") == ["escape", "q"]

    def test_mixed_burst(self):
        assert decode_keys("j\x1b[Bk\r") == ["j", "down", "k", "enter"]

    def test_empty(self):
        assert decode_keys("") == []


# ---------------------------------------------------------------------------
# KeyboardHandler
# ---------------------------------------------------------------------------


@pytest.mark.skipif(sys.platform == "win32", reason="POSIX terminal handling")
class TestKeyboardHandler:
    @pytest.fixture
    def term(self, mocker):
        mocker.patch.object(keyboard_mod.sys, "stdin").fileno.return_value = 7
        attrs = [0, 0, 0, 0xFFFF, 0, 0, []]
        tcgetattr = mocker.patch.object(
            keyboard_mod.termios, "tcgetattr", side_effect=lambda fd: list(attrs)
        )
        tcsetattr = mocker.patch.object(keyboard_mod.termios, "tcsetattr")
        setcbreak = mocker.patch.object(keyboard_mod.tty, "setcbreak")
        return tcgetattr, tcsetattr, setcbreak

    def test_setup_disables_signal_keys(self, term):
        _, tcsetattr, setcbreak = term
        handler = KeyboardHandler()
        setcbreak.assert_called_once_with(7)
        fd, when, attrs = tcsetattr.call_args.args
        assert fd == 7
        assert when == keyboard_mod.termios.TCSANOW
        assert not attrs[3] & keyboard_mod.termios.ISIG
        assert handler.old_settings is not None

    def test_stop_restores_settings_once(self, term):
        _, tcsetattr, _ = term
        handler = KeyboardHandler()
        tcsetattr.reset_mock()
        handler.stop()
        handler.stop()
        tcsetattr.assert_called_once()
        assert tcsetattr.call_args.args[1] == keyboard_mod.termios.TCSADRAIN
        assert handler.old_settings is None

    def test_setup_without_tty(self, mocker):
        mocker.patch.object(keyboard_mod.sys, "stdin").fileno.return_value = 7
        mocker.patch.object(
            keyboard_mod.termios, "tcgetattr", side_effect=keyboard_mod.termios.error("not a tty")
        )
        tcsetattr = mocker.patch.object(keyboard_mod.termios, "tcsetattr")
        handler = KeyboardHandler()
        assert handler.old_settings is None
        handler.stop()
        tcsetattr.assert_not_called()

    def test_get_keys_reads_everything(self, term, mocker):
        mocker.patch.object(keyboard_mod.select, "select", return_value=([7], [], []))
        mocker.patch.object(keyboard_mod.os, "read", return_value=b"jk\x1b[A")
        handler = KeyboardHandler()
        assert handler.get_keys() == ["j", "k", "up"]

    def test_get_keys_when_idle(self, term, mocker):
        mocker.patch.object(keyboard_mod.select, "select", return_value=([], [], []))
        read = mocker.patch.object(keyboard_mod.os, "read")
        handler = KeyboardHandler()
        assert handler.get_keys() == []
        read.assert_not_called()

    def test_get_key_buffers_remaining(self, term, mocker):
        select = mocker.patch.object(
            keyboard_mod.select, "select", return_value=([7], [], [])
        )
        mocker.patch.object(keyboard_mod.os, "read", return_value=b"ab")
        handler = KeyboardHandler()
        assert handler.get_key() == "a"
        select.return_value = ([], [], [])
        assert handler.get_key() == "b"
        assert handler.get_key() is None

    def test_ctrl_c_is_a_key(self, term, mocker):
        mocker.patch.object(keyboard_mod.select, "select", return_value=([7], [], []))
        mocker.patch.object(keyboard_mod.os, "read", return_value=b"\x03")
        assert KeyboardHandler().get_keys() == ["ctrl+c"]
