"""Tests for the ansi module."""

import os
from io import StringIO
from unittest.mock import patch

from regmsg.ansi import BOLD, DIM, RED, RESET, YELLOW, LogStyles, colorize, make_style, should_colorize


def test_make_style():
    prefix, suffix = make_style(YELLOW, DIM)
    assert prefix == "\x1b[33;2m"
    assert suffix == RESET


def test_make_style_no_codes():
    assert make_style() == ("", RESET)


def test_colorize_forced():
    with patch.dict(os.environ, {"FORCE_COLOR": "1", "NO_COLOR": ""}, clear=False):
        assert colorize("Error: boom", RED, BOLD, stream=StringIO()) == "\x1b[31;1mError: boom\x1b[0m"


def test_colorize_non_tty():
    with patch.dict(os.environ, {"NO_COLOR": "", "FORCE_COLOR": ""}, clear=False):
        assert colorize("plain", RED, stream=StringIO()) == "plain"


def test_no_color_wins():
    with patch.dict(os.environ, {"NO_COLOR": "1", "FORCE_COLOR": "1"}, clear=False):
        assert should_colorize() is False


def test_log_styles():
    assert LogStyles.WARNING == (YELLOW, DIM)
    assert LogStyles.CRITICAL == (RED, BOLD)
