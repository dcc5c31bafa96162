"""Tests for console message output."""

import io
from unittest.mock import patch

import pytest
from rich.console import Console

from crawlopts.console import error, info, success, warning


@pytest.mark.parametrize("emit", [info, success, warning, error])
def test_message_text_is_not_markup(emit):
    """User text containing rich tags is printed literally."""
    buffer = io.StringIO()
    with patch("crawlopts.console.console", Console(file=buffer, width=200)):
        emit("Cookie 'a=[b]; [red]x[/red]': invalid")
    assert "Cookie 'a=[b]; [red]x[/red]': invalid" in buffer.getvalue()
