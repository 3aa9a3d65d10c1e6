import curses
import io

import pytest

from rainbowpath.core.errors import ConfigError, ResourceError
from rainbowpath.rendering.terminal import AnsiTerminal, TerminfoTerminal, create_terminal

FAKE_TERMINFO = {
    "setaf": b"<fg%d>",
    "setab": b"<bg%d>",
    "bold": b"<b>",
    "dim": None,
    "smul": b"<u>",
    "blink": b"<k>",
    "sgr0": b"<0>",
}


@pytest.fixture
def fake_curses(monkeypatch):
    """Stands in for the terminfo database with a 16 color entry."""
    state = {"colors": 16, "term": None}

    def setupterm(term=None, fd=-1):
        state["term"] = term

    monkeypatch.setattr(curses, "setupterm", setupterm)
    monkeypatch.setattr(curses, "tigetnum", lambda cap: state["colors"])
    monkeypatch.setattr(curses, "tigetstr", lambda cap: FAKE_TERMINFO[cap])
    monkeypatch.setattr(curses, "tparm", lambda cap, n: cap.replace(b"%d", str(n).encode()))
    return state


def test_ansi_sequences():
    stream = io.StringIO()
    term = AnsiTerminal(stream, color_count=256)
    term.bold()
    term.dim()
    term.underlined()
    term.blink()
    term.bg(17)
    term.fg(208)
    term.write("x")
    term.reset()
    assert stream.getvalue() == "\033[1m\033[2m\033[4m\033[5m\033[48;5;17m\033[38;5;208mx\033[0m"


@pytest.mark.parametrize("env,expected", [
    ({"TERM": "xterm-256color"}, 256),
    ({"TERM": "xterm", "COLORTERM": "truecolor"}, 256),
    ({"TERM": "xterm"}, 8),
    ({"TERM": "dumb"}, 8),
])
def test_ansi_color_detection(monkeypatch, env, expected):
    """
    DETECTION TEST: The color count follows $TERM and $COLORTERM even
    when the output is not a tty.
    """
    monkeypatch.delenv("COLORTERM", raising=False)
    for name, value in env.items():
        monkeypatch.setenv(name, value)
    assert AnsiTerminal(io.StringIO()).color_count() == expected


def test_terminfo_sequences(fake_curses):
    stream = io.StringIO()
    term = TerminfoTerminal(stream, term="fake-16color")
    assert fake_curses["term"] == "fake-16color"
    assert term.color_count() == 16

    term.bold()
    term.dim()
    term.underlined()
    term.bg(4)
    term.fg(12)
    term.write("x")
    term.reset()
    # the entry has no dim capability, so it emits nothing
    assert stream.getvalue() == "<b><u><bg4><fg12>x<0>"


def test_terminfo_setup_failure(monkeypatch):
    def broken(term=None, fd=-1):
        raise curses.error("could not find terminal")

    monkeypatch.setattr(curses, "setupterm", broken)
    with pytest.raises(ResourceError, match="Failed to set up terminal"):
        TerminfoTerminal(io.StringIO())


def test_terminfo_without_colors(fake_curses):
    fake_curses["colors"] = -1
    with pytest.raises(ResourceError):
        TerminfoTerminal(io.StringIO())


def test_create_terminal(fake_curses):
    assert isinstance(create_terminal("ansi", io.StringIO()), AnsiTerminal)
    assert isinstance(create_terminal("terminfo", io.StringIO()), TerminfoTerminal)
    with pytest.raises(ConfigError):
        create_terminal("vt52", io.StringIO())
