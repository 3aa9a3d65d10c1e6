import io

import pytest

from rainbowpath.core.config import Config
from rainbowpath.core.engine import RainbowPathEngine, compact_path
from rainbowpath.core.errors import OverrideIndexError
from rainbowpath.core.models import Override
from rainbowpath.indexing.indexers import IndexerKind, RandomSource, djb2
from rainbowpath.parsing.style_parser import parse_palette, parse_style
from rainbowpath.rendering.terminal import AnsiTerminal

RESET = "\033[0m"


def ansi_256(stream):
    return AnsiTerminal(stream, color_count=256)


def ansi_8(stream):
    return AnsiTerminal(stream, color_count=8)


def fg(color, text):
    return f"\033[38;5;{color}m{text}{RESET}"


def render(config, factory=ansi_256, rng=None):
    return RainbowPathEngine(config, terminal_factory=factory, rng=rng).render()


def test_scenario_sequential_two_colors():
    """
    SCENARIO TEST: Segments cycle through the palette, every separator
    takes the single separator style, and a newline ends the line.
    """
    config = Config(path="/home/alice/docs", path_palette=parse_palette("fg=1;fg=2"),
                    separator_palette=parse_palette("fg=7"))
    sep = fg(7, "/")
    assert render(config) == sep + fg(1, "home") + sep + fg(2, "alice") + sep + fg(1, "docs") + "\n"


def test_scenario_default_separator_palette():
    config = Config(path="/a", path_palette=parse_palette("fg=1"))
    assert render(config) == f"\033[1m\033[38;5;239m/{RESET}" + fg(1, "a") + "\n"
    assert render(config, ansi_8) == f"\033[2m\033[38;5;7m/{RESET}" + fg(1, "a") + "\n"


def test_scenario_last_segment_override():
    """
    SCENARIO TEST: override[-1] = bold only touches the final segment.
    """
    config = Config(path="a/b/c", path_palette=parse_palette("fg=1;fg=2"),
                    separator_palette=parse_palette("fg=7"), new_line=False,
                    path_overrides=[Override(-1, parse_style("bold"))])
    sep = fg(7, "/")
    expected = fg(1, "a") + sep + fg(2, "b") + sep + f"\033[1m\033[38;5;1mc{RESET}"
    assert render(config) == expected


def test_scenario_compaction(monkeypatch, tmp_path):
    monkeypatch.setenv("HOME", str(tmp_path))
    config = Config(path=f"{tmp_path}/projects", compact=True, new_line=False,
                    path_palette=parse_palette("fg=3"), separator_palette=parse_palette("fg=7"))
    assert render(config) == fg(3, "~") + fg(7, "/") + fg(3, "projects")


@pytest.mark.parametrize("path,home,expected", [
    ("/home/alice", "/home/alice", "~"),
    ("/home/alice/docs", "/home/alice", "~/docs"),
    ("/home/alicebob", "/home/alice", "/home/alicebob"),
    ("/srv/home/alice", "/home/alice", "/srv/home/alice"),
])
def test_compact_path(path, home, expected):
    assert compact_path(path, home) == expected


def test_strip_leading_and_output_separator():
    config = Config(path="//usr/lib", strip_leading=True, separator=" > ", new_line=False,
                    path_palette=parse_palette("fg=1"), separator_palette=parse_palette("fg=7"))
    assert render(config) == fg(1, "usr") + fg(7, " > ") + fg(1, "lib")


def test_attribute_emission_order():
    config = Config(path="x", new_line=False,
                    path_palette=parse_palette("fg=1,bg=2,blink,underlined,dim,bold"))
    assert render(config) == "\033[1m\033[2m\033[4m\033[5m\033[48;5;2m\033[38;5;1mx" + RESET


def test_bash_escape_markers():
    config = Config(path="x", bash_escape=True, new_line=False, path_palette=parse_palette("fg=1"))
    assert render(config) == "\\[\033[38;5;1m\\]x\\[\033[0m\\]"


def test_separator_overrides_and_hash_method():
    config = Config(path="/a/b", new_line=False,
                    path_palette=parse_palette("fg=1;fg=2;fg=3"),
                    separator_palette=parse_palette("fg=7;fg=8"),
                    separator_indexer=IndexerKind.HASH,
                    path_indexer=IndexerKind.HASH,
                    separator_overrides=[Override(-1, parse_style("underlined"))])
    output = render(config)
    # djb2('/') % 2 == 0 for every separator, whatever the position
    assert output.startswith(fg(7, "/"))
    assert f"\033[4m\033[38;5;7m/{RESET}" in output


def test_random_method_uses_the_given_source():
    config = Config(path="a/b/c/d", new_line=False, path_indexer=IndexerKind.RANDOM,
                    path_palette=parse_palette("fg=1;fg=2;fg=3"), separator_palette=parse_palette("fg=7"))
    first = render(config, rng=RandomSource(seed=7))
    assert first == render(config, rng=RandomSource(seed=7))


def test_out_of_range_override_writes_nothing():
    config = Config(path="a/b", path_overrides=[Override(5, parse_style("bold"))])
    engine = RainbowPathEngine(config, terminal_factory=ansi_256)
    stdout = io.StringIO()
    with pytest.raises(OverrideIndexError):
        engine.run(stdout)
    assert stdout.getvalue() == ""


def test_run_writes_once(capsys):
    config = Config(path="a", path_palette=parse_palette("fg=1"))
    RainbowPathEngine(config, terminal_factory=ansi_256).run()
    assert capsys.readouterr().out == fg(1, "a") + "\n"


def test_working_directory_is_the_default(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    engine = RainbowPathEngine(Config(), terminal_factory=ansi_256)
    assert engine.resolve_path() == str(tmp_path)


def test_separator_hash_ignores_the_output_string():
    """
    HASH TEST: Separator slots come from the '/' being replaced, so a
    custom output separator does not move them.
    """
    assert djb2(b"/") % 2 != djb2(b" > ") % 2
    slot = djb2(b"/") % 2
    colors = (7, 8)

    config = Config(path="a/b", separator=" > ", new_line=False,
                    path_palette=parse_palette("fg=1"),
                    separator_palette=parse_palette("fg=7;fg=8"),
                    separator_indexer=IndexerKind.HASH)
    assert render(config) == fg(1, "a") + fg(colors[slot], " > ") + fg(1, "b")


def test_undecodable_path_bytes_pass_through():
    """
    ENCODING TEST: A path holding bytes that are not valid UTF-8 reaches
    stdout byte for byte.
    """
    config = Config(path="/tmp/caf\udce9", new_line=False,
                    path_palette=parse_palette("fg=1"), separator_palette=parse_palette("fg=7"))
    raw = io.BytesIO()
    stdout = io.TextIOWrapper(raw, encoding="utf-8")
    RainbowPathEngine(config, terminal_factory=ansi_256).run(stdout)

    sep = fg(7, "/").encode()
    assert raw.getvalue() == sep + fg(1, "tmp").encode() + sep + b"\033[38;5;1mcaf\xe9\033[0m"
