#!/usr/bin/env python3
"""
RAINBOWPATH CLI - Prompt Entry Point
------------------------------------
Translates command-line flags into a Config, layered over the built-in
defaults and the rainbowpath.conf file, then hands it to the engine.

stdout only ever carries the rendered path. Errors, logs and the
--preview table of the effective palettes go through rich consoles.

Author: RainbowPath Team
Date: 2026-10-19
"""

import argparse
import io
import logging
import sys
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.logging import RichHandler

from rainbowpath.cli.formatter import RainbowFormatter, error_console
from rainbowpath.config.loader import find_config_file, load_config_file
from rainbowpath.core.config import Config, TERMINAL_KINDS
from rainbowpath.core.engine import RainbowPathEngine
from rainbowpath.core.errors import ParseError, RainbowPathError
from rainbowpath.core.models import Override
from rainbowpath.indexing.indexers import IndexerKind
from rainbowpath.parsing.lexer import parse_index
from rainbowpath.parsing.style_parser import parse_palette, parse_style
from rainbowpath.rendering.terminal import create_terminal

VERSION = "1.0.0"

logger = logging.getLogger("rainbowpath.cli")


def configure_logging(verbosity: int) -> None:
    """WARNING by default, INFO with one --verbose, DEBUG with two."""
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_time=False, show_path=False)],
    )
    logging.getLogger("rainbowpath").setLevel(level)


SEPARATOR_FLAGS = ("-S", "--separator")


def join_separator_values(argv: List[str]) -> List[str]:
    """
    Binds the word after -S/--separator to it even when it looks like a
    flag, so separators such as '->' need no '=' form.
    """
    joined: List[str] = []
    words = iter(argv)
    for word in words:
        if word in SEPARATOR_FLAGS:
            value = next(words, None)
            if value is not None:
                joined.append(f"--separator={value}")
                continue
        joined.append(word)
    return joined


def parse_override(raw_index: str, expression: str) -> Override:
    index = parse_index(raw_index)
    if index is None:
        raise ParseError(f"Invalid override index '{raw_index}'")
    return Override(raw_index=index, style=parse_style(expression))


class RainbowPathCLI:
    """
    CLI wrapper that merges flags over the config file and runs the engine.
    """

    def __init__(self, formatter: Optional[RainbowFormatter] = None):
        self.parser = argparse.ArgumentParser(
            prog="rainbowpath",
            description="RainbowPath - Colorize filesystem paths for shell prompts",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog='Example: PS1="$(rainbowpath -c -b) $ "',
        )
        self.formatter = formatter or RainbowFormatter()
        self._setup_args()

    def _setup_args(self):
        """Configures the command-line flags."""
        p = self.parser
        p.add_argument("path", nargs="?", metavar="PATH", help="Path to render (default: working directory)")

        styling = p.add_argument_group("styling")
        styling.add_argument("-p", "--palette", metavar="PALETTE", help="Palette for path segments, e.g. 'fg=1;fg=3'")
        styling.add_argument("-s", "--separator-palette", metavar="PALETTE", help="Palette for separators")
        styling.add_argument("-S", "--separator", metavar="STRING",
                             help="Output string replacing each '/' (may start with '-', e.g. -S '->')")
        styling.add_argument("-m", "--method", metavar="METHOD",
                             help="Segment indexing method: sequential, hash or random")
        styling.add_argument("-M", "--separator-method", metavar="METHOD", help="Separator indexing method")
        styling.add_argument("-o", "--override", nargs=2, action="append", metavar=("INDEX", "STYLE"),
                             help="Merge STYLE onto segment INDEX (negative counts from the end)")
        styling.add_argument("-O", "--separator-override", nargs=2, action="append", metavar=("INDEX", "STYLE"),
                             help="Merge STYLE onto separator INDEX")

        output = p.add_argument_group("output")
        output.add_argument("-l", "--strip-leading", action="store_true", help="Drop leading separators")
        output.add_argument("-c", "--compact", action="store_true", help="Replace the home directory with '~'")
        output.add_argument("-n", "--newline", dest="new_line", action="store_const", const=False,
                            help="Do not print a trailing newline")
        output.add_argument("-b", "--bash", action="store_true", help="Wrap escape codes in \\[ \\] for PS1")
        output.add_argument("-t", "--terminal", choices=TERMINAL_KINDS,
                            help="Escape sequence backend (default: ansi)")

        p.add_argument("--config", type=Path, metavar="FILE", help="Read this config file instead of searching")
        p.add_argument("--no-config", action="store_true", help="Ignore every config file")
        p.add_argument("--preview", action="store_true", help="Show the effective palettes and exit")
        p.add_argument("--verbose", action="count", default=0, help="Log to stderr (repeat for debug)")
        p.add_argument("-v", "--version", action="version", version=f"rainbowpath v{VERSION}")

    def build_config(self, args: argparse.Namespace) -> Config:
        """Defaults, then the config file, then flags."""
        config = Config()

        if not args.no_config:
            config_path = args.config if args.config is not None else find_config_file()
            if config_path is not None:
                load_config_file(config_path, config)

        if args.palette is not None:
            config.path_palette = parse_palette(args.palette)
        if args.separator_palette is not None:
            config.separator_palette = parse_palette(args.separator_palette)
        if args.separator is not None:
            config.separator = args.separator
        if args.method is not None:
            config.path_indexer = IndexerKind.from_name(args.method)
        if args.separator_method is not None:
            config.separator_indexer = IndexerKind.from_name(args.separator_method)

        for raw_index, expression in args.override or []:
            config.path_overrides.append(parse_override(raw_index, expression))
        for raw_index, expression in args.separator_override or []:
            config.separator_overrides.append(parse_override(raw_index, expression))

        if args.strip_leading:
            config.strip_leading = True
        if args.compact:
            config.compact = True
        if args.new_line is not None:
            config.new_line = args.new_line
        if args.bash:
            config.bash_escape = True
        if args.terminal is not None:
            config.terminal = args.terminal
        if args.path is not None:
            config.path = args.path
        return config

    def preview(self, config: Config) -> None:
        terminal = create_terminal(config.terminal, io.StringIO())
        self.formatter.show_palettes(config, terminal.color_count())

    def run(self, argv: Optional[List[str]] = None) -> int:
        argv = sys.argv[1:] if argv is None else argv
        args = self.parser.parse_args(join_separator_values(argv))
        configure_logging(args.verbose)

        try:
            config = self.build_config(args)
            if args.preview:
                self.preview(config)
            else:
                RainbowPathEngine(config).run()
        except RainbowPathError as e:
            logger.debug("Aborting on %s", type(e).__name__)
            self.formatter.show_error(e)
            return 1
        except (OSError, UnicodeError) as e:
            self.formatter.show_error(e)
            return 1
        return 0


def main(argv: Optional[List[str]] = None) -> int:
    try:
        return RainbowPathCLI().run(argv)
    except KeyboardInterrupt:
        error_console.print("\n[bold yellow]Interrupted by user.[/bold yellow]")
        return 130


if __name__ == "__main__":
    sys.exit(main())
