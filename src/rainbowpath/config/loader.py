#!/usr/bin/env python3
"""
RAINBOWPATH OPTION LOADER - Config File Semantics
-------------------------------------------------
Locates rainbowpath.conf along the XDG search path and applies the parsed
Option records to a Config, one at a time in file order.

Each recognized key has a handler that enforces the option's shape
(string or bool, indexed or not) before touching the Config. Scalar keys
overwrite, so the last line wins; override keys append.

Author: RainbowPath Team
Date: 2026-10-19
"""

import logging
import os
from pathlib import Path
from typing import Callable, Dict, List, Mapping, Optional

from rainbowpath.core.config import Config, TERMINAL_KINDS
from rainbowpath.core.errors import ConfigError, ResourceError
from rainbowpath.core.models import Option, Override
from rainbowpath.indexing.indexers import IndexerKind
from rainbowpath.parsing.config_parser import parse_config
from rainbowpath.parsing.style_parser import parse_palette, parse_style

logger = logging.getLogger("rainbowpath.loader")

PACKAGE_NAME = "rainbowpath"
CONFIG_FILE = "rainbowpath.conf"
SYSTEM_CONFIG_DIR = Path("/etc/xdg")


def _env(environ: Mapping[str, str], name: str) -> Optional[str]:
    """Treats empty variables as unset."""
    value = environ.get(name)
    return value or None


def config_search_path(environ: Mapping[str, str], home: Optional[str]) -> List[Path]:
    """Candidate config files, most specific first."""
    candidates: List[Path] = []
    if home:
        candidates.append(Path(home) / f".{CONFIG_FILE}")

    xdg_config_home = _env(environ, "XDG_CONFIG_HOME")
    if xdg_config_home:
        candidates.append(Path(xdg_config_home) / PACKAGE_NAME / CONFIG_FILE)
    elif home:
        candidates.append(Path(home) / ".config" / PACKAGE_NAME / CONFIG_FILE)

    xdg_config_dirs = _env(environ, "XDG_CONFIG_DIRS")
    if xdg_config_dirs:
        for directory in xdg_config_dirs.split(":"):
            if directory:
                candidates.append(Path(directory) / PACKAGE_NAME / CONFIG_FILE)

    candidates.append(SYSTEM_CONFIG_DIR / PACKAGE_NAME / CONFIG_FILE)
    return candidates


def find_config_file(environ: Optional[Mapping[str, str]] = None) -> Optional[Path]:
    """Returns the first existing regular file on the search path, if any."""
    environ = os.environ if environ is None else environ
    home = _env(environ, "HOME")
    if home is None:
        try:
            home = str(Path.home())
        except (RuntimeError, KeyError):
            home = None

    for candidate in config_search_path(environ, home):
        try:
            found = candidate.is_file()
        except OSError as e:
            logger.debug("Skipping %s: %s", candidate, e)
            continue
        if found:
            logger.info("Using config file %s", candidate)
            return candidate
    logger.debug("No config file found")
    return None


# --- Shape checks ---

def _fail(option: Option, reason: str) -> ConfigError:
    return ConfigError(f"line {option.line}: option '{option.name}' {reason}")


def _require_string(option: Option) -> str:
    if option.is_bool:
        raise _fail(option, "expects a string value")
    return option.value


def _require_scalar(option: Option) -> None:
    if option.index is not None:
        raise _fail(option, "does not take an index")


def _require_index(option: Option) -> int:
    if option.index is None:
        raise _fail(option, "requires an index, e.g. override[0]")
    return option.index


# --- Handlers ---

def _palette_handler(attr: str) -> Callable[[Option, Config], None]:
    def handle(option: Option, config: Config) -> None:
        _require_scalar(option)
        setattr(config, attr, parse_palette(_require_string(option)))
    return handle


def _indexer_handler(attr: str) -> Callable[[Option, Config], None]:
    def handle(option: Option, config: Config) -> None:
        _require_scalar(option)
        setattr(config, attr, IndexerKind.from_name(_require_string(option)))
    return handle


def _override_handler(attr: str) -> Callable[[Option, Config], None]:
    def handle(option: Option, config: Config) -> None:
        index = _require_index(option)
        style = parse_style(_require_string(option))
        getattr(config, attr).append(Override(raw_index=index, style=style))
    return handle


def _flag_handler(attr: str) -> Callable[[Option, Config], None]:
    def handle(option: Option, config: Config) -> None:
        _require_scalar(option)
        if not option.is_bool:
            raise _fail(option, "expects true or false")
        setattr(config, attr, option.value)
    return handle


def _handle_separator(option: Option, config: Config) -> None:
    _require_scalar(option)
    config.separator = _require_string(option)


def _handle_terminal(option: Option, config: Config) -> None:
    _require_scalar(option)
    kind = _require_string(option)
    if kind not in TERMINAL_KINDS:
        raise _fail(option, f"must be one of {', '.join(TERMINAL_KINDS)}")
    config.terminal = kind


OPTION_HANDLERS: Dict[str, Callable[[Option, Config], None]] = {
    "palette": _palette_handler("path_palette"),
    "separator-palette": _palette_handler("separator_palette"),
    "separator": _handle_separator,
    "method": _indexer_handler("path_indexer"),
    "separator-method": _indexer_handler("separator_indexer"),
    "override": _override_handler("path_overrides"),
    "separator-override": _override_handler("separator_overrides"),
    "strip-leading": _flag_handler("strip_leading"),
    "compact": _flag_handler("compact"),
    "newline": _flag_handler("new_line"),
    "bash": _flag_handler("bash_escape"),
    "terminal": _handle_terminal,
}


def apply_options(options: List[Option], config: Config) -> Config:
    """Applies options in order; the first unknown or misshapen one aborts."""
    for option in options:
        handler = OPTION_HANDLERS.get(option.name)
        if handler is None:
            raise ConfigError(f"line {option.line}: invalid option '{option.name}'")
        handler(option, config)
        logger.debug("Applied option %s from line %d", option.name, option.line)
    return config


def load_config_file(path: Path, config: Config) -> Config:
    """Reads, parses and applies one config file."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ResourceError(f"Failed to read config file {path}: {e}") from e
    return apply_options(parse_config(text), config)
