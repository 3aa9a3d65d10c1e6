# src/rainbowpath/cli/formatter.py
from typing import Optional

from rich.color import Color
from rich.console import Console
from rich.style import Style as RichStyle
from rich.table import Table
from rich.text import Text

from rainbowpath.core.config import Config
from rainbowpath.core.models import Palette, Style

# stdout carries nothing but the prompt string; diagnostics go to stderr
error_console = Console(stderr=True)


def to_rich_style(style: Style) -> RichStyle:
    """Translates a tri-state Style into rich's style for previews."""
    return RichStyle(
        color=Color.from_ansi(style.fg.value) if style.fg.is_set else None,
        bgcolor=Color.from_ansi(style.bg.value) if style.bg.is_set else None,
        bold=True if style.bold.is_set else None,
        dim=True if style.dim.is_set else None,
        underline=True if style.underlined.is_set else None,
        blink=True if style.blink.is_set else None,
    )


class RainbowFormatter:
    """
    Renders errors and the --preview palette table.
    """

    def __init__(self, console: Optional[Console] = None, errors: Optional[Console] = None):
        self.console = console or Console()
        self.errors = errors or error_console

    def show_error(self, error: Exception) -> None:
        message = Text.assemble(("rainbowpath: error: ", "bold red"), str(error))
        self.errors.print(message, soft_wrap=True)

    def _add_palette_rows(self, table: Table, axis: str, palette: Palette, sample: str) -> None:
        for slot, style in enumerate(palette):
            table.add_row(
                axis,
                str(slot),
                style.to_expression() or "[dim](none)[/dim]",
                Text(sample, style=to_rich_style(style)),
            )

    def show_palettes(self, config: Config, color_count: int) -> None:
        """Lists every slot of both effective palettes with a styled sample."""
        table = Table(title=f"Effective palettes ({color_count} colors)", header_style="bold magenta")
        table.add_column("Axis", style="cyan")
        table.add_column("Slot", justify="right")
        table.add_column("Expression")
        table.add_column("Sample")

        self._add_palette_rows(table, "path", config.effective_path_palette(color_count), "segment")
        self._add_palette_rows(table, "separator", config.effective_separator_palette(color_count),
                               config.separator)
        self.console.print(table)
