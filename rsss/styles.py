"""Colour themes and the terminal styles built from them."""

from __future__ import annotations

import re
import textwrap
import unicodedata
from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class Theme:
    """A colour theme; every colour is an ANSI 256-colour palette index."""

    primary: str
    secondary: str
    accent: str
    background: str
    error: str
    success: str


THEMES: dict[str, Theme] = {
    "default": Theme(
        primary="62",
        secondary="240",
        accent="205",
        background="230",
        error="196",
        success="46",
    ),
    "dark": Theme(
        primary="39",
        secondary="245",
        accent="212",
        background="235",
        error="196",
        success="46",
    ),
    "ocean": Theme(
        primary="33",
        secondary="39",
        accent="45",
        background="195",
        error="196",
        success="46",
    ),
}

_ANSI = re.compile(r"\x1b\[[0-9;]*m")
_RESET = "\x1b[0m"


class Align(Enum):
    """Horizontal placement of text inside a block."""

    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


def _cell_width(text: str) -> int:
    """Number of terminal cells the text takes, ignoring colour escapes."""
    width = 0
    for char in _ANSI.sub("", text):
        if unicodedata.combining(char) or unicodedata.category(char) in ("Mn", "Me", "Cf"):
            continue
        width += 2 if unicodedata.east_asian_width(char) in ("W", "F") else 1
    return width


@dataclass(frozen=True)
class Style:
    """How a block of text is drawn: colours, weight, padding, border and width."""

    foreground: str | None = None
    background: str | None = None
    bold: bool = False
    padding_y: int = 0
    padding_x: int = 0
    border: bool = False
    border_foreground: str | None = None
    align: Align = Align.LEFT
    width: int | None = None

    def _sgr(self) -> str:
        codes = []
        if self.bold:
            codes.append("1")
        if self.foreground is not None:
            codes.append(f"38;5;{self.foreground}")
        if self.background is not None:
            codes.append(f"48;5;{self.background}")
        return ";".join(codes)

    def _paint(self, row: str) -> str:
        codes = self._sgr()
        return f"\x1b[{codes}m{row}{_RESET}" if codes else row

    def _paint_border(self, text: str) -> str:
        if self.border_foreground is None:
            return text
        return f"\x1b[38;5;{self.border_foreground}m{text}{_RESET}"

    def _place(self, line: str, block: int) -> str:
        gap = max(block - _cell_width(line), 0)
        if self.align is Align.CENTER:
            left = gap // 2
            return " " * left + line + " " * (gap - left)
        if self.align is Align.RIGHT:
            return " " * gap + line
        return line + " " * gap

    def render(self, text: str) -> str:
        """Draw ``text`` with this style and return the result."""
        lines = text.replace("\r\n", "\n").split("\n")

        if self.width is not None:
            block = max(self.width - 2 * self.padding_x, 0)
            wrapped: list[str] = []
            for line in lines:
                if block and _cell_width(line) > block:
                    wrapped.extend(textwrap.wrap(line, block) or [""])
                else:
                    wrapped.append(line)
            lines = wrapped
        else:
            block = max(_cell_width(line) for line in lines)

        side = " " * self.padding_x
        rows = [side + self._place(line, block) + side for line in lines]
        blank = " " * (block + 2 * self.padding_x)
        rows = [blank] * self.padding_y + rows + [blank] * self.padding_y
        rows = [self._paint(row) for row in rows]

        if self.border:
            inner = block + 2 * self.padding_x
            top = self._paint_border("╭" + "─" * inner + "╮")
            bottom = self._paint_border("╰" + "─" * inner + "╯")
            edge = self._paint_border("│")
            rows = [top, *(edge + row + edge for row in rows), bottom]

        return "\n".join(rows)


@dataclass(frozen=True)
class Styles:
    """Every style the interface draws with."""

    title: Style
    selected: Style
    normal: Style
    error: Style
    success: Style
    accent: Style
    menu: Style
    header: Style


def new_styles(theme_name: str) -> Styles:
    """Build the styles for a theme, falling back to the default theme."""
    theme = THEMES.get(theme_name, THEMES["default"])
    return Styles(
        title=Style(foreground=theme.primary, bold=True, padding_x=1),
        selected=Style(
            background=theme.primary, foreground=theme.background, padding_x=1
        ),
        normal=Style(padding_x=1),
        error=Style(foreground=theme.error, bold=True),
        success=Style(foreground=theme.success, bold=True),
        accent=Style(foreground=theme.accent, bold=True),
        menu=Style(
            border=True,
            border_foreground=theme.secondary,
            padding_y=1,
            padding_x=2,
        ),
        header=Style(
            foreground=theme.primary, bold=True, align=Align.CENTER, width=80
        ),
    )