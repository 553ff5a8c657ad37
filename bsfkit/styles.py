"""Terminal text styles used for command output."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass

_RESET = "\x1b[0m"
_ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")


def _colors_enabled() -> bool:
    return os.environ.get("NO_COLOR", "") == ""


def _visible_width(text: str) -> int:
    return len(_ANSI_RE.sub("", text))


def _wrap(text: str, codes: list[str]) -> str:
    if not codes or not text or not _colors_enabled():
        return text
    return f"\x1b[{';'.join(codes)}m{text}{_RESET}"


@dataclass(frozen=True)
class Style:
    """A text style: 256-colour foreground, emphasis, margin and border."""

    foreground: str | None = None
    bold: bool = False
    italic: bool = False
    margin: tuple[int, int] = (0, 0)
    border: bool = False
    border_foreground: str | None = None

    def _codes(self) -> list[str]:
        codes = []
        if self.bold:
            codes.append("1")
        if self.italic:
            codes.append("3")
        if self.foreground is not None:
            codes.append(f"38;5;{self.foreground}")
        return codes

    def render(self, *args: object) -> str:
        """Join the arguments with spaces and apply the style."""
        text = " ".join(str(arg) for arg in args)
        codes = self._codes()
        lines = [_wrap(line, codes) for line in text.split("\n")]

        if self.border:
            border_codes = (
                [f"38;5;{self.border_foreground}"] if self.border_foreground else []
            )
            width = max(_visible_width(line) for line in lines)
            side = _wrap("│", border_codes)
            boxed = [_wrap("┌" + "─" * width + "┐", border_codes)]
            boxed.extend(
                f"{side}{line}{' ' * (width - _visible_width(line))}{side}"
                for line in lines
            )
            boxed.append(_wrap("└" + "─" * width + "┘", border_codes))
            lines = boxed

        vertical, horizontal = self.margin
        if horizontal:
            pad = " " * horizontal
            lines = [f"{pad}{line}{pad}" for line in lines]
        if vertical:
            width = max(_visible_width(line) for line in lines)
            blank = [" " * width] * vertical
            lines = blank + lines + blank
        return "\n".join(lines)


TEXT_STYLE = Style(foreground="254")
SUCCESS_STYLE = Style(foreground="46")
SPINNER_STYLE = Style(foreground="69")
HELP_STYLE = Style(foreground="241")
ERROR_STYLE = Style(foreground="196")
WARN_STYLE = Style(foreground="226")
TITLE_STYLE = Style(foreground="205", bold=True)
OPTION_STYLE = Style(foreground="15")
SELECTED_OPTION_STYLE = Style(foreground="46", bold=True)
CURSOR_OPTION_STYLE = Style(foreground="220", italic=True)
HIGHLIGHT_STYLE = Style(foreground="220", bold=True)
HINT_STYLE = Style(foreground="42")
DOC_STYLE = Style(margin=(0, 2))
BASE_STYLE = Style(border=True, border_foreground="240")