from __future__ import annotations

import re
from dataclasses import dataclass, replace

# ANSI escape codes for terminal colors
ESC = "\x1b["
RESET = f"{ESC}0m"

# Regex pattern to strip ANSI escape sequences
ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;]*[A-Za-z]")

# Foreground color codes, background is +10
BLACK = 30
RED = 31
GREEN = 32
YELLOW = 33
BLUE = 34
MAGENTA = 35
CYAN = 36
WHITE = 37
BRIGHT_RED = 91


@dataclass(frozen=True)
class Style:
    """Terminal text style: colors and weight, rendered as ANSI SGR codes."""

    fg: int | None = None
    bg: int | None = None
    bold: bool = False
    dim: bool = False
    underline: bool = False

    def codes(self) -> list[str]:
        codes = []
        if self.bold:
            codes.append("1")
        if self.dim:
            codes.append("2")
        if self.underline:
            codes.append("4")
        if self.fg is not None:
            codes.append(str(self.fg))
        if self.bg is not None:
            codes.append(str(self.bg + 10))
        return codes

    def prefix(self) -> str:
        codes = self.codes()
        return f"{ESC}{';'.join(codes)}m" if codes else ""

    def suffix(self) -> str:
        return RESET if self.codes() else ""

    def paint(self, text: str) -> str:
        """Wrap text in this style's escape codes (no-op for the default style)."""
        return f"{self.prefix()}{text}{self.suffix()}"

    def with_fg(self, color: int) -> Style:
        return replace(self, fg=color)

    def with_bg(self, color: int) -> Style:
        return replace(self, bg=color)


def strip_ansi(text: str) -> str:
    return ANSI_ESCAPE_RE.sub("", text)


DEFAULT_STYLE = Style()
ERROR_STYLE = Style(fg=BRIGHT_RED, bold=True)
MACRO_STYLE = Style(fg=MAGENTA)
OP_STYLE = Style(fg=BLUE, bold=True)
LEFT_STYLE = Style(fg=CYAN)
RIGHT_STYLE = Style(fg=YELLOW)
NOTE_STYLE = Style(bold=True)
DIMMED_STYLE = Style(dim=True)
