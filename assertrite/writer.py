"""Styled text sink that wraps at the terminal width and marks spans with ``^^^``."""

from __future__ import annotations

import unicodedata
from dataclasses import dataclass, replace

from .style import DEFAULT_STYLE, ERROR_STYLE, Style

TAB_WIDTH = 4
DEFAULT_TERM_WIDTH = 80


def char_width(c: str) -> int:
    """Number of terminal cells a single character occupies."""
    if c == "\t":
        return TAB_WIDTH
    if c == "\u00ad":
        return 1
    if unicodedata.category(c) in ("Mn", "Me", "Cc", "Cf"):
        return 0
    return 2 if unicodedata.east_asian_width(c) in "WF" else 1


def display_width(s: str) -> int:
    """Calculate the display width of a plain string in terminal columns."""
    return sum(char_width(c) for c in s)


@dataclass(frozen=True)
class Snippet:
    """One unit of styled text, optionally marked for undercurling."""

    text: str
    style: Style = DEFAULT_STYLE
    undercurl: Style | None = None

    def styled(self, style: Style) -> Snippet:
        return replace(self, style=style)

    def undercurled(self, style: Style = DEFAULT_STYLE) -> Snippet:
        return replace(self, undercurl=style)

    def undercurl_error(self) -> Snippet:
        return self.undercurled(ERROR_STYLE)


class WrappingWriter:
    """Writer that supports styling, wrapping and marking with ``^^^``.

    Text is appended to an internal buffer. Whenever a physical line ends
    (explicit newline, exceeding the width or ``flush_line()``), an extra
    row of carets is emitted under all ranges written with an undercurl
    style. Use as a context manager or call ``close()`` to flush the last
    line; closing twice is harmless.
    """

    def __init__(
        self, width: int = DEFAULT_TERM_WIDTH, styling_enabled: bool = True
    ) -> None:
        self.width = width
        self.styling_enabled = styling_enabled
        self.indent = 0
        self._buffer: list[str] = []
        self._current_line_width = 0
        self._current_line_undercurl: list[tuple[int, int, Style]] = []
        self._need_flush = False
        self._closed = False

    def __enter__(self) -> WrappingWriter:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def getvalue(self) -> str:
        return "".join(self._buffer)

    @property
    def at_line_start(self) -> bool:
        """True if nothing was written since the last line ended."""
        return not self._need_flush

    def write(self, data: str) -> None:
        self.write_snippet(Snippet(data))

    def write_styled(self, data: str, style: Style) -> None:
        self.write_snippet(Snippet(data, style))

    def set_indent(self, indent: int) -> None:
        self.indent = indent

    def write_snippet(self, snippet: Snippet) -> None:
        content = snippet.text
        while content:
            # A fresh line starts with the indentation that is yet to be written
            line_width = self._current_line_width if self._need_flush else self.indent
            content_width = 0
            end_index = None
            for i, c in enumerate(content):
                if c == "\n":
                    end_index = i
                    break
                w = char_width(c)
                if line_width + content_width + w > self.width:
                    # A character wider than an empty line still has to go somewhere
                    if i == 0 and not self._need_flush:
                        content_width = w
                        end_index = 1
                    else:
                        end_index = i
                    break
                content_width += w

            end_line = end_index is not None
            if end_index is None:
                end_index = len(content)
            head, tail = content[:end_index], content[end_index:]
            if tail.startswith("\n"):
                tail = tail[1:]
            self._write_piece(head, content_width, snippet.style, snippet.undercurl)
            content = tail
            if end_line:
                self.flush_line()

    def _write_piece(
        self, content: str, width: int, style: Style, undercurl: Style | None
    ) -> None:
        if not content:
            return

        if not self._need_flush:
            self._buffer.append(" " * self.indent)
            self._current_line_width += self.indent

        if self.styling_enabled:
            self._buffer.append(style.paint(content))
        else:
            self._buffer.append(content)

        if undercurl is not None:
            start = self._current_line_width
            self._current_line_undercurl.append((start, start + width, undercurl))

        self._need_flush = True
        self._current_line_width += width

    def flush_line(self) -> None:
        """End the current line and emit its undercurl row, if any."""
        self._need_flush = False
        self._buffer.append("\n")
        self._current_line_width = 0

        end = 0
        row = []
        undercurl, self._current_line_undercurl = self._current_line_undercurl, []
        for start, stop, style in undercurl:
            # Saturate: overlapping or empty ranges must never go negative
            count = max(0, stop - max(start, end))
            if not count:
                continue
            skip = max(0, start - end)
            end = max(end, stop)
            carets = "^" * count
            if self.styling_enabled:
                carets = style.paint(carets)
            row.append(" " * skip + carets)
        if row:
            self._buffer.append("".join(row) + "\n")

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._need_flush:
            self.flush_line()
