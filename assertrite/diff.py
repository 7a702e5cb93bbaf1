"""Line and word diffs between two debug representations.

A word diff highlights the differing words of two single lines. A line
diff interleaves two multi-line texts and falls back to a word diff for a
line that was replaced by exactly one other line.
"""

from __future__ import annotations

from collections import namedtuple
from dataclasses import dataclass
from typing import Any, Sequence, Union

from .style import (
    BLACK,
    CYAN,
    DIMMED_STYLE,
    LEFT_STYLE,
    RIGHT_STYLE,
    YELLOW,
    Style,
)
from .writer import WrappingWriter

# One step of a sequence diff. kind is "left", "right" or "both".
DiffResult = namedtuple("DiffResult", ["kind", "left", "right"])


def ceil_div(a: int, b: int) -> int:
    """Integer division rounding up, for non-negative a and positive b."""
    d, r = divmod(a, b)
    return d + 1 if r else d


def lcs_diff(left: Sequence[Any], right: Sequence[Any]) -> list[DiffResult]:
    """Diff two sequences by their longest common subsequence.

    Within a replaced region all left-only items come before the right-only
    items, which the line regrouping in ``line_diff`` depends on.
    """
    n, m = len(left), len(right)
    lead = 0
    while lead < n and lead < m and left[lead] == right[lead]:
        lead += 1
    trail = 0
    while (
        trail < n - lead
        and trail < m - lead
        and left[n - 1 - trail] == right[m - 1 - trail]
    ):
        trail += 1

    mid_left = left[lead : n - trail]
    mid_right = right[lead : m - trail]

    # table[i][j] is the LCS length of mid_left[:i] and mid_right[:j]
    table = [[0] * (len(mid_right) + 1) for _ in range(len(mid_left) + 1)]
    for i, a in enumerate(mid_left):
        row, next_row = table[i], table[i + 1]
        for j, b in enumerate(mid_right):
            if a == b:
                next_row[j + 1] = row[j] + 1
            else:
                next_row[j + 1] = max(row[j + 1], next_row[j])

    middle = []
    i, j = len(mid_left), len(mid_right)
    while True:
        if j > 0 and (i == 0 or table[i][j] == table[i][j - 1]):
            j -= 1
            middle.append(DiffResult("right", None, mid_right[j]))
        elif i > 0 and (j == 0 or table[i][j] == table[i - 1][j]):
            i -= 1
            middle.append(DiffResult("left", mid_left[i], None))
        elif i > 0 and j > 0:
            i -= 1
            j -= 1
            middle.append(DiffResult("both", mid_left[i], mid_right[j]))
        else:
            break
    middle.reverse()

    result = [DiffResult("both", left[k], right[k]) for k in range(lead)]
    result += middle
    result += [
        DiffResult("both", left[n - trail + k], right[m - trail + k])
        for k in range(trail)
    ]
    return result


class Highlighter:
    """Incrementally builds ranges of alternating highlighting over a string."""

    def __init__(self, color: int) -> None:
        self.normal = Style(fg=color)
        self.highlight = Style(fg=BLACK, bg=color, bold=True)
        # [highlighted, start, end] with no gaps and alternating flags
        self.ranges: list[list[Any]] = []
        self.total_highlighted = 0

    def push(self, length: int, highlighted: bool) -> None:
        if highlighted:
            self.total_highlighted += length
        if self.ranges:
            last = self.ranges[-1]
            if last[0] == highlighted:
                last[2] += length
            else:
                self.ranges.append([highlighted, last[2], last[2] + length])
        else:
            self.ranges.append([highlighted, 0, length])

    def spans(self, data: str) -> list[tuple[str, bool]]:
        """Split data into (text, highlighted) spans.

        A line that would be mostly highlighted is not highlighted at all,
        as dense highlighting is harder to read than none.
        """
        not_highlighted = len(data) - self.total_highlighted
        if not_highlighted < ceil_div(self.total_highlighted, 2):
            return [(data, False)]
        return [
            (data[start:end], highlighted) for highlighted, start, end in self.ranges
        ]

    def pieces(self, data: str) -> list[tuple[str, Style]]:
        return [
            (text, self.highlight if highlighted else self.normal)
            for text, highlighted in self.spans(data)
        ]

    def write(self, writer: WrappingWriter, data: str) -> None:
        for text, style in self.pieces(data):
            writer.write_styled(text, style)


def _is_break_point(a: str, b: str) -> bool:
    """Check if there should be a word break between character a and b."""
    if a.isalpha():
        return not b.isalpha() or (a.islower() and not b.islower())
    if a in "0123456789":
        return b not in "0123456789"
    if a.isspace():
        return not b.isspace()
    return True


def split_words(line: str) -> list[str]:
    """Split a line into words, digit runs, whitespace runs and single punctuation."""
    words = []
    start = 0
    for pos in range(1, len(line)):
        if _is_break_point(line[pos - 1], line[pos]):
            words.append(line[start:pos])
            start = pos
    if line:
        words.append(line[start:])
    return words


class SingleLineDiff:
    """A word based diff between two single-line inputs."""

    def __init__(self, left: str, right: str) -> None:
        self.left = left
        self.right = right
        self.left_highlights = Highlighter(CYAN)
        self.right_highlights = Highlighter(YELLOW)
        for kind, lword, rword in lcs_diff(split_words(left), split_words(right)):
            if kind == "left":
                self.left_highlights.push(len(lword), True)
            elif kind == "right":
                self.right_highlights.push(len(rword), True)
            else:
                self.left_highlights.push(len(lword), False)
                self.right_highlights.push(len(rword), False)

    def write_left(self, writer: WrappingWriter) -> None:
        """Write the left line with highlighting, without a line break."""
        self.left_highlights.write(writer, self.left)

    def write_right(self, writer: WrappingWriter) -> None:
        """Write the right line with highlighting, without a line break."""
        self.right_highlights.write(writer, self.right)


@dataclass(frozen=True)
class LeftOnly:
    line: str


@dataclass(frozen=True)
class RightOnly:
    line: str


@dataclass(frozen=True)
class Different:
    left: str
    right: str


@dataclass(frozen=True)
class Equal:
    line: str


LineDiff = Union[LeftOnly, RightOnly, Different, Equal]


def split_lines(text: str) -> list[str]:
    """Split text into lines without terminators; a final newline adds no line."""
    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def line_diff(left: str, right: str) -> list[LineDiff]:
    """Diff two texts line by line.

    A single left line directly followed by a single right line becomes a
    ``Different`` pair for word diffing. Replacements of other shapes stay
    as separate ``LeftOnly``/``RightOnly`` lines.
    """
    output: list[LineDiff] = []
    seen_left = 0
    for kind, lline, rline in lcs_diff(split_lines(left), split_lines(right)):
        if kind == "left":
            output.append(LeftOnly(lline))
            seen_left += 1
        elif kind == "right":
            last = output[-1] if output else None
            if isinstance(last, LeftOnly) and seen_left == 1:
                output[-1] = Different(last.line, rline)
                seen_left = 0
                continue
            if isinstance(last, Different):
                # One left line replaced by several right lines: no word diff
                output[-1] = LeftOnly(last.left)
                output.append(RightOnly(last.right))
                output.append(RightOnly(rline))
                seen_left = 0
                continue
            output.append(RightOnly(rline))
            seen_left = 0
        else:
            output.append(Equal(lline))
            seen_left = 0
    return output


class MultiLineDiff:
    """A line diff between two multi-line inputs."""

    def __init__(self, left: str, right: str) -> None:
        self.line_diffs = line_diff(left, right)

    def write_interleaved(self, writer: WrappingWriter) -> None:
        """Write both inputs interleaved, highlighting the differences.

        The last line is not terminated.
        """
        for i, diff in enumerate(self.line_diffs):
            if i:
                writer.flush_line()
            if isinstance(diff, LeftOnly):
                writer.write_styled(f"< {diff.line}", LEFT_STYLE)
            elif isinstance(diff, RightOnly):
                writer.write_styled(f"> {diff.line}", RIGHT_STYLE)
            elif isinstance(diff, Different):
                words = SingleLineDiff(diff.left, diff.right)
                writer.write_styled("<", words.left_highlights.normal)
                writer.write(" ")
                words.write_left(writer)
                writer.flush_line()
                writer.write_styled(">", words.right_highlights.normal)
                writer.write(" ")
                words.write_right(writer)
            else:
                writer.write("  ")
                writer.write_styled(diff.line, DIMMED_STYLE)
