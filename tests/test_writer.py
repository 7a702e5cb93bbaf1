"""Tests for writer.py - wrapping, styling and undercurl rows."""

import pytest

from assertrite.style import RED, YELLOW, Style
from assertrite.writer import (
    Snippet,
    WrappingWriter,
    char_width,
    display_width,
)

BOLD_RED = Style(fg=RED, bold=True)


class TestCharWidth:
    """Tests for terminal cell widths of characters."""

    @pytest.mark.parametrize(
        "char,width",
        [
            ("a", 1),
            ("\t", 4),
            ("\u00ad", 1),
            ("\u0301", 0),
            ("\u200b", 0),
            ("\u65e5", 2),
            ("\uff21", 2),
        ],
    )
    def test_char_width(self, char, width):
        """Test widths of plain, control, combining and wide characters."""
        assert char_width(char) == width

    def test_display_width(self):
        """Test that display width sums character widths."""
        assert display_width("ab日本") == 6
        assert display_width("") == 0


class TestUndercurl:
    """Tests for the caret rows under undercurled text."""

    def test_styled_undercurl(self):
        """Test styled text with an undercurled word."""
        writer = WrappingWriter(20)
        writer.write_snippet(Snippet("Hello").styled(Style(fg=YELLOW)))
        writer.write(" ")
        writer.write_snippet(Snippet("dear").undercurled(BOLD_RED))
        writer.write("!")
        writer.close()
        assert writer.getvalue() == (
            "\x1b[33mHello\x1b[0m dear!\n      \x1b[1;31m^^^^\x1b[0m\n"
        )

    def test_undercurl_rows_on_wrapped_lines(self):
        """Test that every wrapped line gets its own caret row."""
        writer = WrappingWriter(20, styling_enabled=False)
        for _ in range(2):
            writer.write("four")
            writer.write(" ")
            writer.write_snippet(Snippet("four").undercurled(BOLD_RED))
            writer.write(" ")
        writer.write_snippet(Snippet("four").undercurled(BOLD_RED))
        writer.write("!")
        writer.close()
        assert writer.getvalue() == (
            "four four four four \n     ^^^^      ^^^^\nfour!\n^^^^\n"
        )

    def test_at_line_start(self):
        """Test tracking of a pending line."""
        writer = WrappingWriter(80)
        assert writer.at_line_start
        writer.write("x")
        assert not writer.at_line_start
        writer.write("\n")
        assert writer.at_line_start
        writer.write("")
        assert writer.at_line_start

    def test_undercurl_rows_on_explicit_newlines(self):
        """Test caret rows when the text itself contains a newline."""
        writer = WrappingWriter(20, styling_enabled=False)
        writer.write("four")
        writer.write(" ")
        writer.write_snippet(Snippet("four").undercurled(BOLD_RED))
        writer.write(" ")
        writer.write("four\n")
        writer.write(" ")
        writer.write_snippet(Snippet("four").undercurled(BOLD_RED))
        writer.write(" ")
        writer.write_snippet(Snippet("four").undercurled(BOLD_RED))
        writer.write("!")
        writer.close()
        assert writer.getvalue() == (
            "four four four\n     ^^^^\n four four!\n ^^^^ ^^^^\n"
        )

    def test_adjacent_ranges_merge_visually(self):
        """Test that consecutive undercurled snippets give one caret run."""
        writer = WrappingWriter(80, styling_enabled=False)
        for part in ("x", " ", "==", " ", "3"):
            writer.write_snippet(Snippet(part).undercurl_error())
        writer.close()
        assert writer.getvalue() == "x == 3\n^^^^^^\n"

    def test_wide_characters_get_wide_carets(self):
        """Test that carets cover the display width, not the code points."""
        writer = WrappingWriter(80, styling_enabled=False)
        writer.write("x")
        writer.write_snippet(Snippet("日本").undercurl_error())
        writer.close()
        assert writer.getvalue() == "x日本\n ^^^^\n"

    def test_overlapping_ranges_saturate(self):
        """Test that out of order ranges never produce negative counts."""
        writer = WrappingWriter(80, styling_enabled=False)
        writer.write("0123456789")
        writer._current_line_undercurl = [
            (5, 9, BOLD_RED),
            (3, 6, BOLD_RED),
            (7, 7, BOLD_RED),
        ]
        writer.close()
        assert writer.getvalue() == "0123456789\n     ^^^^\n"

    def test_no_row_without_undercurl(self):
        """Test that plain lines get no caret row."""
        with WrappingWriter(80) as writer:
            writer.write("plain")
        assert writer.getvalue() == "plain\n"


class TestWrapping:
    """Tests for wrapping at the configured width."""

    def test_wrap_at_width(self):
        """Test that a long piece is broken exactly at the width."""
        with WrappingWriter(5, styling_enabled=False) as writer:
            writer.write("abcdefghijk")
        assert writer.getvalue() == "abcde\nfghij\nk\n"

    def test_wide_characters_do_not_overflow(self):
        """Test that a wide character that does not fit moves to the next line."""
        with WrappingWriter(5, styling_enabled=False) as writer:
            writer.write("日本語")
        assert writer.getvalue() == "日本\n語\n"

    def test_character_wider_than_line(self):
        """Test that a character wider than the whole line is still written."""
        with WrappingWriter(1, styling_enabled=False) as writer:
            writer.write("日a")
        assert writer.getvalue() == "日\na\n"

    def test_tabs_count_as_four(self):
        """Test that tabs take four cells when wrapping."""
        with WrappingWriter(10, styling_enabled=False) as writer:
            writer.write("a\tb\tc")
        assert writer.getvalue() == "a\tb\t\nc\n"

    def test_styles_survive_wrapping(self):
        """Test that each wrapped part is styled separately."""
        with WrappingWriter(3) as writer:
            writer.write_styled("abcd", Style(fg=YELLOW))
        assert writer.getvalue() == "\x1b[33mabc\x1b[0m\n\x1b[33md\x1b[0m\n"

    def test_indent_applies_to_wrapped_lines(self):
        """Test that indentation is repeated and counted on every line."""
        with WrappingWriter(10, styling_enabled=False) as writer:
            writer.set_indent(2)
            writer.write("abcdefghijkl")
        assert writer.getvalue() == "  abcdefgh\n  ijkl\n"

    def test_indent_applies_after_newline(self):
        """Test that indentation is written after explicit newlines."""
        with WrappingWriter(80, styling_enabled=False) as writer:
            writer.set_indent(2)
            writer.write("abc\ndef")
        assert writer.getvalue() == "  abc\n  def\n"


class TestFlushAndClose:
    """Tests for line flushing and closing."""

    def test_flush_line_always_ends_a_line(self):
        """Test that flushing an empty line still writes a newline."""
        writer = WrappingWriter(80)
        writer.flush_line()
        writer.flush_line()
        assert writer.getvalue() == "\n\n"

    def test_close_after_flush_adds_nothing(self):
        """Test that close only flushes a pending line."""
        writer = WrappingWriter(80)
        writer.write("done")
        writer.flush_line()
        writer.close()
        assert writer.getvalue() == "done\n"

    def test_close_twice(self):
        """Test that closing is idempotent."""
        writer = WrappingWriter(80)
        writer.write("once")
        writer.close()
        writer.close()
        assert writer.getvalue() == "once\n"

    def test_styling_disabled(self):
        """Test that no escape codes are written without styling."""
        with WrappingWriter(80, styling_enabled=False) as writer:
            writer.write_styled("plain", BOLD_RED)
            writer.write_snippet(Snippet("curl").undercurl_error())
        assert "\x1b" not in writer.getvalue()
        assert writer.getvalue() == "plaincurl\n     ^^^^\n"
