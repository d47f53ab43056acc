#!/usr/bin/env python3
"""Tests for compdb/jsonc_utils.py"""

import os
import pytest

from compdb.constants import NotFoundError, JsonParseError
from compdb.jsonc_utils import strip_json_comments, load_jsonc


class TestStripJsonComments:
    """Tests for strip_json_comments function."""

    def test_no_comments_unchanged(self) -> None:
        """Plain JSON passes through untouched."""
        text = '[{"file": "a.c", "command": "gcc a.c"}]'
        assert strip_json_comments(text) == text

    def test_line_comment_removed(self) -> None:
        """Line comment is removed up to the newline."""
        assert strip_json_comments('{"a": 1} // trailing\n') == '{"a": 1} \n'

    def test_line_comment_at_end_of_text(self) -> None:
        """Line comment without a trailing newline."""
        assert strip_json_comments("[1] // done") == "[1] "

    def test_block_comment_removed(self) -> None:
        """Inline block comment is removed."""
        assert strip_json_comments('{"a": /* one */ 1}') == '{"a":  1}'

    def test_block_comment_spanning_lines_keeps_newlines(self) -> None:
        """Multi-line block comment keeps line structure."""
        assert strip_json_comments("[1,\n/* a\nb\n*/ 2]") == "[1,\n\n\n 2]"

    def test_block_comment_is_non_greedy(self) -> None:
        """Two block comments do not swallow the text between them."""
        assert strip_json_comments("/* x */[1]/* y */") == "[1]"

    def test_unterminated_block_comment(self) -> None:
        """Unterminated block comment removes the rest of the text."""
        assert strip_json_comments("[1] /* open") == "[1] "

    def test_slashes_inside_string_preserved(self) -> None:
        """URL-like string contents are not treated as comments."""
        text = '{"url": "http://example.com/*path*/"}'
        assert strip_json_comments(text) == text

    def test_escaped_quote_inside_string(self) -> None:
        """Escaped quote does not end the string."""
        text = '{"cmd": "gcc -DMSG=\\"// not a comment\\" a.c"}'
        assert strip_json_comments(text) == text

    def test_escaped_backslash_before_closing_quote(self) -> None:
        """A string ending in an escaped backslash closes normally."""
        text = '{"path": "C:\\\\"} // comment'
        assert strip_json_comments(text) == '{"path": "C:\\\\"} '

    def test_single_slash_kept(self) -> None:
        """A lone slash outside a string is left for the JSON parser."""
        assert strip_json_comments("[1 / 2]") == "[1 / 2]"


class TestLoadJsonc:
    """Tests for load_jsonc function."""

    def test_load_with_comments(self, temp_dir: str) -> None:
        """Document with both comment styles parses."""
        path = os.path.join(temp_dir, "db.json")
        with open(path, "w", encoding="utf-8") as f:
            f.write('// header\n[\n  /* first */ {"file": "a.c", "command": "gcc a.c"} // entry\n]\n')

        assert load_jsonc(path) == [{"file": "a.c", "command": "gcc a.c"}]

    def test_load_with_bom(self, temp_dir: str) -> None:
        """UTF-8 byte order mark is tolerated."""
        path = os.path.join(temp_dir, "bom.json")
        with open(path, "w", encoding="utf-8-sig") as f:
            f.write('{"a": 1}')

        assert load_jsonc(path) == {"a": 1}

    def test_missing_file(self, temp_dir: str) -> None:
        """Missing file raises NotFoundError."""
        with pytest.raises(NotFoundError):
            load_jsonc(os.path.join(temp_dir, "missing.json"))

    def test_invalid_json(self, temp_dir: str) -> None:
        """Invalid JSON raises JsonParseError with the file name."""
        path = os.path.join(temp_dir, "bad.json")
        with open(path, "w", encoding="utf-8") as f:
            f.write("[1, 2,, 3] // broken")

        with pytest.raises(JsonParseError, match="bad.json"):
            load_jsonc(path)

    def test_comment_only_document_is_invalid(self, temp_dir: str) -> None:
        """Nothing left after stripping is a parse error."""
        path = os.path.join(temp_dir, "empty.json")
        with open(path, "w", encoding="utf-8") as f:
            f.write("/* nothing here */")

        with pytest.raises(JsonParseError):
            load_jsonc(path)

    def test_non_utf8_file(self, temp_dir: str) -> None:
        """Undecodable bytes raise JsonParseError instead of UnicodeDecodeError."""
        path = os.path.join(temp_dir, "latin1.json")
        with open(path, "wb") as f:
            f.write(b'[{"file": "a.c", "command": "gcc \xff"}]')

        with pytest.raises(JsonParseError, match="not valid UTF-8"):
            load_jsonc(path)
