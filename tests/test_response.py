"""Tests for status line parsing."""

import pytest

from ftpc.errors import InvalidResponse
from ftpc.models.response import (
    Response,
    StatusCode,
    continuation_code,
    is_continuation,
    parse_response,
)

pytestmark = pytest.mark.unit


class TestParseResponse:
    """Test parse_response function."""

    def test_code_and_text(self):
        """Test splitting into code and trimmed text."""
        response = parse_response("226 Closing data connection.")

        assert response.code == 226
        assert response.text == "Closing data connection."

    def test_trailing_newline_trimmed(self):
        """Test CRLF and surrounding whitespace are removed from text."""
        response = parse_response("220   Service ready  \r\n")

        assert response == Response(220, "Service ready")

    def test_code_compares_with_status_constants(self):
        """Test parsed codes match StatusCode members."""
        response = parse_response("227 Entering Passive Mode (127,0,0,1,19,136).")
        assert response.code == StatusCode.ENTERING_PASSIVE_MODE

    def test_empty_text_after_space(self):
        """Test a code followed by a lone space has empty text."""
        assert parse_response("200 \n") == Response(200, "")

    def test_missing_space(self):
        """Test line without separator is rejected."""
        with pytest.raises(InvalidResponse) as exc_info:
            parse_response("226")

        assert exc_info.value.line == "226"

    def test_non_numeric_code(self):
        """Test non-integer prefix is rejected."""
        with pytest.raises(InvalidResponse):
            parse_response("OK Closing data connection.")

    def test_empty_line(self):
        """Test empty line (closed connection) is rejected."""
        with pytest.raises(InvalidResponse):
            parse_response("")

    def test_continuation_line_is_not_single_line_reply(self):
        """Test an opening continuation line fails single-line parsing."""
        with pytest.raises(InvalidResponse):
            parse_response("230-Welcome to the server")

    def test_str_renders_status_line(self):
        """Test Response renders back as a status line."""
        assert str(Response(550, "No such file.")) == "550 No such file."


class TestContinuation:
    """Test multi-line reply detection."""

    def test_detects_opening_line(self):
        assert is_continuation("230-Welcome")
        assert continuation_code("230-Welcome") == "230"

    def test_plain_reply_is_not_continuation(self):
        assert not is_continuation("230 Login successful.")
        assert not is_continuation("  continued text")

    def test_continuation_code_rejects_plain_line(self):
        with pytest.raises(InvalidResponse):
            continuation_code("230 Login successful.")
