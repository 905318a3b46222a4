"""Tests for missive.http.security — CRLF injection and header character rules."""

import logging

import pytest

from missive.errors import InvalidArgumentError
from missive.http.security import (
    assert_valid_header_name,
    coerce_header_value,
    filter_header_value,
    is_token,
    is_valid_header_value,
    validate_header_value,
)


class TestIsValidHeaderValue:
    @pytest.mark.parametrize(
        "value",
        [
            "value",
            "",
            "value,\r\n second value",
            "value,\r\n\tsecond value",
            "tab\tinside",
            "caf\xe9",
            "snow☃man",
            "日本語",
        ],
    )
    def test_valid(self, value: str) -> None:
        assert is_valid_header_value(value)

    @pytest.mark.parametrize(
        "value",
        [
            "value\rinjection",
            "value\ninjection",
            "value\r\ninjection",
            "value\r\n\r\ninjection",
            "trailing\r\n",
            "trailing\r",
            "nul\x00byte",
            "del\x7f",
            "y\xff",
            "bell\x07",
        ],
        ids=["cr", "lf", "crlf", "2crlf", "trailing-crlf", "trailing-cr", "nul", "del", "ff", "bell"],
    )
    def test_invalid(self, value: str) -> None:
        assert not is_valid_header_value(value)


class TestAssertValidHeaderName:
    @pytest.mark.parametrize("name", ["X-Foo\r-Bar", "X-Foo\n-Bar", "X-Foo\r\n-Bar", "X-Foo\r\n\r\n-Bar"])
    def test_rejects_crlf(self, name: str) -> None:
        with pytest.raises(InvalidArgumentError, match="CRLF injection"):
            assert_valid_header_name(name)

    def test_rejects_crlf_when_strict(self) -> None:
        with pytest.raises(InvalidArgumentError, match="CRLF injection"):
            assert_valid_header_name("X-Foo\r\n", strict=True)

    @pytest.mark.parametrize("name", ["", None, 42])
    def test_rejects_empty_or_non_string(self, name: object) -> None:
        with pytest.raises(InvalidArgumentError, match="Invalid header name"):
            assert_valid_header_name(name)

    @pytest.mark.parametrize("name", ["X Foo", "X-Foo:", "(comment)", "caf\xe9"])
    def test_non_token_names_allowed_by_default(self, name: str) -> None:
        assert_valid_header_name(name)

    @pytest.mark.parametrize("name", ["X Foo", "X-Foo:", "(comment)", "caf\xe9"])
    def test_strict_requires_token(self, name: str) -> None:
        with pytest.raises(InvalidArgumentError, match="token"):
            assert_valid_header_name(name, strict=True)

    def test_accepts_tokens(self) -> None:
        assert_valid_header_name("X-Custom_Header.v2~!", strict=True)
        assert is_token("Content-Type")
        assert not is_token("")

    def test_logs_rejected_name(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="missive.security"):
            with pytest.raises(InvalidArgumentError):
                assert_valid_header_name("X-Foo\r\nSet-Cookie")
        assert "CRLF injection" in caplog.text
        assert "\\r\\n" in caplog.text


class TestCoerceHeaderValue:
    def test_string_becomes_one_tuple(self) -> None:
        assert coerce_header_value("a") == ("a",)

    def test_list_and_tuple(self) -> None:
        assert coerce_header_value(["a", "b"]) == ("a", "b")
        assert coerce_header_value(("a",)) == ("a",)

    def test_does_not_check_characters(self) -> None:
        assert coerce_header_value("a\r\nb") == ("a\r\nb",)


class TestValidateHeaderValue:
    @pytest.mark.parametrize("value", [None, True, 1, 1.1, {"foo": "bar"}, object()])
    def test_rejects_non_string_non_list(self, value: object) -> None:
        with pytest.raises(InvalidArgumentError, match="Invalid header value"):
            validate_header_value(value)

    @pytest.mark.parametrize("item", [None, True, 1, 1.1, ["nested"], {"foo": "bar"}])
    def test_rejects_non_string_elements(self, item: object) -> None:
        with pytest.raises(InvalidArgumentError, match="must be a string"):
            validate_header_value(["ok", item])

    @pytest.mark.parametrize("value", ["value\rinjection", ["ok", "value\r\n\r\ninjection"]])
    def test_rejects_injection(self, value: object) -> None:
        with pytest.raises(InvalidArgumentError, match="CRLF injection"):
            validate_header_value(value)

    def test_control_characters_reported_separately(self) -> None:
        with pytest.raises(InvalidArgumentError, match="forbidden control character"):
            validate_header_value("nul\x00byte")

    def test_accepts_strings_lists_and_tuples(self) -> None:
        validate_header_value("value,\r\n second value")
        validate_header_value(["a", "b"])
        validate_header_value(("a",))
        validate_header_value([])
        validate_header_value("snow☃man")


class TestFilterHeaderValue:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("value\rinjection", "valueinjection"),
            ("value\ninjection", "valueinjection"),
            ("value\r\ninjection", "valueinjection"),
            ("value\r\n\r\ninjection", "valueinjection"),
            ("value,\r\n second value", "value,\r\n second value"),
            ("a\x00b\x7fc\xffd", "abcd"),
            ("tab\tkept", "tab\tkept"),
            ("trailing\r", "trailing"),
            ("snow☃man", "snow☃man"),
        ],
    )
    def test_strips_illegal_sequences(self, value: str, expected: str) -> None:
        assert filter_header_value(value) == expected

    def test_result_is_always_valid(self) -> None:
        dirty = "a\r\n\r\n b\rc\nd\r\n\te\x01"
        assert is_valid_header_value(filter_header_value(dirty))
