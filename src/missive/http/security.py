"""Header security — CRLF injection and control character checks.

Header names never carry CR or LF. Header values may contain exactly one
kind of embedded line break: CRLF immediately followed by a space or tab
(an obsolete line-folding continuation). Every other CR, LF or doubled
CRLF is treated as an attempt to forge headers or split the message.

``filter_header_value`` is the sanitising counterpart of the checks: it
strips what they would reject. Messages use it only when configured with
``MessageConfig(sanitize_header_values=True)``; callers may also apply it
directly to untrusted text before building a header.
"""

import logging
import re

from missive.errors import InvalidArgumentError

_log = logging.getLogger("missive.security")

# LF without CR before it, CR without LF after it, CRLF without SP/HTAB after it.
_INJECTION = re.compile(r"(?<!\r)\n|\r(?!\n)|\r\n(?![ \t])")

# C0 controls other than HTAB/LF/CR, DEL and U+00FF. Text beyond Latin-1 is allowed.
_FORBIDDEN_CHAR = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f\xff]")

# RFC 7230 section 3.2.6 token.
_TOKEN = re.compile(r"[A-Za-z0-9!#$%&'*+.^_`|~-]+")


def is_valid_header_value(value: str) -> bool:
    """True if *value* is safe to store as a header value."""
    if _INJECTION.search(value):
        return False
    return _FORBIDDEN_CHAR.search(value) is None


def is_token(value: str) -> bool:
    """True if *value* is a non-empty RFC 7230 token."""
    return _TOKEN.fullmatch(value) is not None


def assert_valid_header_name(name: object, *, strict: bool = False) -> None:
    """Raise ``InvalidArgumentError`` unless *name* is a usable header name.

    CR and LF are always rejected. With *strict*, the name must also be
    a token, which rules out spaces, colons and other separators.
    """
    if not isinstance(name, str) or not name:
        msg = f"Invalid header name; must be a non-empty string, received {type(name).__name__}"
        raise InvalidArgumentError(msg)
    if "\r" in name or "\n" in name:
        _log.warning("Rejected header name %r: CRLF injection", name)
        msg = f"Invalid header name {name!r}; CRLF injection detected"
        raise InvalidArgumentError(msg)
    if strict and not is_token(name):
        msg = f"Invalid header name {name!r}; must be an RFC 7230 token"
        raise InvalidArgumentError(msg)


def coerce_header_value(value: object) -> tuple[str, ...]:
    """Return *value* as a tuple of strings, checking types only.

    Raises:
        InvalidArgumentError: *value* is neither a string nor a list/tuple
            of strings.
    """
    if isinstance(value, str):
        return (value,)
    if not isinstance(value, (list, tuple)):
        msg = (
            "Invalid header value; must be a string or array of strings, "
            f"received {type(value).__name__}"
        )
        raise InvalidArgumentError(msg)
    for item in value:
        if not isinstance(item, str):
            msg = (
                "Invalid header value; must be a string or array of strings, "
                f"received element of type {type(item).__name__}"
            )
            raise InvalidArgumentError(msg)
    return tuple(value)


def validate_header_value(value: object) -> None:
    """Raise ``InvalidArgumentError`` unless *value* is a safe string or list of strings."""
    for item in coerce_header_value(value):
        if _INJECTION.search(item):
            _log.warning("Rejected header value: CRLF injection")
            msg = f"Invalid header value {item!r}; CRLF injection detected"
            raise InvalidArgumentError(msg)
        if _FORBIDDEN_CHAR.search(item):
            _log.warning("Rejected header value: forbidden control character")
            msg = f"Invalid header value {item!r}; forbidden control character"
            raise InvalidArgumentError(msg)


def filter_header_value(value: str) -> str:
    """Return *value* with every illegal character removed.

    Continuations (CRLF followed by SP or HTAB) survive intact; any other
    CR or LF is dropped, as are DEL, U+00FF and C0 controls other than
    HTAB.
    """
    out: list[str] = []
    i = 0
    length = len(value)
    while i < length:
        char = value[i]
        if char == "\r":
            if value[i + 1 : i + 2] == "\n" and value[i + 2 : i + 3] in (" ", "\t"):
                out.append("\r\n")
                i += 2
                continue
            i += 1
            continue
        code = ord(char)
        if (code < 32 and char != "\t") or code == 127 or code == 255:
            i += 1
            continue
        out.append(char)
        i += 1
    return "".join(out)
