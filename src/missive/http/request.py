"""HTTP request message.

Adds a method and an opaque request target to ``Message``. The target is
kept as text; URI components are not parsed.
"""

from dataclasses import dataclass, field, replace
from typing import Self

from missive.errors import InvalidArgumentError
from missive.http.message import Message
from missive.http.security import is_token


@dataclass(frozen=True, slots=True)
class Request(Message):
    """An immutable HTTP request::

        request = Request(method="POST", target="/orders").with_header("Accept", "application/json")
    """

    method: str = field(default="GET", kw_only=True)
    target: str = field(default="/", kw_only=True)

    def __post_init__(self) -> None:
        Message.__post_init__(self)
        _check_method(self.method)
        _check_target(self.target)

    def get_method(self) -> str:
        """The request method, exactly as supplied (case is preserved)."""
        return self.method

    def with_method(self, method: str) -> Self:
        """Return a new Request with a different method."""
        return replace(self, method=method)

    def get_request_target(self) -> str:
        """The request target, e.g. ``"/search?q=x"``."""
        return self.target

    def with_request_target(self, target: str) -> Self:
        """Return a new Request with a different request target."""
        return replace(self, target=target)


def _check_method(method: object) -> None:
    if not isinstance(method, str) or not is_token(method):
        msg = f"Unsupported HTTP method {method!r}; must be a non-empty token string"
        raise InvalidArgumentError(msg)


def _check_target(target: object) -> None:
    if not isinstance(target, str) or not target:
        msg = f"Invalid request target {target!r}; must be a non-empty string"
        raise InvalidArgumentError(msg)
    if any(char.isspace() for char in target):
        msg = f"Invalid request target {target!r}; cannot contain whitespace"
        raise InvalidArgumentError(msg)
