"""HTTP response message.

Adds a status code and reason phrase to ``Message``.
"""

from dataclasses import dataclass, field, replace
from http import HTTPStatus
from typing import Self

from missive.errors import InvalidArgumentError
from missive.http.message import Message
from missive.http.security import is_valid_header_value


@dataclass(frozen=True, slots=True)
class Response(Message):
    """An immutable HTTP response.

    ``reason_phrase`` may be left empty; ``get_reason_phrase`` then falls
    back to the standard phrase for the status code, if there is one.
    """

    status: int = field(default=200, kw_only=True)
    reason_phrase: str = field(default="", kw_only=True)

    def __post_init__(self) -> None:
        Message.__post_init__(self)
        _check_status(self.status)
        if not _is_valid_reason_phrase(self.reason_phrase):
            msg = f"Invalid reason phrase {self.reason_phrase!r}"
            raise InvalidArgumentError(msg)

    def get_status_code(self) -> int:
        return self.status

    def get_reason_phrase(self) -> str:
        """The reason phrase, defaulting to the standard one for the status."""
        if self.reason_phrase:
            return self.reason_phrase
        try:
            return HTTPStatus(self.status).phrase
        except ValueError:
            return ""

    def with_status(self, status: int, reason_phrase: str = "") -> Self:
        """Return a new Response with a different status code and phrase."""
        return replace(self, status=status, reason_phrase=reason_phrase)


def _is_valid_reason_phrase(phrase: object) -> bool:
    # Folded continuations are legal in header values, never on the status line
    if not isinstance(phrase, str) or "\r" in phrase or "\n" in phrase:
        return False
    return is_valid_header_value(phrase)


def _check_status(status: object) -> None:
    # bool is an int subclass but never a status code
    if not isinstance(status, int) or isinstance(status, bool) or not 100 <= status <= 599:
        msg = f"Invalid status code {status!r}; must be an integer between 100 and 599"
        raise InvalidArgumentError(msg)
