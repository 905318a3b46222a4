"""HTTP message with chainable .with_*() transformation API.

Protocol version, headers and a body stream reference shared by requests
and responses. Each transformation returns a new Message; no holder of an
earlier reference ever observes a change.
"""

from dataclasses import dataclass, field, replace
from typing import Self

from missive._internal.stream import Stream, memory_stream
from missive._internal.types import HeaderInput, RawHeaders
from missive.config import DEFAULT_CONFIG, MessageConfig
from missive.errors import InvalidArgumentError
from missive.http.headers import HeaderBag
from missive.http.security import (
    assert_valid_header_name,
    coerce_header_value,
    filter_header_value,
    validate_header_value,
)


@dataclass(frozen=True, slots=True)
class Message:
    """An HTTP message built through immutable transformations.

    Construct with optional protocol version, body and initial headers,
    then chain ``.with_*()`` calls. Each call returns a new ``Message``::

        message = (
            Message(headers={"Accept": "text/html"})
            .with_header("X-Request-Id", "abc123")
            .with_added_header("Accept", "application/json")
        )
        message.get_header_line("accept")  # "text/html,application/json"

    The initial header mapping accepts strings, ints and floats, alone or
    in lists; numbers are stored as strings. ``with_header`` and
    ``with_added_header`` accept only strings or lists of strings.

    The body is a shared reference: it is never copied, rewound or closed.
    ``None`` gives a fresh in-memory stream.
    """

    protocol_version: str | None = None
    body: Stream | None = None
    headers: HeaderBag | RawHeaders | None = None
    config: MessageConfig = field(default=DEFAULT_CONFIG, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.protocol_version is None:
            object.__setattr__(self, "protocol_version", self.config.default_protocol_version)
        self._check_protocol_version(self.protocol_version)

        if self.body is None:
            object.__setattr__(self, "body", memory_stream())
        elif isinstance(self.body, (bytes, bytearray)):
            object.__setattr__(self, "body", memory_stream(bytes(self.body)))

        if not isinstance(self.headers, HeaderBag):
            bag = HeaderBag(
                self.headers,
                strict_names=self.config.strict_header_names,
                sanitize_values=self.config.sanitize_header_values,
            )
            object.__setattr__(self, "headers", bag)
        elif self.config.strict_header_names:
            # A prebuilt bag may have been validated under a looser policy
            for name in self.headers:
                assert_valid_header_name(name, strict=True)

    def _check_protocol_version(self, version: object) -> None:
        if not isinstance(version, str):
            msg = f"Unsupported HTTP protocol version; must be a string, received {type(version).__name__}"
            raise InvalidArgumentError(msg)
        if not version:
            msg = "HTTP protocol version can not be empty"
            raise InvalidArgumentError(msg)
        if version not in self.config.protocol_versions:
            msg = (
                f"Unsupported HTTP protocol version {version!r} provided; "
                f"expected one of {', '.join(self.config.protocol_versions)}"
            )
            raise InvalidArgumentError(msg)

    def _checked_values(self, name: str, value: HeaderInput) -> tuple[str, ...]:
        assert_valid_header_name(name, strict=self.config.strict_header_names)
        values = coerce_header_value(value)
        if self.config.sanitize_header_values:
            values = tuple(filter_header_value(v) for v in values)
        validate_header_value(values)
        return values

    # -- Protocol version --

    def get_protocol_version(self) -> str:
        """The HTTP protocol version, e.g. ``"1.1"``."""
        return self.protocol_version  # type: ignore[return-value]

    def with_protocol_version(self, version: str) -> Self:
        """Return a new Message with a different protocol version."""
        # None would otherwise fall back to the configured default
        self._check_protocol_version(version)
        return replace(self, protocol_version=version)

    # -- Body --

    def get_body(self) -> Stream:
        """The body stream, exactly as supplied."""
        return self.body  # type: ignore[return-value]

    def with_body(self, body: Stream) -> Self:
        """Return a new Message referencing *body*. The stream is not copied."""
        return replace(self, body=body)

    # -- Headers --

    @property
    def header_bag(self) -> HeaderBag:
        """The underlying immutable ``HeaderBag``."""
        return self.headers  # type: ignore[return-value]

    def get_headers(self) -> dict[str, list[str]]:
        """All headers as ``{registered name: [values]}``.

        Names keep the casing they were first registered with. The dict is
        a fresh copy; changing it does not affect the message.
        """
        return self.header_bag.to_dict()

    def has_header(self, name: str) -> bool:
        """True if a header matching *name* case-insensitively exists."""
        return name in self.header_bag

    def get_header(self, name: str) -> list[str]:
        """Values for *name* (case-insensitive), or ``[]`` if missing."""
        return self.header_bag.get_list(name)

    def get_header_line(self, name: str) -> str:
        """Values for *name* joined with ``,``, or ``""`` if missing."""
        return self.header_bag.get_line(name)

    def with_header(self, name: str, value: HeaderInput) -> Self:
        """Return a new Message where *name* holds exactly *value*.

        Any header matching *name* case-insensitively is replaced, and the
        new casing is kept.

        Raises:
            InvalidArgumentError: *value* is not a string or list of strings,
                or *name* / *value* carries CRLF injection.
        """
        values = self._checked_values(name, value)
        return replace(self, headers=self.header_bag.replacing(name, values))

    def with_added_header(self, name: str, value: HeaderInput) -> Self:
        """Return a new Message with *value* appended to *name*.

        An existing header keeps its registered casing. A missing header
        is created as with ``with_header``.

        Raises:
            InvalidArgumentError: *value* is not a string or list of strings,
                or *name* / *value* carries CRLF injection.
        """
        values = self._checked_values(name, value)
        return replace(self, headers=self.header_bag.appending(name, values))

    def without_header(self, name: str) -> Self:
        """Return a new Message without *name* (case-insensitive).

        A missing header is not an error; the result is an equivalent copy.
        """
        return replace(self, headers=self.header_bag.removing(name))
