"""Stream protocol — the body collaborator a message references.

A structural protocol so any binary file-like object can serve as a
message body without coupling to a concrete stream class.
"""

import io
from typing import Protocol, runtime_checkable


@runtime_checkable
class Stream(Protocol):
    """A readable, writable, seekable byte stream.

    Structurally compatible with ``io.BytesIO`` and binary file objects.
    Messages hold a shared reference and never copy, close or rewind it.
    """

    def read(self, size: int = -1, /) -> bytes: ...
    def write(self, data: bytes, /) -> int: ...
    def seek(self, offset: int, whence: int = 0, /) -> int: ...
    def tell(self) -> int: ...


def memory_stream(initial: bytes = b"") -> io.BytesIO:
    """Return a fresh in-memory stream, the default body of a message."""
    return io.BytesIO(initial)
