"""Missive exception hierarchy.

Every validation failure in headers, messages, requests and responses
surfaces as ``InvalidArgumentError``; callers tell the causes apart by
message text.
"""


class MissiveError(Exception):
    """Base for all missive-specific errors."""


class InvalidArgumentError(MissiveError, ValueError):
    """Raised when a message mutator or constructor receives invalid input.

    Covers non-string header values, header names or values carrying CRLF
    injection sequences, unsupported protocol versions, bad status codes
    and bad request methods. Raised eagerly; the receiving message is never
    left partially modified.
    """
