"""Missive — immutable HTTP message value objects.

Protocol version, case-insensitive headers and a body stream reference,
changed only through ``.with_*()`` calls that return new messages.

Basic usage::

    from missive import Message

    message = Message(headers={"Content-Type": "text/plain"})
    message = message.with_added_header("Vary", "Accept").with_protocol_version("2")

    message.get_header("content-type")  # ["text/plain"]
    message.get_header_line("X-Missing")  # ""
"""

__version__ = "0.1.0"
__all__ = [
    "DEFAULT_CONFIG",
    "HeaderBag",
    "InvalidArgumentError",
    "Message",
    "MessageConfig",
    "MissiveError",
    "Request",
    "Response",
    "Stream",
]

# Public name -> defining module
_LAZY_IMPORTS: dict[str, str] = {
    "DEFAULT_CONFIG": "missive.config",
    "HeaderBag": "missive.http.headers",
    "InvalidArgumentError": "missive.errors",
    "Message": "missive.http.message",
    "MessageConfig": "missive.config",
    "MissiveError": "missive.errors",
    "Request": "missive.http.request",
    "Response": "missive.http.response",
    "Stream": "missive._internal.stream",
}


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import missive`` fast while providing a clean top-level API.
    """
    module_name = _LAZY_IMPORTS.get(name)
    if module_name is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)

    import importlib

    return getattr(importlib.import_module(module_name), name)
