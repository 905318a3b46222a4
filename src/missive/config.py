"""Message configuration.

MessageConfig is a frozen dataclass carried by every message and handed
on unchanged to each derived copy.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class MessageConfig:
    """Validation policy for messages. Immutable after creation.

    Override what you need::

        config = MessageConfig(strict_header_names=True)
        message = Message(config=config)
    """

    # Protocol
    default_protocol_version: str = "1.1"
    protocol_versions: tuple[str, ...] = ("1.0", "1.1", "2", "2.0")

    # Headers
    strict_header_names: bool = False  # Also require RFC 7230 tokens, not just "no CR/LF"
    sanitize_header_values: bool = False  # Strip illegal characters instead of rejecting


DEFAULT_CONFIG = MessageConfig()
