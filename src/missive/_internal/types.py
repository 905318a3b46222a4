"""Shared type aliases used across missive modules."""

from collections.abc import Mapping, Sequence
from typing import TypeAlias

# A single header value as accepted by the initial header mapping
HeaderScalar: TypeAlias = str | int | float

# Value accepted by with_header / with_added_header
HeaderInput: TypeAlias = str | Sequence[str]

# Initial header mapping passed to Message / HeaderBag
RawHeaders: TypeAlias = Mapping[str, HeaderScalar | Sequence[HeaderScalar]]
