"""Immutable, case-insensitive, case-preserving HTTP headers.

``HeaderBag`` implements ``Mapping[str, tuple[str, ...]]`` keyed by the
original-case header name. Lookups ignore case; enumeration uses the
casing under which each header was first registered.
"""

from collections.abc import Iterable, Iterator, Mapping
from typing import Self

from missive._internal.types import HeaderScalar, RawHeaders
from missive.errors import InvalidArgumentError
from missive.http.security import (
    assert_valid_header_name,
    filter_header_value,
    validate_header_value,
)


def _is_scalar(value: object) -> bool:
    # bool is an int subclass but never a header value
    return isinstance(value, (str, int, float)) and not isinstance(value, bool)


def _type_error(value: object) -> InvalidArgumentError:
    return InvalidArgumentError(
        f"Invalid header value type; must be a string or numeric, received {type(value).__name__}"
    )


def filter_headers(raw_headers: RawHeaders) -> tuple[dict[str, str], dict[str, list[str]]]:
    """Normalize a raw header mapping into co-indexed name and value tables.

    Returns ``(names, headers)``:

    - ``names`` maps each lowercase name to the first casing seen for it.
    - ``headers`` maps that casing to the list of string values.

    Scalars (str, int, float) become one-element lists and numbers are
    converted with ``str()``. Values registered under a different casing
    of an existing name are appended to the first casing. Empty lists
    register nothing.

    Raises:
        InvalidArgumentError: A value, or an element of a list value, is
            ``None``, a bool, a nested list, a mapping or any other object.
    """
    names: dict[str, str] = {}
    headers: dict[str, list[str]] = {}

    for name, value in raw_headers.items():
        if not isinstance(name, str):
            msg = f"Invalid header name; must be a string, received {type(name).__name__}"
            raise InvalidArgumentError(msg)
        if _is_scalar(value):
            items: Iterable[HeaderScalar] = (value,)  # type: ignore[assignment]
        elif isinstance(value, (list, tuple)):
            for item in value:
                if not _is_scalar(item):
                    raise _type_error(item)
            items = value
        else:
            raise _type_error(value)

        coerced = [str(item) for item in items]
        if not coerced:
            continue

        canonical = names.setdefault(name.lower(), name)
        headers.setdefault(canonical, []).extend(coerced)

    return names, headers


class HeaderBag(Mapping[str, tuple[str, ...]]):
    """Immutable headers with case-insensitive lookup.

    Attributes:
        _names: Lowercase name -> registered casing.
        _values: Registered casing -> tuple of values (never empty).

    ``replacing``, ``appending`` and ``removing`` return new bags; the
    receiver never changes.
    """

    _names: dict[str, str]
    _values: dict[str, tuple[str, ...]]

    __slots__ = ("_names", "_values")

    def __init__(
        self,
        raw: RawHeaders | None = None,
        *,
        strict_names: bool = False,
        sanitize_values: bool = False,
    ) -> None:
        names, headers = filter_headers(raw or {})
        if sanitize_values:
            headers = {k: [filter_header_value(v) for v in vs] for k, vs in headers.items()}
        for name, values in headers.items():
            assert_valid_header_name(name, strict=strict_names)
            validate_header_value(values)
        object.__setattr__(self, "_names", names)
        object.__setattr__(self, "_values", {k: tuple(v) for k, v in headers.items()})

    @classmethod
    def _build(cls, names: dict[str, str], values: dict[str, tuple[str, ...]]) -> Self:
        bag = cls.__new__(cls)
        object.__setattr__(bag, "_names", names)
        object.__setattr__(bag, "_values", values)
        return bag

    def __setattr__(self, name: str, value: object) -> None:
        msg = f"{type(self).__name__} is immutable"
        raise AttributeError(msg)

    def __getitem__(self, key: str) -> tuple[str, ...]:
        canonical = self._names.get(key.lower()) if isinstance(key, str) else None
        if canonical is None:
            raise KeyError(key)
        return self._values[canonical]

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, str):
            return False
        return key.lower() in self._names

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, HeaderBag):
            return list(self._values.items()) == list(other._values.items())
        return NotImplemented

    def __hash__(self) -> int:
        return hash(tuple(self._values.items()))

    def __repr__(self) -> str:
        items = ", ".join(f"{k!r}: {list(v)!r}" for k, v in self._values.items())
        return f"HeaderBag({{{items}}})"

    def get_list(self, key: str) -> list[str]:
        """Return all values for *key*, or an empty list if missing."""
        canonical = self._names.get(key.lower())
        if canonical is None:
            return []
        return list(self._values[canonical])

    def get_line(self, key: str) -> str:
        """Return the values for *key* joined with ``,``, or ``""`` if missing."""
        return ",".join(self.get_list(key))

    def to_dict(self) -> dict[str, list[str]]:
        """Return a fresh ``{registered name: [values]}`` dict."""
        return {name: list(values) for name, values in self._values.items()}

    # -- Derived bags --

    def replacing(self, name: str, values: Iterable[str]) -> Self:
        """Return a bag where *name* (any casing) holds exactly *values*.

        The new casing replaces the old one and the header moves to the
        end of the enumeration order. Empty *values* removes the header.
        """
        bag = self.removing(name)
        new = tuple(values)
        if not new:
            return bag
        bag._names[name.lower()] = name
        bag._values[name] = new
        return bag

    def appending(self, name: str, values: Iterable[str]) -> Self:
        """Return a bag with *values* appended under the registered casing of *name*."""
        new = tuple(values)
        canonical = self._names.get(name.lower())
        if canonical is None:
            return self.replacing(name, new)
        merged = dict(self._values)
        merged[canonical] = (*merged[canonical], *new)
        return self._build(dict(self._names), merged)

    def removing(self, name: str) -> Self:
        """Return a bag without *name* (any casing). Missing names are fine."""
        names = dict(self._names)
        values = dict(self._values)
        canonical = names.pop(name.lower(), None)
        if canonical is not None:
            del values[canonical]
        return self._build(names, values)
