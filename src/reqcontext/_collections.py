from __future__ import annotations

import re
from collections.abc import Mapping, MutableMapping
from typing import Any, Dict, Iterable, Iterator, Optional, Tuple, Union

from .exceptions import InvalidHeader

__all__ = ["HTTPHeaderDict"]

_TYPE_HEADER_KEY = Union[str, bytes]
_TYPE_HEADERS_INPUT = Union[
    Mapping[_TYPE_HEADER_KEY, Any], Iterable[Tuple[_TYPE_HEADER_KEY, Any]]
]

# RFC 7230 Section 3.2.6 token characters.
_HEADER_NAME_RE = re.compile(r"^[!#$%&'*+\-.^_`|~0-9a-zA-Z]+$")
_HEADER_VALUE_FORBIDDEN_RE = re.compile(r"[\r\n\x00]")


def _normalize_name(key: _TYPE_HEADER_KEY) -> str:
    if isinstance(key, bytes):
        key = key.decode("latin-1")
    elif not isinstance(key, str):
        raise InvalidHeader(f"Header name must be str or bytes, not {type(key).__name__}")
    if not _HEADER_NAME_RE.match(key):
        raise InvalidHeader(f"Invalid header name {key!r}")
    return key.lower()


def _normalize_value(name: str, value: Any) -> str:
    if isinstance(value, bytes):
        value = value.decode("latin-1")
    else:
        value = str(value)
    if _HEADER_VALUE_FORBIDDEN_RE.search(value):
        raise InvalidHeader(f"Invalid value for header {name!r}: {value!r}")
    return value


class HTTPHeaderDict(MutableMapping[str, str]):
    """
    :param headers:
        A mapping or an iterable of field-value pairs.

    :param kwargs:
        Additional field-value pairs to pass in to ``dict.update``.

    A ``dict`` like container for storing the headers of an outgoing request.

    Field names are compared case-insensitively in compliance with RFC 7230
    and are stored lowercased, so iteration yields lowercase names in
    insertion order. Setting a field that already exists overwrites its value
    in place without changing its position.

    >>> headers = HTTPHeaderDict()
    >>> headers['Content-Length'] = '7'
    >>> headers['content-length']
    '7'
    >>> headers.get_headers_for_request()
    {'content-length': 'content-length: 7'}
    """

    _container: Dict[str, str]

    def __init__(
        self, headers: Optional[_TYPE_HEADERS_INPUT] = None, **kwargs: Any
    ) -> None:
        super().__init__()
        self._container = {}
        if headers is not None:
            self.merge_headers(headers)
        if kwargs:
            self.merge_headers(kwargs)

    def __setitem__(self, key: _TYPE_HEADER_KEY, val: Any) -> None:
        name = _normalize_name(key)
        self._container[name] = _normalize_value(name, val)

    def __getitem__(self, key: _TYPE_HEADER_KEY) -> str:
        return self._container[self._lookup_key(key)]

    def __delitem__(self, key: _TYPE_HEADER_KEY) -> None:
        del self._container[self._lookup_key(key)]

    def __contains__(self, key: object) -> bool:
        if isinstance(key, (str, bytes)):
            return self._lookup_key(key) in self._container
        return False

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Mapping) and not hasattr(other, "keys"):
            return False
        if not isinstance(other, HTTPHeaderDict):
            try:
                other = type(self)(other)  # type: ignore[arg-type]
            except InvalidHeader:
                return False
        return self._container == other._container

    def __ne__(self, other: object) -> bool:
        return not self.__eq__(other)

    def __len__(self) -> int:
        return len(self._container)

    def __iter__(self) -> Iterator[str]:
        return iter(self._container)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._container})"

    def __or__(self, other: object) -> HTTPHeaderDict:
        if not isinstance(other, Mapping):
            return NotImplemented
        merged = self.copy()
        merged.merge_headers(other)
        return merged

    def __ior__(self, other: object) -> HTTPHeaderDict:
        if not isinstance(other, Mapping):
            return NotImplemented
        self.merge_headers(other)
        return self

    def __ror__(self, other: object) -> HTTPHeaderDict:
        if not isinstance(other, Mapping):
            return NotImplemented
        merged = type(self)(other)
        merged.merge_headers(self)
        return merged

    @staticmethod
    def _lookup_key(key: _TYPE_HEADER_KEY) -> str:
        # Lookups never validate, so a malformed name is simply absent.
        if isinstance(key, bytes):
            key = key.decode("latin-1")
        return key.lower()

    def copy(self) -> HTTPHeaderDict:
        clone = type(self)()
        clone._container = dict(self._container)
        return clone

    def discard(self, key: _TYPE_HEADER_KEY) -> None:
        try:
            del self[key]
        except KeyError:
            pass

    def header_exists(self, key: _TYPE_HEADER_KEY) -> bool:
        return key in self

    def set_header(self, key: _TYPE_HEADER_KEY, val: Any) -> None:
        """Set a single header, overwriting any existing value."""
        self[key] = val

    def set_headers(self, headers: _TYPE_HEADERS_INPUT) -> None:
        """Replace every header with the ones given.

        The current headers are left untouched if any of the new ones is
        invalid.
        """
        replacement = type(self)(headers)
        self._container = replacement._container

    def merge_headers(self, headers: _TYPE_HEADERS_INPUT) -> None:
        """Generic import function for any type of header-like object.

        Existing fields are overwritten, new ones are appended.
        """
        if isinstance(headers, Mapping):
            for key in headers:
                self[key] = headers[key]
        elif hasattr(headers, "keys"):
            for key in headers.keys():
                self[key] = headers[key]  # type: ignore[index]
        else:
            for key, value in headers:
                self[key] = value

    def get_headers(self) -> Dict[str, str]:
        return dict(self._container)

    def get_headers_for_request(self) -> Dict[str, str]:
        """Headers formatted as ``name: value`` lines, keyed by name."""
        return {name: f"{name}: {value}" for name, value in self._container.items()}
