from __future__ import annotations

from typing import Any, Callable, Iterator, List, Mapping, Sequence, Tuple, Union
from urllib.parse import quote_plus

_TYPE_QUERY_PARAMS = Union[Mapping[Any, Any], Sequence[Any]]
_TYPE_QUERY_PROCESSOR = Callable[[str, _TYPE_QUERY_PARAMS], str]
_TYPE_QUERY_VALUE = Union[str, bytes]


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def _format_key(key: Any) -> str:
    if isinstance(key, bytes):
        # Undecodable bytes survive as surrogates and are restored by quote_plus.
        return key.decode("utf-8", "surrogateescape")
    return str(key)


def _format_value(value: Any) -> _TYPE_QUERY_VALUE:
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, bytes):
        return value
    return str(value)


def _iter_top_level(params: _TYPE_QUERY_PARAMS) -> Iterator[Tuple[Any, Any]]:
    if isinstance(params, Mapping):
        return iter(params.items())
    if _is_sequence(params):
        return enumerate(params)
    raise TypeError(
        f"Query parameters must be a mapping, list or tuple, not {type(params).__name__}"
    )


def iter_query_pairs(
    params: _TYPE_QUERY_PARAMS, encode_arrays_using_duplication: bool = False
) -> Iterator[Tuple[str, _TYPE_QUERY_VALUE]]:
    """
    Flatten nested query parameters into ``(key, value)`` pairs.

    Nested mappings always use bracket notation (``a[b]``). Nested lists and
    tuples use indexed bracket notation (``a[0]``) unless
    ``encode_arrays_using_duplication`` is set, in which case the key is
    repeated for every item (``a=1&a=2``). ``None`` values are skipped and
    bytes values are yielded unchanged.
    """

    def walk(prefix: str, value: Any) -> Iterator[Tuple[str, _TYPE_QUERY_VALUE]]:
        if value is None:
            return
        if isinstance(value, Mapping):
            for sub_key, sub_value in value.items():
                yield from walk(f"{prefix}[{_format_key(sub_key)}]", sub_value)
        elif _is_sequence(value):
            for index, item in enumerate(value):
                key = prefix if encode_arrays_using_duplication else f"{prefix}[{index}]"
                yield from walk(key, item)
        else:
            yield prefix, _format_value(value)

    for key, value in _iter_top_level(params):
        yield from walk(_format_key(key), value)


def encode_query(
    params: _TYPE_QUERY_PARAMS, encode_arrays_using_duplication: bool = False
) -> str:
    """
    Encode ``params`` as an ``application/x-www-form-urlencoded`` query string.

    :param params:
        A mapping of names to values, or a list/tuple whose indices are used
        as names. Values may be scalars, lists, tuples or nested mappings.

    :param encode_arrays_using_duplication:
        Repeat the name for each item of a list instead of using indexed
        brackets.

    Example::

        >>> encode_query({"a": 1, "b": "c"})
        'a=1&b=c'
        >>> encode_query({"text": [1, 2]})
        'text%5B0%5D=1&text%5B1%5D=2'
        >>> encode_query({"text": [1, 2]}, encode_arrays_using_duplication=True)
        'text=1&text=2'
    """
    parts: List[str] = [
        f"{quote_plus(key, errors='surrogateescape')}={quote_plus(value)}"
        for key, value in iter_query_pairs(params, encode_arrays_using_duplication)
    ]
    return "&".join(parts)


def append_query(uri: str, query: str) -> str:
    """
    Append an already encoded ``query`` to ``uri``.

    A ``?`` is inserted when ``uri`` has no query yet, ``&`` when it already
    has one. A fragment, if present, stays at the end.
    """
    if not query:
        return uri

    base, hash_sign, fragment = uri.partition("#")
    if "?" not in base:
        base += "?"
    elif not base.endswith(("?", "&")):
        base += "&"

    return f"{base}{query}{hash_sign}{fragment}"
