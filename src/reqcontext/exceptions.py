from __future__ import annotations

from typing import Any, Callable, Iterable, Tuple

_TYPE_REDUCE_RESULT = Tuple[Callable[..., object], Tuple[object, ...]]


class RequestContextError(Exception):
    """Base exception used by this module."""

    pass


class InvalidMethodError(RequestContextError, ValueError):
    """Raised when a request is given an HTTP method outside the supported set."""

    def __init__(self, method: Any, supported: Iterable[str] = ()) -> None:
        self.method = method
        self.supported = tuple(sorted(supported))
        message = f"Supplied HTTP method is not supported: {method!r}"
        if self.supported:
            message += f" (expected one of {', '.join(self.supported)})"
        super().__init__(message)

    def __reduce__(self) -> _TYPE_REDUCE_RESULT:
        # For pickling purposes.
        return self.__class__, (self.method, self.supported)


class InvalidHeader(RequestContextError, ValueError):
    """The header provided was somehow invalid."""

    pass


class InvalidTimeoutError(RequestContextError, ValueError):
    """Raised when a timeout is not a non-negative number of seconds."""

    def __init__(self, name: str, value: Any) -> None:
        self.name = name
        self.value = value
        super().__init__(
            f"{name} value must be a non-negative int or float, not {value!r}"
        )

    def __reduce__(self) -> _TYPE_REDUCE_RESULT:
        # For pickling purposes.
        return self.__class__, (self.name, self.value)
