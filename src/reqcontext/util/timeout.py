from __future__ import annotations

import math
from typing import Union

from ..exceptions import InvalidTimeoutError

_TYPE_TIMEOUT = Union[int, float]

NO_TIMEOUT = 0


def validate_timeout(value: _TYPE_TIMEOUT, name: str) -> _TYPE_TIMEOUT:
    """Check that a timeout value is a non-negative number of seconds.

    :param value: The timeout value to validate
    :param name: The name of the timeout attribute to validate. This is
        used to specify in error messages.
    :return: The validated and casted version of the given value.
    :raises InvalidTimeoutError: If it is a boolean, not a number, NaN or
        negative.
    """
    if isinstance(value, bool):
        raise InvalidTimeoutError(name, value)

    try:
        seconds = float(value)
    except (TypeError, ValueError):
        raise InvalidTimeoutError(name, value) from None

    if math.isnan(seconds):
        raise InvalidTimeoutError(name, value)

    try:
        if value < NO_TIMEOUT:
            raise InvalidTimeoutError(name, value)
    except TypeError:
        raise InvalidTimeoutError(name, value) from None

    return value
