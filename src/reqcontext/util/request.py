from __future__ import annotations

from typing import Optional


def make_content_type(content_type: str, charset: Optional[str] = None) -> str:
    """
    Build a ``Content-Type`` header value.

    The ``charset`` parameter is only appended when it is non-empty::

        >>> make_content_type("text/plain", "UTF-8")
        'text/plain; charset=UTF-8'
        >>> make_content_type("application/json", "")
        'application/json'
    """
    if charset:
        return f"{content_type}; charset={charset}"
    return content_type
