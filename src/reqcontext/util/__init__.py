from __future__ import annotations

from .query import append_query, encode_query, iter_query_pairs
from .request import make_content_type
from .timeout import validate_timeout

__all__ = (
    "append_query",
    "encode_query",
    "iter_query_pairs",
    "make_content_type",
    "validate_timeout",
)
