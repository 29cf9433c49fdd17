"""
Describe outgoing HTTP requests: method, URI, headers, body, query parameters
and transport options, ready to be handed to a transport.
"""
from __future__ import annotations

# Set default logging handler to avoid "No handler found" warnings.
import logging
from logging import NullHandler
from typing import TextIO

from . import exceptions
from ._collections import HTTPHeaderDict
from ._version import __version__
from .request import (
    AVAILABLE_METHODS,
    CHARSET_ISO88591,
    CHARSET_UTF8,
    CONNECTION_TIMEOUT_DEFAULT,
    CONTENT_TYPE_APP_XML,
    CONTENT_TYPE_FORM,
    CONTENT_TYPE_FORM_URLENCODED,
    CONTENT_TYPE_JAVASCRIPT,
    CONTENT_TYPE_JSON,
    CONTENT_TYPE_TEXT_HTML,
    CONTENT_TYPE_TEXT_PLAIN,
    CONTENT_TYPE_TEXT_XML,
    METHOD_CONNECT,
    METHOD_DELETE,
    METHOD_GET,
    METHOD_HEAD,
    METHOD_OPTIONS,
    METHOD_PATCH,
    METHOD_POST,
    METHOD_PUT,
    METHOD_TRACE,
    TIMEOUT_DEFAULT,
    RequestContext,
)
from .util.query import encode_query

__license__ = "MIT"
__version__ = __version__

__all__ = (
    "AVAILABLE_METHODS",
    "CHARSET_ISO88591",
    "CHARSET_UTF8",
    "CONNECTION_TIMEOUT_DEFAULT",
    "CONTENT_TYPE_APP_XML",
    "CONTENT_TYPE_FORM",
    "CONTENT_TYPE_FORM_URLENCODED",
    "CONTENT_TYPE_JAVASCRIPT",
    "CONTENT_TYPE_JSON",
    "CONTENT_TYPE_TEXT_HTML",
    "CONTENT_TYPE_TEXT_PLAIN",
    "CONTENT_TYPE_TEXT_XML",
    "HTTPHeaderDict",
    "METHOD_CONNECT",
    "METHOD_DELETE",
    "METHOD_GET",
    "METHOD_HEAD",
    "METHOD_OPTIONS",
    "METHOD_PATCH",
    "METHOD_POST",
    "METHOD_PUT",
    "METHOD_TRACE",
    "RequestContext",
    "TIMEOUT_DEFAULT",
    "add_stderr_logger",
    "encode_query",
    "exceptions",
)

logging.getLogger(__name__).addHandler(NullHandler())

# ... Clean up.
del NullHandler


def add_stderr_logger(level: int = logging.DEBUG) -> "logging.StreamHandler[TextIO]":
    """
    Helper for quickly adding a StreamHandler to the logger. Useful for
    debugging.

    Returns the handler after adding it.
    """
    # This method needs to be in this __init__.py to get the __name__ correct
    # even if reqcontext is vendored within another package.
    logger = logging.getLogger(__name__)
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.debug("Added a stderr logging handler to logger: %s", __name__)
    return handler
