from __future__ import annotations

import logging
from pprint import pformat
from typing import Any, Dict, Mapping, Optional

from ._collections import _TYPE_HEADERS_INPUT, HTTPHeaderDict
from .exceptions import InvalidMethodError
from .util.query import (
    _TYPE_QUERY_PARAMS,
    _TYPE_QUERY_PROCESSOR,
    append_query,
    encode_query,
)
from .util.request import make_content_type
from .util.timeout import _TYPE_TIMEOUT, validate_timeout

__all__ = ["RequestContext"]

log = logging.getLogger(__name__)

TIMEOUT_DEFAULT = 10
CONNECTION_TIMEOUT_DEFAULT = 5

CHARSET_UTF8 = "UTF-8"
CHARSET_ISO88591 = "ISO-8859-1"

METHOD_OPTIONS = "OPTIONS"
METHOD_GET = "GET"
METHOD_HEAD = "HEAD"
METHOD_POST = "POST"
METHOD_PUT = "PUT"
METHOD_DELETE = "DELETE"
METHOD_TRACE = "TRACE"
METHOD_CONNECT = "CONNECT"
METHOD_PATCH = "PATCH"

AVAILABLE_METHODS = frozenset(
    [
        METHOD_OPTIONS,
        METHOD_GET,
        METHOD_HEAD,
        METHOD_POST,
        METHOD_PUT,
        METHOD_DELETE,
        METHOD_TRACE,
        METHOD_CONNECT,
        METHOD_PATCH,
    ]
)

CONTENT_TYPE_FORM = "multipart/form-data"
CONTENT_TYPE_FORM_URLENCODED = "application/x-www-form-urlencoded"
CONTENT_TYPE_TEXT_PLAIN = "text/plain"
CONTENT_TYPE_JSON = "application/json"
CONTENT_TYPE_JAVASCRIPT = "application/javascript"
CONTENT_TYPE_APP_XML = "application/xml"
CONTENT_TYPE_TEXT_XML = "text/xml"
CONTENT_TYPE_TEXT_HTML = "text/html"

_SECTION_RULE = "==================="

# Sentinel used to tell "not passed" apart from None in the constructor.
_DEFAULT = object()


class RequestContext:
    """
    Describes a single outgoing HTTP request.

    The context only holds configuration. It is built up by the caller and
    then read by whatever transport performs the request, typically through
    :meth:`get_request_uri`, :meth:`get_request_headers`, :attr:`method`,
    :attr:`data` and :attr:`transport_options`, or all at once through
    :meth:`get_kwargs`.

    :param uri:
        Target URI. Stored as given; query parameters are appended by
        :meth:`get_request_uri`.

    :param method:
        One of :data:`AVAILABLE_METHODS`. Compared case-sensitively.

    :param headers:
        Initial headers, as a mapping or an iterable of pairs.

    :param data:
        Request body. Passed through to the transport untouched, so callers
        are responsible for serializing it.

    :param request_parameters:
        Parameters encoded into the query string of the request URI.

    :param transport_options:
        Opaque options forwarded to the transport (cURL options and the like).

    :param content_type:
        Used to synthesize a ``Content-Type`` header when none was set.

    :param charset:
        Appended to the synthesized ``Content-Type`` unless empty.

    :param connection_timeout:
        Seconds to wait for a connection. ``0`` disables the limit.

    :param timeout:
        Seconds to wait for the whole request. ``0`` disables the limit.

    :param proxy:
        Address of a proxy server, passed through.

    :param proxy_script:
        Prefix prepended to the URI by proxy scripts, passed through.

    Example::

        >>> ctx = RequestContext("http://example.com/search")
        >>> ctx.method = "POST"
        >>> ctx.request_parameters = {"q": "kittens", "page": 2}
        >>> ctx.get_request_uri()
        'http://example.com/search?q=kittens&page=2'
    """

    DEFAULT_METHOD = METHOD_GET
    DEFAULT_CONTENT_TYPE = CONTENT_TYPE_TEXT_PLAIN
    DEFAULT_CHARSET = CHARSET_UTF8
    DEFAULT_TIMEOUT: _TYPE_TIMEOUT = TIMEOUT_DEFAULT
    DEFAULT_CONNECTION_TIMEOUT: _TYPE_TIMEOUT = CONNECTION_TIMEOUT_DEFAULT

    def __init__(
        self,
        uri: str = "",
        *,
        method: Any = _DEFAULT,
        headers: Optional[_TYPE_HEADERS_INPUT] = None,
        data: Any = None,
        request_parameters: Optional[_TYPE_QUERY_PARAMS] = None,
        transport_options: Optional[Mapping[Any, Any]] = None,
        content_type: Any = _DEFAULT,
        charset: Any = _DEFAULT,
        connection_timeout: Any = _DEFAULT,
        timeout: Any = _DEFAULT,
        proxy: str = "",
        proxy_script: str = "",
        encode_arrays_using_duplication: bool = False,
        query_processor: Optional[_TYPE_QUERY_PROCESSOR] = None,
    ) -> None:
        self.uri = uri
        self._method = self.DEFAULT_METHOD
        self._headers = HTTPHeaderDict(headers)
        self.data = data
        self.request_parameters = request_parameters
        self._transport_options: Dict[Any, Any] = dict(transport_options or {})
        self.content_type = self.DEFAULT_CONTENT_TYPE
        self.charset = self.DEFAULT_CHARSET
        self._connection_timeout = self.DEFAULT_CONNECTION_TIMEOUT
        self._timeout = self.DEFAULT_TIMEOUT
        self.proxy = proxy
        self.proxy_script = proxy_script
        self.encode_arrays_using_duplication = encode_arrays_using_duplication
        self.query_processor = query_processor

        if method is not _DEFAULT:
            self.method = method
        if content_type is not _DEFAULT:
            self.content_type = content_type
        if charset is not _DEFAULT:
            self.charset = charset
        if connection_timeout is not _DEFAULT:
            self.connection_timeout = connection_timeout
        if timeout is not _DEFAULT:
            self.timeout = timeout

    def __repr__(self) -> str:
        return f"{type(self).__name__}(method={self._method!r}, uri={self.uri!r})"

    def __str__(self) -> str:
        return self.to_debug_string()

    @property
    def method(self) -> str:
        return self._method

    @method.setter
    def method(self, method: str) -> None:
        if not isinstance(method, str) or method not in AVAILABLE_METHODS:
            raise InvalidMethodError(method, AVAILABLE_METHODS)
        if method != self._method:
            log.debug("Changing request method %s -> %s", self._method, method)
        self._method = method

    @property
    def headers(self) -> HTTPHeaderDict:
        """The headers owned by this context. Never ``None``."""
        return self._headers

    def set_headers(self, headers: _TYPE_HEADERS_INPUT) -> None:
        """Replace all headers of the context."""
        self._headers.set_headers(headers)

    def merge_headers(self, headers: _TYPE_HEADERS_INPUT) -> None:
        """Overwrite headers that already exist and add the new ones."""
        self._headers.merge_headers(headers)

    @property
    def request_parameters(self) -> _TYPE_QUERY_PARAMS:
        return self._request_parameters

    @request_parameters.setter
    def request_parameters(self, request_parameters: Optional[_TYPE_QUERY_PARAMS]) -> None:
        self._request_parameters = {} if request_parameters is None else request_parameters

    @property
    def transport_options(self) -> Dict[Any, Any]:
        return self._transport_options

    def set_transport_option(self, name: Any, value: Any) -> None:
        """Set a single transport option, keeping the others."""
        self._transport_options[name] = value

    def set_transport_options(self, transport_options: Mapping[Any, Any]) -> None:
        """Replace every transport option with ``transport_options``."""
        log.debug(
            "Replacing %d transport option(s) with %d",
            len(self._transport_options),
            len(transport_options),
        )
        self._transport_options = dict(transport_options)

    @property
    def connection_timeout(self) -> _TYPE_TIMEOUT:
        return self._connection_timeout

    @connection_timeout.setter
    def connection_timeout(self, value: _TYPE_TIMEOUT) -> None:
        self._connection_timeout = validate_timeout(value, "connection_timeout")

    @property
    def timeout(self) -> _TYPE_TIMEOUT:
        return self._timeout

    @timeout.setter
    def timeout(self, value: _TYPE_TIMEOUT) -> None:
        self._timeout = validate_timeout(value, "timeout")

    def get_query(self) -> str:
        """The encoded query string built from :attr:`request_parameters`."""
        if not self._request_parameters:
            return ""

        query = encode_query(
            self._request_parameters,
            encode_arrays_using_duplication=self.encode_arrays_using_duplication,
        )
        if self.query_processor is not None:
            query = self.query_processor(query, self._request_parameters)
        return query

    def get_request_uri(self) -> str:
        """:attr:`uri` with the request parameters appended as a query string."""
        return append_query(self.uri, self.get_query())

    def get_request_headers(self) -> Dict[str, str]:
        """
        Headers prepared for the request, keyed by lowercase name with
        ``name: value`` lines as values.

        A ``Content-Type`` header is derived from :attr:`content_type` and
        :attr:`charset` if the caller has not set one. The context's own
        headers are not modified.
        """
        headers = self._headers.copy()

        if not headers.header_exists("Content-Type") and self.content_type:
            content_type = make_content_type(self.content_type, self.charset)
            log.debug("Adding default Content-Type header: %s", content_type)
            headers.set_header("Content-Type", content_type)

        return headers.get_headers_for_request()

    def get_kwargs(self) -> Dict[str, Any]:
        """
        Gives us a set of keywords a transport can consume in one go.
        """
        return {
            "method": self._method,
            "url": self.get_request_uri(),
            "headers": list(self.get_request_headers().values()),
            "body": self.data,
            "timeout": self._timeout,
            "connection_timeout": self._connection_timeout,
            "proxy": self.proxy,
            "proxy_script": self.proxy_script,
            "transport_options": dict(self._transport_options),
        }

    def to_debug_string(self) -> str:
        """Human-readable summary of the request, meant for logs and debugging."""
        headers = self._headers.get_headers_for_request()

        return "\n".join(
            [
                _SECTION_RULE,
                f"Method: {self._method}",
                f"URI: {self.uri}",
                _SECTION_RULE,
                "Headers:",
                "",
                _dump(headers, "No headers were set"),
                _SECTION_RULE,
                "Data:",
                "",
                _dump(self.data, "No data was set"),
                _SECTION_RULE,
                "Request Parameters:",
                "",
                _dump(self._request_parameters, "No request parameters were set"),
                _SECTION_RULE,
            ]
        )


def _dump(value: Any, placeholder: str) -> str:
    if not value:
        return placeholder
    if isinstance(value, str):
        return value
    return pformat(value, sort_dicts=False)

