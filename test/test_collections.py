from __future__ import annotations

import typing

import pytest

from reqcontext._collections import HTTPHeaderDict
from reqcontext.exceptions import InvalidHeader


class NonMappingHeaderContainer:
    def __init__(self, **kwargs: str) -> None:
        self._data = {}
        self._data.update(kwargs)

    def keys(self) -> typing.Iterator[str]:
        return iter(self._data)

    def __getitem__(self, key: str) -> str:
        return self._data[key]


@pytest.fixture()
def d() -> HTTPHeaderDict:
    header_dict = HTTPHeaderDict(Cookie="foo")
    header_dict["Content-Type"] = "text/plain"
    return header_dict


class TestHTTPHeaderDict:
    def test_create_from_kwargs(self) -> None:
        h = HTTPHeaderDict(ab="1", cd="2", ef="3", gh="4")
        assert len(h) == 4
        assert "ab" in h

    def test_create_from_dict(self) -> None:
        h = HTTPHeaderDict(dict(ab="1", cd="2", ef="3", gh="4"))
        assert len(h) == 4
        assert "ab" in h

    def test_create_from_iterator(self) -> None:
        teststr = "headersontherocks"
        h = HTTPHeaderDict((c, c * 5) for c in teststr)
        assert len(h) == len(set(teststr))

    def test_create_from_list(self) -> None:
        headers = [("ab", "A"), ("cd", "B"), ("cookie", "C"), ("cookie", "D")]
        h = HTTPHeaderDict(headers)
        assert len(h) == 3
        assert "ab" in h
        assert h["cookie"] == "D"

    def test_create_from_headerdict(self, d: HTTPHeaderDict) -> None:
        h = HTTPHeaderDict(d)
        assert h == d
        assert h is not d
        h["new"] = "value"
        assert "new" not in d

    def test_create_from_non_mapping_with_keys(self) -> None:
        h = HTTPHeaderDict(NonMappingHeaderContainer(Foo="bar"))
        assert h == {"foo": "bar"}

    def test_setitem(self, d: HTTPHeaderDict) -> None:
        d["Cookie"] = "bar"
        assert d["cookie"] == "bar"
        d["cookie"] = "with, comma"
        assert d["cookie"] == "with, comma"

    def test_setitem_keeps_position(self, d: HTTPHeaderDict) -> None:
        d["COOKIE"] = "bar"
        assert list(d) == ["cookie", "content-type"]

    def test_names_are_lowercased(self) -> None:
        h = HTTPHeaderDict()
        h["X-Custom-Header"] = "1"
        assert list(h) == ["x-custom-header"]

    def test_case_insensitive_lookup(self, d: HTTPHeaderDict) -> None:
        assert d["cookie"] == d["COOKIE"] == d["CoOkIe"] == "foo"
        assert "COOKIE" in d
        assert b"cookie" in d

    def test_bytes_keys(self) -> None:
        h = HTTPHeaderDict()
        h[b"X-Bytes"] = b"value"
        assert h["x-bytes"] == "value"
        assert h[b"X-BYTES"] == "value"

    def test_values_are_converted_to_str(self) -> None:
        h = HTTPHeaderDict()
        h["Content-Length"] = 7
        assert h["content-length"] == "7"

    def test_delitem(self, d: HTTPHeaderDict) -> None:
        del d["cookie"]
        assert "cookie" not in d
        assert "COOKIE" not in d

    def test_delitem_missing(self, d: HTTPHeaderDict) -> None:
        with pytest.raises(KeyError):
            del d["missing"]

    def test_discard(self, d: HTTPHeaderDict) -> None:
        d.discard("cookie")
        assert "cookie" not in d
        d.discard("cookie")

    def test_contains_non_string(self, d: HTTPHeaderDict) -> None:
        assert 1 not in d
        assert None not in d

    def test_len(self, d: HTTPHeaderDict) -> None:
        assert len(d) == 2
        d["cookie"] = "bar"
        assert len(d) == 2

    def test_equal(self, d: HTTPHeaderDict) -> None:
        b = HTTPHeaderDict(cookie="foo")
        b["content-type"] = "text/plain"
        assert d == b
        assert d == {"COOKIE": "foo", "Content-Type": "text/plain"}
        c = [("cookie", "foo"), ("content-type", "text/plain")]
        assert d != c

    def test_not_equal(self, d: HTTPHeaderDict) -> None:
        b = HTTPHeaderDict(cookie="foo")
        assert d != b
        assert not (d == b)
        assert d != {"cookie": "bar", "content-type": "text/plain"}
        assert d != {"bad name": "foo"}

    def test_pop(self, d: HTTPHeaderDict) -> None:
        assert d.pop("Cookie") == "foo"
        assert "cookie" not in d
        assert d.pop("cookie", "default") == "default"
        with pytest.raises(KeyError):
            d.pop("cookie")

    def test_get(self, d: HTTPHeaderDict) -> None:
        assert d.get("COOKIE") == "foo"
        assert d.get("missing") is None
        assert d.get("missing", "x") == "x"

    def test_copy(self, d: HTTPHeaderDict) -> None:
        h = d.copy()
        assert d is not h
        assert d == h
        h["cookie"] = "changed"
        assert d["cookie"] == "foo"

    def test_header_exists(self, d: HTTPHeaderDict) -> None:
        assert d.header_exists("Content-type")
        assert not d.header_exists("Accept")

    def test_set_header(self, d: HTTPHeaderDict) -> None:
        d.set_header("Accept", "text/html")
        d.set_header("accept", "application/json")
        assert d["Accept"] == "application/json"
        assert len(d) == 3

    def test_set_headers_replaces_everything(self, d: HTTPHeaderDict) -> None:
        d.set_headers({"foo": "bar"})
        assert d.get_headers() == {"foo": "bar"}

    def test_set_headers_is_atomic(self, d: HTTPHeaderDict) -> None:
        with pytest.raises(InvalidHeader):
            d.set_headers({"foo": "bar", "bad name": "x"})
        assert d.get_headers() == {"cookie": "foo", "content-type": "text/plain"}

    def test_merge_headers(self, d: HTTPHeaderDict) -> None:
        d.merge_headers({"Cookie": "bar", "Accept": "*/*"})
        assert d.get_headers() == {
            "cookie": "bar",
            "content-type": "text/plain",
            "accept": "*/*",
        }

    def test_merge_headers_from_pairs(self, d: HTTPHeaderDict) -> None:
        d.merge_headers([("X-A", "1"), ("x-a", "2")])
        assert d["x-a"] == "2"

    def test_get_headers_returns_plain_dict(self, d: HTTPHeaderDict) -> None:
        headers = d.get_headers()
        assert type(headers) is dict
        headers["new"] = "x"
        assert "new" not in d

    def test_get_headers_for_request(self, d: HTTPHeaderDict) -> None:
        assert d.get_headers_for_request() == {
            "cookie": "cookie: foo",
            "content-type": "content-type: text/plain",
        }

    def test_or(self, d: HTTPHeaderDict) -> None:
        merged = d | {"Cookie": "bar", "accept": "*/*"}
        assert merged is not d
        assert merged == {"cookie": "bar", "content-type": "text/plain", "accept": "*/*"}
        assert d["cookie"] == "foo"

    def test_ror(self, d: HTTPHeaderDict) -> None:
        merged = {"cookie": "bar", "accept": "*/*"} | d
        assert isinstance(merged, HTTPHeaderDict)
        assert merged["cookie"] == "foo"
        assert list(merged) == ["cookie", "accept", "content-type"]

    def test_ior(self, d: HTTPHeaderDict) -> None:
        original = d
        d |= {"accept": "*/*"}
        assert d is original
        assert d["accept"] == "*/*"

    def test_or_with_non_mapping(self, d: HTTPHeaderDict) -> None:
        with pytest.raises(TypeError):
            d | [("a", "b")]  # type: ignore[operator]

    def test_repr(self) -> None:
        h = HTTPHeaderDict(Foo="bar")
        assert repr(h) == "HTTPHeaderDict({'foo': 'bar'})"

    @pytest.mark.parametrize(
        "name", ["bad name", "", "colon:", "new\nline", "tab\t", "ünicode"]
    )
    def test_invalid_name(self, name: str) -> None:
        h = HTTPHeaderDict()
        with pytest.raises(InvalidHeader):
            h[name] = "value"

    @pytest.mark.parametrize("value", ["a\r\nX-Injected: 1", "a\nb", "a\rb", "a\x00b"])
    def test_invalid_value(self, value: str) -> None:
        h = HTTPHeaderDict()
        with pytest.raises(InvalidHeader):
            h["X-Test"] = value

    def test_invalid_name_type(self) -> None:
        h = HTTPHeaderDict()
        with pytest.raises(InvalidHeader):
            h[1] = "value"  # type: ignore[index]
