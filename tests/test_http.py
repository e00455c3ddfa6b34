"""Tests for wren.http — headers, query params, cookies, request and response."""

import pytest

from wren.http.headers import Headers
from wren.http.query import QueryParams
from wren.http.request import Request
from wren.http.response import Response


class TestHeaders:
    def test_case_insensitive(self) -> None:
        h = Headers({"Content-Type": "text/html"})
        assert h["content-type"] == "text/html"
        assert h["CONTENT-TYPE"] == "text/html"

    def test_missing_key_raises(self) -> None:
        with pytest.raises(KeyError):
            Headers()["X-Missing"]

    def test_get_default(self) -> None:
        assert Headers().get("x-missing", "fallback") == "fallback"

    def test_contains(self) -> None:
        assert "X-Something" in Headers({"x-something": "1"})
        assert 42 not in Headers({"x-something": "1"})

    def test_repeated_values(self) -> None:
        h = Headers([("Accept", "text/html"), ("accept", "application/json")])
        assert h["accept"] == "text/html"
        assert h.get_list("ACCEPT") == ["text/html", "application/json"]
        assert len(h) == 1
        assert list(h) == ["accept"]


class TestQueryParams:
    def test_parse(self) -> None:
        q = QueryParams("something=123456&tag=a&tag=b")
        assert q["something"] == "123456"
        assert q.get_list("tag") == ["a", "b"]
        assert q.raw == "something=123456&tag=a&tag=b"

    def test_blank_values_kept(self) -> None:
        assert QueryParams("something=")["something"] == ""

    def test_missing(self) -> None:
        q = QueryParams("")
        assert q.get("x") is None
        assert q.get_list("x") == []
        assert "x" not in q

    def test_names_in_arrival_order(self) -> None:
        q = QueryParams("b=1&a=2&b=3")
        assert list(q) == ["b", "a"]
        assert len(q) == 2

    def test_from_mapping(self) -> None:
        q = QueryParams.from_mapping({"ip": "true", "tag": ["a", "b"]})
        assert q["ip"] == "true"
        assert q.get_list("tag") == ["a", "b"]


class TestCookies:
    @staticmethod
    def _cookies(header: str) -> dict[str, str]:
        return dict(Request.build("GET", "/", headers={"cookie": header}).cookies)

    def test_parse(self) -> None:
        assert self._cookies("session=abc; theme=dark") == {"session": "abc", "theme": "dark"}

    def test_no_header(self) -> None:
        assert Request.build("GET", "/").cookies == {}

    def test_ignores_malformed_pairs(self) -> None:
        assert self._cookies("flag; a=1") == {"a": "1"}

    def test_first_occurrence_wins(self) -> None:
        assert self._cookies("a=1; a=2") == {"a": "1"}

    def test_quoted_value(self) -> None:
        assert self._cookies('theme="dark%20blue"') == {"theme": "dark blue"}


class TestRequest:
    def test_build(self) -> None:
        request = Request.build("get", "/labs?sort=name", headers={"Cookie": "session=abc"})
        assert request.method == "GET"
        assert request.path == "/labs"
        assert request.query["sort"] == "name"
        assert request.cookies == {"session": "abc"}
        assert request.url == "/labs?sort=name"
        assert request.api_operation is None

    def test_empty_path_is_root(self) -> None:
        assert Request.build("GET", "").path == "/"

    def test_content_type(self) -> None:
        request = Request.build("PUT", "/p", headers={"Content-Type": "application/json"})
        assert request.content_type == "application/json"

    def test_with_path_params_merges(self) -> None:
        request = Request.build("GET", "/p").with_path_params({"lab": "mina"})
        request = request.with_path_params({"user": "bob"})
        assert request.path_params == {"lab": "mina", "user": "bob"}

    def test_with_operation(self) -> None:
        original = Request.build("GET", "/p")
        request = original.with_operation({"summary": "S"})
        assert request.api_operation == {"summary": "S"}
        assert original.api_operation is None

    def test_frozen(self) -> None:
        request = Request.build("GET", "/p")
        with pytest.raises(AttributeError):
            request.path = "/other"  # type: ignore[misc]


class TestResponse:
    def test_defaults(self) -> None:
        response = Response("hello")
        assert response.status == 200
        assert response.content_type == "text/plain; charset=utf-8"
        assert response.body_bytes == b"hello"

    def test_json(self) -> None:
        response = Response.json([{"a": 1}], status=400)
        assert response.status == 400
        assert response.content_type == "application/json"
        assert response.json_body() == [{"a": 1}]

    def test_chaining_returns_new_objects(self) -> None:
        original = Response("x")
        changed = original.with_status(201).with_header("X-A", "1").with_headers({"X-B": "2"})
        assert original.status == 200
        assert original.headers == ()
        assert changed.status == 201
        assert changed.headers == (("X-A", "1"), ("X-B", "2"))

    def test_bytes_body_text(self) -> None:
        assert Response(b"caf\xc3\xa9").text == "café"

    def test_with_content_type(self) -> None:
        assert Response("x").with_content_type("text/html").content_type == "text/html"

    def test_header_lookup(self) -> None:
        response = Response.json({}).with_headers([("Vary", "Accept"), ("vary", "Cookie")])
        assert response.header("VARY") == "Accept"
        assert response.header("content-type") == "application/json"
        assert response.header("x-missing") is None
