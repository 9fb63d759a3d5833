"""Tests for cloudcontrol.client.response."""

from __future__ import annotations

import httpx
import pytest

from cloudcontrol.client.response import build_url, decode_body, is_stale_token
from cloudcontrol.exceptions import ResponseError

BASE = "https://api.cloudcontrol.com"


class TestDecodeBody:
    def test_json_object(self) -> None:
        assert decode_body(httpx.Response(200, json={"a": 1})) == {"a": 1}

    def test_json_list(self) -> None:
        assert decode_body(httpx.Response(200, json=[1, 2])) == [1, 2]

    def test_empty_body(self) -> None:
        assert decode_body(httpx.Response(204)) is None

    def test_plain_text_raises_with_text_and_status(self) -> None:
        with pytest.raises(ResponseError) as excinfo:
            decode_body(httpx.Response(503, text="Service Unavailable"))
        assert excinfo.value.text == "Service Unavailable"
        assert excinfo.value.status_code == 503
        assert str(excinfo.value) == "Service Unavailable"


class TestIsStaleToken:
    @pytest.mark.parametrize("text", ["Authorization Required", "Authorization Required\n", "  Authorization Required "])
    def test_sentinel(self, text: str) -> None:
        assert is_stale_token(text)

    @pytest.mark.parametrize("text", ["", "authorization required", "Authorization Required!", "Forbidden"])
    def test_other_text(self, text: str) -> None:
        assert not is_stale_token(text)


class TestBuildUrl:
    def test_no_params(self) -> None:
        assert build_url(BASE, "/app/") == f"{BASE}/app/"

    def test_empty_params_add_nothing(self) -> None:
        assert build_url(BASE, "/app/", {}) == f"{BASE}/app/"
        assert build_url(BASE, "/app/", "") == f"{BASE}/app/"

    def test_string_params_appended_verbatim(self) -> None:
        assert build_url(BASE, "/app/", "a=1&b=two words") == f"{BASE}/app/?a=1&b=two words"

    def test_mapping_params_joined_and_escaped_once(self) -> None:
        url = build_url(BASE, "/app/", {"name": "my app", "type": "php/5"})
        assert url == f"{BASE}/app/?name=my%20app&type=php%2F5"

    def test_already_escaped_value_is_escaped_again(self) -> None:
        assert build_url(BASE, "/x/", {"q": "%20"}) == f"{BASE}/x/?q=%2520"

    def test_non_string_values(self) -> None:
        assert build_url(BASE, "/x/", {"page": 2}) == f"{BASE}/x/?page=2"
