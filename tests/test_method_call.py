"""
Tests for the REST transport in fleakr.method_call.
"""

import hashlib
from unittest.mock import Mock, patch

import pytest
import requests

from fleakr import method_call
from fleakr.base import ApiError, FleakrError, RemoteError
from fleakr.support import extract

from conftest import read_fixture


def http_response(content, status=200):
    response = Mock(content=content, status_code=status)
    if status >= 400:
        response.raise_for_status.side_effect = requests.HTTPError("%d Error" % status)
    return response


class TestParseResponse:

    def test_ok_response(self):
        doc = method_call.parse_response(read_fixture("people.findByUsername"))
        assert extract(doc, "rsp/user/username") == "frootpantz"

    def test_fail_response(self):
        with pytest.raises(ApiError) as excinfo:
            method_call.parse_response(read_fixture("error"))
        assert excinfo.value.code == 1
        assert excinfo.value.message == "User not found"
        assert str(excinfo.value) == "1 : User not found"

    def test_api_error_is_a_remote_error(self):
        with pytest.raises(RemoteError):
            method_call.parse_response(read_fixture("error"))

    def test_malformed_response(self):
        with pytest.raises(RemoteError):
            method_call.parse_response(b"<rsp stat='ok'><user></rsp>")

    def test_unexpected_root(self):
        with pytest.raises(RemoteError):
            method_call.parse_response(b"<html><body>Oops</body></html>")

    def test_fail_response_with_non_numeric_code(self):
        with pytest.raises(ApiError) as excinfo:
            method_call.parse_response(b"<rsp stat=\"fail\"><err code=\"x\" msg=\"boom\"/></rsp>")
        assert excinfo.value.code == 0
        assert excinfo.value.message == "boom"


class TestBuildParams:

    def test_adds_method_prefix_and_key(self, keys):
        params = method_call.build_params("people.getInfo", user_id="45")
        assert params == {
            "method": "flickr.people.getInfo",
            "api_key": "key",
            "user_id": "45",
        }

    def test_keeps_full_method_name(self, keys):
        params = method_call.build_params("flickr.people.getInfo")
        assert params["method"] == "flickr.people.getInfo"

    def test_drops_none_values(self, keys):
        params = method_call.build_params("people.getInfo", user_id=None)
        assert "user_id" not in params

    def test_requires_api_key(self, monkeypatch):
        monkeypatch.setattr(method_call, "API_KEY", None)
        with pytest.raises(FleakrError):
            method_call.build_params("people.getInfo")

    def test_signs_with_shared_secret(self, keys, monkeypatch):
        monkeypatch.setattr(method_call, "SHARED_SECRET", "secret")
        monkeypatch.setattr(method_call, "AUTH_TOKEN", "token")
        params = method_call.build_params("people.getInfo", user_id="45")

        expected = hashlib.md5(
            b"secretapi_keykeyauth_tokentokenmethodflickr.people.getInfouser_id45"
        ).hexdigest()
        assert params["auth_token"] == "token"
        assert params["api_sig"] == expected


class TestSetKeys:

    def test_set_keys(self, keys):
        method_call.set_keys("abc", shared_secret="def", auth_token="ghi")
        assert method_call.API_KEY == "abc"
        assert method_call.SHARED_SECRET == "def"
        assert method_call.AUTH_TOKEN == "ghi"


class TestCallApi:

    def test_returns_document(self, keys):
        response = http_response(read_fixture("people.findByUsername"))
        with patch("fleakr.method_call.requests.get", return_value=response) as get:
            doc = method_call.call_api("people.findByUsername", username="frootpantz")

        assert extract(doc, "rsp/user", "nsid") == "31066442@N69"
        get.assert_called_once_with(
            method_call.ENDPOINT,
            params={
                "method": "flickr.people.findByUsername",
                "api_key": "key",
                "username": "frootpantz",
            },
            timeout=method_call.TIMEOUT,
        )

    def test_api_error(self, keys):
        response = http_response(read_fixture("error"))
        with patch("fleakr.method_call.requests.get", return_value=response):
            with pytest.raises(ApiError):
                method_call.call_api("people.findByUsername", username="nobody")

    def test_http_error(self, keys):
        with patch("fleakr.method_call.requests.get", return_value=http_response(b"", 500)):
            with pytest.raises(RemoteError):
                method_call.call_api("people.getInfo", user_id="45")

    def test_connection_error(self, keys):
        error = requests.ConnectionError("connection refused")
        with patch("fleakr.method_call.requests.get", side_effect=error):
            with pytest.raises(RemoteError) as excinfo:
                method_call.call_api("people.getInfo", user_id="45")
        assert excinfo.value.__cause__ is error
