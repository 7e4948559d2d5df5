"""
Unit tests for request construction (no server required).
Run: pytest tests/test_request.py -v
"""

import io
from collections.abc import Hashable
from unittest import mock

import pytest
import requests

from mbclient.configs import Config
from mbclient.rest import Client, Context, DeadlineExceeded, InvalidMethodError, OutboundRequest


class TestMethodValidation:
    @pytest.mark.parametrize("method", ["bad method", "GET\n", "PO(ST", "DEL/ETE", "GÉT"])
    def test_invalid_method_raises(self, bare_client, method):
        with pytest.raises(InvalidMethodError) as exc_info:
            bare_client.new_request(None, method, "")
        assert exc_info.value.method == method
        assert str(exc_info.value) == f'invalid method "{method}"'

    def test_invalid_method_is_value_error(self, bare_client):
        with pytest.raises(ValueError):
            bare_client.new_request(Context.background(), "bad method", "imposters")

    def test_empty_method_means_get(self, bare_client):
        req = bare_client.new_request(None, "", "imposters")
        assert req.method == "GET"
        assert dict(req.headers) == {"Accept": "application/json"}

    @pytest.mark.parametrize("method", ["PATCH", "OPTIONS", "HEAD", "M-SEARCH"])
    def test_other_tokens_accepted(self, bare_client, method):
        req = bare_client.new_request(None, method, "")
        assert req.method == method


class TestHeaderPolicy:
    @pytest.mark.parametrize("method", ["GET", "DELETE"])
    def test_accept_only_without_payload(self, bare_client, method):
        req = bare_client.new_request(Context.background(), method, "")
        assert req.method == method
        assert req.url == ""
        assert dict(req.headers) == {"Accept": "application/json"}
        assert "Content-Type" not in req.headers

    @pytest.mark.parametrize("method", ["GET", "DELETE"])
    def test_accept_only_regardless_of_body(self, client, method):
        req = client.new_request(None, method, "imposters", io.BytesIO(b"{}"), {"replayable": "true"})
        assert dict(req.headers) == {"Accept": "application/json"}

    @pytest.mark.parametrize("method", ["POST", "PUT"])
    def test_accept_and_content_type_with_payload(self, bare_client, method):
        req = bare_client.new_request(Context.background(), method, "")
        assert req.method == method
        assert dict(req.headers) == {
            "Accept": "application/json",
            "Content-Type": "application/json",
        }

    def test_other_verbs_get_accept_only(self, bare_client):
        req = bare_client.new_request(None, "PATCH", "imposters/4545")
        assert dict(req.headers) == {"Accept": "application/json"}

    def test_headers_are_case_insensitive(self, bare_client):
        req = bare_client.new_request(None, "POST", "")
        assert req.headers["content-type"] == "application/json"


class TestUrl:
    def test_url_from_root_path_and_query(self, client):
        req = client.new_request(Context.background(), "GET", "foo", None, {"replayable": ["true"]})
        assert req.url == "http://localhost:2525/foo?replayable=true"

    def test_root_is_parsed_once(self, client):
        assert client.root.scheme == "http"
        assert client.root.netloc == "localhost:2525"

    def test_empty_root_yields_relative_url(self, bare_client):
        req = bare_client.new_request(None, "GET", "imposters")
        assert req.url == "/imposters"


class TestOutboundRequest:
    def test_carries_context_and_body(self, client):
        ctx = Context.with_cancel()
        body = io.BytesIO(b'{"port": 4545}')
        req = client.new_request(ctx, "POST", "imposters", body)
        assert req.context is ctx
        assert req.body is body

    def test_identical_inputs_give_equal_requests(self, client):
        first = client.new_request(None, "PUT", "imposters", None, {"a": ["1", "2"]})
        second = client.new_request(None, "PUT", "imposters", None, {"a": ["1", "2"]})
        assert first == second
        assert first is not second

    def test_is_immutable(self, client):
        req = client.new_request(None, "GET", "imposters")
        with pytest.raises(AttributeError):
            req.url = "http://elsewhere"

    def test_to_requests(self, client):
        req = client.new_request(None, "POST", "imposters", b'{"protocol": "http"}')
        converted = req.to_requests()
        assert isinstance(converted, requests.Request)
        assert converted.method == "POST"
        assert converted.url == "http://localhost:2525/imposters"
        assert converted.headers == {
            "Accept": "application/json",
            "Content-Type": "application/json",
        }
        prepared = client.session.prepare_request(converted)
        assert prepared.headers["Accept"] == "application/json"
        assert prepared.headers["Content-Type"] == "application/json"
        assert prepared.body == b'{"protocol": "http"}'

    def test_timeout_follows_context(self, client):
        assert client.new_request(Context.background(), "GET", "").timeout is None
        req = client.new_request(Context.with_timeout(5), "GET", "")
        assert 0 < req.timeout <= 5

    def test_not_hashable(self, client):
        req = client.new_request(None, "GET", "imposters")
        assert not isinstance(req, Hashable)
        with pytest.raises(TypeError):
            hash(req)

    def test_default_repr_hides_context(self):
        req = OutboundRequest("GET", "/imposters", {"Accept": "application/json"})
        assert "context" not in repr(req)


class TestClient:
    def test_default_session_created(self):
        with Client() as cli:
            assert isinstance(cli.session, requests.Session)
            assert cli.root.geturl() == ""

    def test_injected_session_is_used_and_closed(self):
        session = mock.Mock(spec=requests.Session)
        cli = Client(session, "http://localhost:2525")
        assert cli.session is session
        cli.close()
        session.close.assert_called_once_with()

    def test_client_timeout_applies_without_context(self):
        cli = Client(None, "http://localhost:2525", timeout=3)
        req = cli.new_request(None, "GET", "imposters")
        assert 0 < req.timeout <= 3

    def test_zero_timeout_is_a_deadline(self):
        cli = Client(None, "http://localhost:2525", timeout=0)
        req = cli.new_request(None, "GET", "imposters")
        assert req.timeout == 0.0
        assert isinstance(req.context.err(), DeadlineExceeded)

    def test_from_config(self):
        cfg = Config(root_endpoint="http://mb.internal:2525/base", request_timeout=2.5)
        cli = Client.from_config(cfg)
        assert cli.timeout == 2.5
        req = cli.new_request(None, "DELETE", "imposters/4545")
        assert req.url == "http://mb.internal:2525/base/imposters/4545"
