"""Integration tests for the daemon client against a local HTTP daemon."""

import pytest

from ctoai.config import SdkConfig
from ctoai.daemon.client import DaemonClient
from ctoai.daemon.models import PrintBody
from ctoai.errors import DaemonRequestError, DaemonResponseError
from ctoai.values import JsonKind


class TestSimpleRequest:
    """Test fire-and-forget requests."""

    def test_posts_dataclass_body_as_json(self, sdk_config: SdkConfig, fake_daemon) -> None:
        DaemonClient(sdk_config).simple_request("print", PrintBody(text="hi"))

        assert len(fake_daemon.requests) == 1
        request = fake_daemon.requests[0]
        assert request.method == "POST"
        assert request.path == "/print"
        assert request.body == {"text": "hi"}

    def test_posts_dict_body_to_nested_operation(self, sdk_config: SdkConfig, fake_daemon) -> None:
        DaemonClient(sdk_config).simple_request("progress-bar/advance", {"increment": 2})

        assert fake_daemon.requests[0].path == "/progress-bar/advance"
        assert fake_daemon.requests[0].body == {"increment": 2}

    def test_ignores_response_body(self, sdk_config: SdkConfig, fake_daemon) -> None:
        fake_daemon.respond("/print", raw="not json at all")

        assert DaemonClient(sdk_config).simple_request("print", {"text": "x"}) is None

    def test_failure_status_raises_with_status_code(self, sdk_config: SdkConfig, fake_daemon) -> None:
        fake_daemon.respond("/print", {"error": "boom"}, status=500)

        with pytest.raises(DaemonRequestError) as exc_info:
            DaemonClient(sdk_config).simple_request("print", {"text": "x"})

        assert exc_info.value.status_code == 500
        assert "print" in str(exc_info.value)

    def test_connection_refused_raises(self, dead_daemon_config: SdkConfig) -> None:
        with pytest.raises(DaemonRequestError) as exc_info:
            DaemonClient(dead_daemon_config).simple_request("print", {"text": "x"})

        assert exc_info.value.status_code is None
        assert exc_info.value.original_error is not None

    def test_malformed_url_raises(self, tmp_path) -> None:
        config = SdkConfig(
            state_dir=str(tmp_path),
            config_dir=str(tmp_path),
            daemon_port=4000,
            daemon_host="bad\thost",
        )

        with pytest.raises(DaemonRequestError):
            DaemonClient(config).simple_request("print", {"text": "x"})


class TestAsyncRequest:
    """Test requests that wait for a JSON response."""

    def test_returns_tagged_response_object(self, sdk_config: SdkConfig, fake_daemon) -> None:
        fake_daemon.respond("/secret/get", {"token": "abc", "count": 2, "gone": None})

        body = DaemonClient(sdk_config).async_request("secret/get", {"key": "token"})

        assert body["token"].as_str() == "abc"
        assert body["count"].as_number() == 2
        assert body["gone"].kind is JsonKind.NULL
        assert fake_daemon.requests[0].body == {"key": "token"}

    def test_invalid_json_raises_response_error(self, sdk_config: SdkConfig, fake_daemon) -> None:
        fake_daemon.respond("/secret/get", raw="<html>")

        with pytest.raises(DaemonResponseError, match="Invalid JSON"):
            DaemonClient(sdk_config).async_request("secret/get", {"key": "k"})

    def test_non_object_response_raises(self, sdk_config: SdkConfig, fake_daemon) -> None:
        fake_daemon.respond("/secret/get", ["a", "b"])

        with pytest.raises(DaemonResponseError, match="Expected a JSON object"):
            DaemonClient(sdk_config).async_request("secret/get", {"key": "k"})

    def test_failure_status_raises_request_error(self, sdk_config: SdkConfig, fake_daemon) -> None:
        fake_daemon.respond("/secret/get", {}, status=404)

        with pytest.raises(DaemonRequestError) as exc_info:
            DaemonClient(sdk_config).async_request("secret/get", {"key": "k"})
        assert exc_info.value.status_code == 404


class TestRequestBodies:
    """Test bodies that cannot be sent as strict JSON."""

    @pytest.mark.parametrize("bad", [object(), float("nan"), float("-inf")])
    def test_unserializable_body_raises_request_error(
        self, sdk_config: SdkConfig, fake_daemon, bad
    ) -> None:
        with pytest.raises(DaemonRequestError, match="not JSON serializable") as exc_info:
            DaemonClient(sdk_config).simple_request("track", {"x": bad})

        assert isinstance(exc_info.value.original_error, (TypeError, ValueError))
        assert fake_daemon.requests == []

    def test_async_request_rejects_unserializable_body(self, sdk_config: SdkConfig, fake_daemon) -> None:
        with pytest.raises(DaemonRequestError):
            DaemonClient(sdk_config).async_request("secret/get", {"key": object()})

        assert fake_daemon.requests == []

    def test_request_is_sent_with_json_content_type(self, sdk_config: SdkConfig, fake_daemon) -> None:
        DaemonClient(sdk_config).simple_request("print", {"text": "héllo"})

        assert fake_daemon.requests[0].body == {"text": "héllo"}
        assert fake_daemon.requests[0].content_type == "application/json"
