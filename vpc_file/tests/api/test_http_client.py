"""Tests for HttpClient."""

import httpx
import pytest

from vpc_file.api.http_client import HttpClient, sanitize_for_log
from vpc_file.config import API_VERSION
from vpc_file.exceptions import APIError, NetworkError, VolumeNotFoundError
from vpc_file.tests.constants import ACCESS_TOKEN, VPC_ENDPOINT
from vpc_file.tests.utils.mock_transport import MockTransport


def test_is_authenticated_returns_false_initially() -> None:
    client = HttpClient(VPC_ENDPOINT)

    assert client.is_authenticated is False


def test_set_and_clear_token() -> None:
    client = HttpClient(VPC_ENDPOINT)

    client.set_token(ACCESS_TOKEN)
    assert client.is_authenticated is True

    client.clear_token()
    assert client.is_authenticated is False


def test_close_is_idempotent(mock_transport: MockTransport) -> None:
    client = HttpClient(VPC_ENDPOINT, transport=mock_transport)

    with client:
        pass
    client.close()


# Request tests


def test_request_adds_version_and_bearer_token(
    vpc_http: HttpClient, mock_transport: MockTransport
) -> None:
    mock_transport.add_response(json_data={"shares": []})

    result = vpc_http.request("GET", "/v1/shares", params={"limit": "5"})

    assert result == {"shares": []}
    request = mock_transport.requests[0]
    assert request.url.path == "/v1/shares"
    assert dict(request.url.params) == {"limit": "5", "version": API_VERSION}
    assert request.headers["Authorization"] == f"Bearer {ACCESS_TOKEN}"
    assert request.headers["Accept"] == "application/json"


def test_request_without_api_version_sends_no_version(mock_transport: MockTransport) -> None:
    client = HttpClient(VPC_ENDPOINT, transport=mock_transport)
    mock_transport.add_response(json_data={"ok": True})

    client.request("POST", "/identity/token", data={"apikey": "k"}, authenticated=False)

    request = mock_transport.requests[0]
    assert "version" not in request.url.params
    assert "Authorization" not in request.headers
    assert request.headers["Content-Type"] == "application/x-www-form-urlencoded"


def test_unauthenticated_request_omits_token(
    vpc_http: HttpClient, mock_transport: MockTransport
) -> None:
    mock_transport.add_response(json_data={})

    vpc_http.request("GET", "/v1/shares", authenticated=False)

    assert "Authorization" not in mock_transport.requests[0].headers


def test_no_content_returns_empty_dict(vpc_http: HttpClient, mock_transport: MockTransport) -> None:
    mock_transport.add_response(status_code=httpx.codes.NO_CONTENT)

    assert vpc_http.request("DELETE", "/v1/shares/abc") == {}


def test_list_body_is_wrapped(vpc_http: HttpClient, mock_transport: MockTransport) -> None:
    mock_transport.add_response(json_data=[{"id": "a"}])

    assert vpc_http.request("GET", "/v1/things") == {"items": [{"id": "a"}]}


def test_invalid_json_on_success_raises_api_error(
    vpc_http: HttpClient, mock_transport: MockTransport
) -> None:
    mock_transport.add_response(content=b"<html>not json</html>")

    with pytest.raises(APIError, match="Invalid JSON"):
        vpc_http.request("GET", "/v1/shares")


# Error handling tests


def test_error_envelope_raises_api_error(
    vpc_http: HttpClient, mock_transport: MockTransport
) -> None:
    mock_transport.add_response(
        status_code=httpx.codes.BAD_REQUEST,
        json_data={
            "errors": [
                {
                    "code": "validation_invalid_name",
                    "message": "Name is invalid.",
                    "more_info": "https://cloud.ibm.com/docs",
                }
            ],
            "trace": "trace-1",
        },
    )

    with pytest.raises(APIError) as exc_info:
        vpc_http.request("POST", "/v1/shares", json={"name": "-bad-"})

    error = exc_info.value
    assert error.status_code == 400
    assert error.upstream_code == "validation_invalid_name"
    assert error.envelope is not None
    assert error.envelope.trace == "trace-1"
    assert error.endpoint == "/v1/shares"


def test_not_found_raises_volume_not_found(
    vpc_http: HttpClient, mock_transport: MockTransport
) -> None:
    mock_transport.add_response(
        status_code=httpx.codes.NOT_FOUND,
        json_data={"errors": [{"code": "not_found", "message": "Share not found."}]},
    )

    with pytest.raises(VolumeNotFoundError) as exc_info:
        vpc_http.request("GET", "/v1/shares/abc")

    assert exc_info.value.upstream_code == "not_found"


def test_error_without_envelope_uses_message(
    vpc_http: HttpClient, mock_transport: MockTransport
) -> None:
    mock_transport.add_response(
        status_code=httpx.codes.SERVICE_UNAVAILABLE, content=b"upstream unavailable"
    )

    with pytest.raises(APIError) as exc_info:
        vpc_http.request("GET", "/v1/shares")

    assert exc_info.value.envelope is None
    assert exc_info.value.message == "upstream unavailable"


def test_transport_error_raises_network_error(
    vpc_http: HttpClient, mock_transport: MockTransport
) -> None:
    mock_transport.add_error(httpx.ConnectError("connection refused"))

    with pytest.raises(NetworkError) as exc_info:
        vpc_http.request("GET", "/v1/shares")

    assert isinstance(exc_info.value.__cause__, httpx.ConnectError)


# sanitize_for_log


def test_sanitize_for_log_masks_nested_secrets() -> None:
    data = {
        "apikey": "secret",
        "name": "data",
        "nested": {"access_token": "tok", "size": 10},
        "items": [{"Authorization": "Bearer x"}, "plain"],
    }

    assert sanitize_for_log(data) == {
        "apikey": "***",
        "name": "data",
        "nested": {"access_token": "***", "size": 10},
        "items": [{"Authorization": "***"}, "plain"],
    }
