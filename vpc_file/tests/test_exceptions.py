from vpc_file.core.reason_code import ReasonCode, is_terminal
from vpc_file.exceptions import (
    APIError,
    InvalidResponseError,
    InvalidVolumeIDError,
    NoProvidersRegisteredError,
    ProviderNotRegisteredError,
    SessionClosedError,
    SessionOpenError,
    ValidationError,
    VolumeNotFoundError,
    VPCFileError,
)
from vpc_file.models.errors import ErrorEnvelope, ErrorItem


def test_vpc_file_error_str_without_context() -> None:
    error = VPCFileError("Something failed")

    assert str(error) == "Something failed"
    assert error.reason_code == ReasonCode.UNCLASSIFIED


def test_vpc_file_error_str_with_context() -> None:
    error = VPCFileError("Failed", volume_id="vol-1", attempt=3)

    assert "Failed" in str(error)
    assert "volume_id='vol-1'" in str(error)
    assert "attempt=3" in str(error)


def test_reason_code_override_is_per_instance() -> None:
    error = ValidationError("bad", field="capacity", reason_code=ReasonCode.INVALID_CAPACITY)

    assert error.reason_code == ReasonCode.INVALID_CAPACITY
    assert ValidationError.reason_code == ReasonCode.REQUIRED_FIELD_MISSING


def test_provider_not_registered_error_carries_provider_id() -> None:
    error = ProviderNotRegisteredError("vpc-file")

    assert error.provider_id == "vpc-file"
    assert error.reason_code == ReasonCode.PROVIDER_NOT_REGISTERED
    assert "not registered" in str(error)


def test_no_providers_registered_error_message() -> None:
    assert str(NoProvidersRegisteredError()) == "no providers registered"


def test_invalid_volume_id_error() -> None:
    error = InvalidVolumeIDError("test-id")

    assert error.field == "volume_id"
    assert error.reason_code == ReasonCode.INVALID_VOLUME_ID
    assert isinstance(error, ValidationError)


def test_api_error_str_uses_trace_format() -> None:
    envelope = ErrorEnvelope(
        errors=(
            ErrorItem(
                code="shares_profile_not_found",
                message="Profile not found.",
                more_info="https://cloud.ibm.com/docs/vpc",
            ),
        ),
        trace="abc-123",
    )
    error = APIError("Profile not found.", status_code=400, envelope=envelope)

    assert (
        str(error)
        == "Trace Code:abc-123, Profile not found. Please check https://cloud.ibm.com/docs/vpc"
    )
    assert error.upstream_code == "shares_profile_not_found"
    assert error.reason_code == ReasonCode.INVALID_PROFILE


def test_api_error_without_envelope_is_unclassified() -> None:
    error = APIError("Server error", status_code=500)

    assert error.upstream_code is None
    assert error.reason_code == ReasonCode.UNCLASSIFIED
    assert "status_code=500" in str(error)


def test_volume_not_found_error_has_status_404() -> None:
    error = VolumeNotFoundError("gone")

    assert error.status_code == 404
    assert error.reason_code == ReasonCode.VOLUME_NOT_FOUND
    assert isinstance(error, APIError)


def test_session_open_error_exposes_fatal_flag() -> None:
    error = SessionOpenError("failed", provider_id="vpc-file", fatal=True)

    assert error.fatal is True
    assert error.provider_id == "vpc-file"
    assert error.reason_code == ReasonCode.SESSION_OPEN_FAILED


def test_invalid_response_error_is_terminal_api_error() -> None:
    error = InvalidResponseError("Share response is missing an id", endpoint="/v1/shares")

    assert isinstance(error, APIError)
    assert error.status_code == 200
    assert error.envelope is None
    assert error.reason_code == ReasonCode.INVALID_RESPONSE
    assert is_terminal(error.reason_code)


def test_session_closed_error_carries_provider_id() -> None:
    error = SessionClosedError("vpc-file")

    assert error.provider_id == "vpc-file"
    assert error.reason_code == ReasonCode.SESSION_CLOSED
    assert is_terminal(error.reason_code)
