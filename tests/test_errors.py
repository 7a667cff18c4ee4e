"""Tests for provider error normalization and envelope rendering."""
import json
from datetime import datetime, timezone

import pytest
from botocore.exceptions import (
    ClientError,
    NoCredentialsError,
    PartialCredentialsError,
    TokenRetrievalError,
    UnauthorizedSSOTokenError,
)

from fleet.envelope import Failure, Success, render_text
from fleet.errors import (
    EXPIRED_CREDENTIALS_MESSAGE,
    MISSING_CREDENTIALS_MESSAGE,
    ProviderCategory,
    ProviderError,
    normalize_error,
)


def client_error(code, message, operation="DescribeInstances"):
    return ClientError({"Error": {"Code": code, "Message": message}}, operation)


@pytest.mark.parametrize(
    "exc",
    [
        NoCredentialsError(),
        PartialCredentialsError(provider="env", cred_var="AWS_SECRET_ACCESS_KEY"),
        RuntimeError("Could not load credentials from any providers"),
        Exception("Unable to locate credentials"),
    ],
)
def test_missing_credentials(exc):
    error = normalize_error(exc)

    assert error.category is ProviderCategory.MISSING_CREDENTIALS
    assert error.message == MISSING_CREDENTIALS_MESSAGE


@pytest.mark.parametrize(
    "exc",
    [
        client_error("ExpiredToken", "The security token included in the request is invalid"),
        client_error("ExpiredTokenException", "Token has expired"),
        client_error("RequestExpired", "Request has expired"),
        RuntimeError("The SSO session associated with this profile has expired"),
        UnauthorizedSSOTokenError(),
        TokenRetrievalError(provider="sso", error_msg="refresh failed"),
        RuntimeError("The provided token has expired."),
    ],
)
def test_expired_credentials(exc):
    error = normalize_error(exc)

    assert error.category is ProviderCategory.EXPIRED_CREDENTIALS
    assert error.message == EXPIRED_CREDENTIALS_MESSAGE


@pytest.mark.parametrize(
    "code, message",
    [
        ("ValidationException", "The certificate arn:aws:acm:us-east-1:1:certificate/abc has expired"),
        ("AccessDenied", "Request has expired"),
        ("InvalidParameterValue", "Key pair has expired"),
    ],
)
def test_expired_resources_are_not_credential_faults(code, message):
    error = normalize_error(client_error(code, message))

    assert error.category is ProviderCategory.PROVIDER
    assert error.message == f"{code}: {message}"


def test_client_error_uses_code_and_message():
    error = normalize_error(client_error("NoSuchBucket", "The specified bucket does not exist"))

    assert error.category is ProviderCategory.PROVIDER
    assert error.message == "NoSuchBucket: The specified bucket does not exist"


def test_other_exceptions_use_class_name():
    error = normalize_error(ValueError("bad payload"))

    assert error.message == "ValueError: bad payload"


def test_exception_without_message_still_has_text():
    error = normalize_error(ConnectionError())

    assert error.message == "ConnectionError: ConnectionError"


def test_provider_error_passes_through():
    original = ProviderError(ProviderCategory.PROVIDER, "already normalized")

    assert normalize_error(original) is original


def test_categories_have_distinct_prefixes():
    missing = normalize_error(NoCredentialsError()).message
    expired = normalize_error(client_error("ExpiredToken", "x")).message
    generic = normalize_error(client_error("Throttling", "Rate exceeded")).message

    assert len({missing[:25], expired[:25], generic[:25]}) == 3


def test_success_renders_json_with_iso_timestamps():
    when = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
    envelope = Success({"count": 1, "items": [{"created": when}]})

    assert json.loads(envelope.to_text()) == {
        "count": 1,
        "items": [{"created": "2024-01-02T03:04:05+00:00"}],
    }
    assert envelope.is_error is False


def test_string_payload_is_not_reencoded():
    assert render_text("plain text") == "plain text"


def test_failure_text_is_the_message():
    failure = Failure("boom")

    assert failure.is_error is True
    assert failure.to_text() == "boom"
