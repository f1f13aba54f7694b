import time

import pytest

from gotway.token import (
    ISSUER_API_GATEWAY,
    ISSUER_AUTH_SERVICE,
    ExternalClaims,
    InternalClaims,
    TokenAudienceMismatchError,
    TokenExpiredError,
    TokenInvalidAudienceError,
    TokenInvalidIssuerError,
    TokenInvalidSubjectError,
    TokenIssuerNotAllowedError,
    TokenNotYetValidError,
)

HOUR = 3600
MINUTE = 60


def _now():
    return int(time.time())


def test_external_valid_claims():
    claims = ExternalClaims(
        subject="user-123",
        email="user@example.com",
        scopes=["read", "write"],
        issuer=ISSUER_AUTH_SERVICE,
        expires_at=_now() + HOUR,
        issued_at=_now(),
    )
    assert claims.validate() is None
    claims.expires_at = _now() - HOUR
    with pytest.raises(TokenExpiredError):
        claims.validate()


@pytest.mark.parametrize(
    ("factory", "error"),
    [
        (lambda: ExternalClaims(subject="user-123", expires_at=_now() - HOUR), TokenExpiredError),
        (
            lambda: ExternalClaims(
                subject="user-123", not_before=_now() + HOUR, expires_at=_now() + 2 * HOUR
            ),
            TokenNotYetValidError,
        ),
        (
            lambda: ExternalClaims(email="user@example.com", expires_at=_now() + HOUR),
            TokenInvalidSubjectError,
        ),
    ],
)
def test_external_invalid_claims(factory, error):
    with pytest.raises(error):
        factory().validate()


def test_internal_valid_claims():
    claims = InternalClaims(
        subject="user-123",
        issuer=ISSUER_API_GATEWAY,
        audience="user-service",
        expires_at=_now() + 5 * MINUTE,
        issued_at=_now(),
    )
    assert claims.validate() is None
    claims.audience = ""
    with pytest.raises(TokenInvalidAudienceError):
        claims.validate()


@pytest.mark.parametrize(
    ("factory", "error"),
    [
        (
            lambda: InternalClaims(
                subject="user-123",
                issuer=ISSUER_API_GATEWAY,
                audience="user-service",
                expires_at=_now() - MINUTE,
            ),
            TokenExpiredError,
        ),
        (
            lambda: InternalClaims(
                issuer=ISSUER_API_GATEWAY, audience="user-service", expires_at=_now() + 5 * MINUTE
            ),
            TokenInvalidSubjectError,
        ),
        (
            lambda: InternalClaims(
                subject="user-123", audience="user-service", expires_at=_now() + 5 * MINUTE
            ),
            TokenInvalidIssuerError,
        ),
        (
            lambda: InternalClaims(
                subject="user-123", issuer=ISSUER_API_GATEWAY, expires_at=_now() + 5 * MINUTE
            ),
            TokenInvalidAudienceError,
        ),
    ],
)
def test_internal_invalid_claims(factory, error):
    with pytest.raises(error):
        factory().validate()


def test_validate_audience():
    claims = InternalClaims(subject="user-123", issuer=ISSUER_API_GATEWAY, audience="user-service")
    assert claims.validate_audience("user-service") is None
    with pytest.raises(TokenAudienceMismatchError, match="expected billing-service, got user-service"):
        claims.validate_audience("billing-service")


def test_validate_issuer():
    claims = InternalClaims(subject="user-123", issuer=ISSUER_API_GATEWAY, audience="user-service")
    assert claims.validate_issuer([ISSUER_API_GATEWAY, "user-service", "task-service"]) is None
    with pytest.raises(TokenIssuerNotAllowedError, match="api-api not in allowed list"):
        claims.validate_issuer(["other-service"])


def test_add_to_trace():
    claims = InternalClaims(
        subject="user-123",
        issuer=ISSUER_API_GATEWAY,
        audience="user-service",
        trace=[ISSUER_API_GATEWAY],
    )
    claims.add_to_trace("user-service")
    assert claims.trace == [ISSUER_API_GATEWAY, "user-service"]


def test_has_scope():
    claims = InternalClaims(scopes=["users:read", "users:write", "admin"])
    assert claims.has_scope("users:read") is True
    assert claims.has_scope("billing:read") is False


def test_has_all_scopes():
    claims = InternalClaims(scopes=["users:read", "users:write", "admin"])
    assert claims.has_all_scopes(["users:read", "admin"]) is True
    assert claims.has_all_scopes(["users:read", "billing:read"]) is False
    assert claims.has_all_scopes([]) is True