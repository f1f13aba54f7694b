"""Claims carried by external and internal access tokens."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Iterable

ISSUER_API_GATEWAY = "api-api"
ISSUER_AUTH_SERVICE = "auth-service"


class TokenError(Exception):
    """Base class for token validation errors."""

    default_message = "token error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message if message is not None else self.default_message)


class TokenExpiredError(TokenError):
    default_message = "token has expired"


class TokenNotYetValidError(TokenError):
    default_message = "token is not yet valid"


class TokenInvalidSubjectError(TokenError):
    default_message = "token has invalid subject"


class TokenInvalidIssuerError(TokenError):
    default_message = "token has invalid issuer"


class TokenInvalidAudienceError(TokenError):
    default_message = "token has invalid audience"


class TokenAudienceMismatchError(TokenError):
    default_message = "token audience mismatch"


class TokenIssuerNotAllowedError(TokenError):
    default_message = "token issuer not allowed"


class TokenInvalidSignatureError(TokenError):
    default_message = "token has invalid signature"


class TokenMalformedError(TokenError):
    default_message = "token is malformed"


def _now() -> int:
    return int(time.time())


@dataclass
class ExternalClaims:
    """Claims of a token issued to end users."""

    subject: str = ""
    email: str = ""
    scopes: list[str] = field(default_factory=list)
    issuer: str = ""
    audience: str = ""
    issued_at: int = 0
    expires_at: int = 0
    not_before: int = 0

    def validate(self) -> None:
        """Raise a TokenError if the claims are not currently valid."""
        now = _now()
        if self.expires_at and now > self.expires_at:
            raise TokenExpiredError()
        if self.not_before and now < self.not_before:
            raise TokenNotYetValidError()
        if not self.subject:
            raise TokenInvalidSubjectError()


@dataclass
class InternalClaims:
    """Claims of a token passed between internal services."""

    subject: str = ""
    email: str = ""
    scopes: list[str] = field(default_factory=list)
    issuer: str = ""
    audience: str = ""
    trace: list[str] = field(default_factory=list)
    original_issuer: str = ""
    issued_at: int = 0
    expires_at: int = 0

    def validate(self) -> None:
        """Raise a TokenError if the claims are not currently valid."""
        if self.expires_at and _now() > self.expires_at:
            raise TokenExpiredError()
        if not self.subject:
            raise TokenInvalidSubjectError()
        if not self.issuer:
            raise TokenInvalidIssuerError()
        if not self.audience:
            raise TokenInvalidAudienceError()

    def validate_audience(self, expected_audience: str) -> None:
        """Raise unless the audience equals the expected one."""
        if self.audience != expected_audience:
            raise TokenAudienceMismatchError(
                f"token audience mismatch: expected {expected_audience}, got {self.audience}"
            )

    def validate_issuer(self, allowed_issuers: Iterable[str]) -> None:
        """Raise unless the issuer is among the allowed ones."""
        if self.issuer not in allowed_issuers:
            raise TokenIssuerNotAllowedError(
                f"token issuer not allowed: {self.issuer} not in allowed list"
            )

    def add_to_trace(self, service: str) -> None:
        """Record that the token passed through a service."""
        self.trace.append(service)

    def has_scope(self, scope: str) -> bool:
        return scope in self.scopes

    def has_all_scopes(self, scopes: Iterable[str]) -> bool:
        return all(self.has_scope(scope) for scope in scopes)