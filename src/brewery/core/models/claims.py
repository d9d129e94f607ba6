"""Identity carried by a verified bearer token."""

from typing import Any

from pydantic import BaseModel, Field


class TokenClaims(BaseModel):
    """Claims of an access token that passed verification.

    Timestamps are seconds since the epoch, as they appear in the token.
    """

    uid: str | None = Field(default=None, description="Caller id, see jwt.claims.user_id")
    raw_token: str = ""
    token_type: str = "access_token"

    issuer: str
    subject: str
    audience: str | list[str] = Field(default_factory=list)
    authorized_party: str | None = None
    expires_at: int
    issued_at: int
    not_before: int | None = None
    jti: str | None = None

    email: str | None = None
    scope: str | None = Field(default=None, description="Space-separated scopes")
    scopes: list[str] = Field(default_factory=list)
    roles: list[str] = Field(default_factory=list)

    custom_claims: dict[str, Any] = Field(
        default_factory=dict, description="Claims with no dedicated field"
    )
    all_claims: dict[str, Any] = Field(default_factory=dict)
