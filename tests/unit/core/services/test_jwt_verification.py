"""Unit tests for bearer token verification."""

import pytest
from fastapi import HTTPException

from src.brewery.core.services import JwtVerificationService
from tests.utils import make_token


class TestJwtVerificationService:
    """Tokens are accepted only when signed by a trusted issuer."""

    @pytest.fixture
    def token_factory(self, signing_key, kid_for_jwt, issuer, audience):
        def _make(**overrides) -> str:
            kwargs = {
                "kid": kid_for_jwt,
                "issuer": issuer,
                "audience": audience,
            }
            kwargs.update(overrides)
            key = kwargs.pop("key", signing_key)
            return make_token(key, **kwargs)

        return _make

    async def test_valid_token(
        self, jwt_verify_service: JwtVerificationService, token_factory, issuer
    ):
        """A correctly signed token yields its claims."""
        token = token_factory(scope="beer:read beer:write", email="a@b.test")

        claims = await jwt_verify_service.verify_jwt(token)

        assert claims.uid == "client-123"
        assert claims.subject == "client-123"
        assert claims.issuer == issuer
        assert claims.email == "a@b.test"
        assert claims.scopes == ["beer:read", "beer:write"]
        assert claims.raw_token == token

    async def test_issuer_trailing_slash_is_ignored(
        self, jwt_verify_service: JwtVerificationService, token_factory, issuer
    ):
        claims = await jwt_verify_service.verify_jwt(token_factory(issuer=issuer + "/"))

        assert claims.subject == "client-123"

    @pytest.mark.parametrize(
        "overrides",
        [
            pytest.param({"issuer": "https://evil.test"}, id="unknown-issuer"),
            pytest.param({"audience": "api://someone-else"}, id="wrong-audience"),
            pytest.param({"expires_in": -3600}, id="expired"),
            pytest.param({"kid": "unknown-kid"}, id="unknown-kid"),
            pytest.param({"key": b"not-the-right-key-0123456789abcdefghij"}, id="bad-signature"),
            pytest.param({"subject": None}, id="missing-sub"),
            pytest.param({"algorithm": "HS512"}, id="disallowed-alg"),
        ],
    )
    async def test_rejected_tokens(
        self, jwt_verify_service: JwtVerificationService, token_factory, overrides
    ):
        with pytest.raises(HTTPException) as exc_info:
            await jwt_verify_service.verify_jwt(token_factory(**overrides))

        assert exc_info.value.status_code == 401

    @pytest.mark.parametrize(
        "token",
        ["", "not-a-jwt", "a.b", "a.b.c.d", "abc$.def.ghi", "e30.e30.sig"],
    )
    async def test_malformed_tokens(
        self, jwt_verify_service: JwtVerificationService, token
    ):
        with pytest.raises(HTTPException) as exc_info:
            await jwt_verify_service.verify_jwt(token)

        assert exc_info.value.status_code == 401

    async def test_client_id_used_when_no_audiences(
        self,
        jwks_service_fake,
        jwt_config,
        oidc_config,
        token_factory,
    ):
        """Without configured audiences the issuer's client_id is the audience."""
        service = JwtVerificationService(
            jwks_service_fake,
            jwt_config.model_copy(update={"audiences": []}),
            oidc_config,
        )

        claims = await service.verify_jwt(token_factory(audience="brewery-client"))
        assert claims.subject == "client-123"

        with pytest.raises(HTTPException):
            await service.verify_jwt(token_factory(audience="api://brewery"))
