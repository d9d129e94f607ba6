from __future__ import annotations

from collections.abc import AsyncGenerator
from typing import Any

import pytest
from sqlmodel.ext.asyncio.session import AsyncSession

from src.brewery.core.services import DbSessionService
from src.brewery.runtime.config.config_data import (
    DatabaseConfig,
    JWTConfig,
    OIDCConfig,
    OIDCProviderConfig,
)
from tests.utils import oct_jwk

_HS_KEY = b"brewery-test-secret-key-0123456789abcdef"
_ISSUER = "https://issuer.test"
_AUDIENCE = "api://brewery"
_KID = "brewery-key"


@pytest.fixture
def issuer() -> str:
    return _ISSUER


@pytest.fixture
def audience() -> str:
    return _AUDIENCE


@pytest.fixture
def signing_key() -> bytes:
    return _HS_KEY


@pytest.fixture
def kid_for_jwt() -> str:
    return _KID


@pytest.fixture
def jwks_data(signing_key: bytes, kid_for_jwt: str) -> dict[str, Any]:
    """Mock JWKS data for testing."""
    return {"keys": [oct_jwk(signing_key, kid_for_jwt)]}


@pytest.fixture
def oidc_provider_config() -> OIDCProviderConfig:
    return OIDCProviderConfig(
        issuer=_ISSUER,
        jwks_uri=f"{_ISSUER}/oauth2/jwks",
        client_id="brewery-client",
    )


@pytest.fixture
def oidc_config(oidc_provider_config: OIDCProviderConfig) -> OIDCConfig:
    return OIDCConfig(providers={"test": oidc_provider_config})


@pytest.fixture
def jwt_config() -> JWTConfig:
    """Accept HS256 so tokens can be signed with a shared test secret."""
    return JWTConfig(allowed_algorithms=["HS256"], audiences=[_AUDIENCE])


@pytest.fixture
async def database_service() -> AsyncGenerator[DbSessionService]:
    """A fresh in-memory database with all tables created."""
    service = DbSessionService(
        DatabaseConfig(url="sqlite+aiosqlite:///:memory:"), environment="test"
    )
    await service.init_db()
    try:
        yield service
    finally:
        await service.dispose()


@pytest.fixture
async def db_session(
    database_service: DbSessionService,
) -> AsyncGenerator[AsyncSession]:
    async with database_service.session_scope() as session:
        yield session
