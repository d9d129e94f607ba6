"""FastAPI dependency implementations."""

from __future__ import annotations

from collections.abc import AsyncIterator

from fastapi import Depends, HTTPException, Request
from sqlmodel.ext.asyncio.session import AsyncSession

from src.brewery.api.http.app_data import ApplicationDependencies
from src.brewery.core.models.claims import TokenClaims
from src.brewery.core.services import (
    BeerService,
    CustomerService,
    DbSessionService,
    JwtVerificationService,
)
from src.brewery.entities import (
    BeerMapper,
    BeerRepository,
    CustomerMapper,
    CustomerRepository,
)


def get_database_service(request: Request) -> DbSessionService:
    """Get the database service instance."""
    app_deps: ApplicationDependencies = request.app.state.app_dependencies
    return app_deps.database_service


async def get_db_session(
    database_service: DbSessionService = Depends(get_database_service),
) -> AsyncIterator[AsyncSession]:
    """Yield one database session per request."""
    async with database_service.session_scope() as session:
        yield session


def get_jwt_verify_service(request: Request) -> JwtVerificationService:
    """Get the JWT verification service instance."""
    app_deps: ApplicationDependencies = request.app.state.app_dependencies
    return app_deps.jwt_verify_service


def get_beer_service(db: AsyncSession = Depends(get_db_session)) -> BeerService:
    return BeerService(BeerRepository(db), BeerMapper())


def get_customer_service(
    db: AsyncSession = Depends(get_db_session),
) -> CustomerService:
    return CustomerService(CustomerRepository(db), CustomerMapper())


_BEARER_CHALLENGE = {"WWW-Authenticate": "Bearer"}


async def require_bearer_token(
    request: Request,
    jwt_verify: JwtVerificationService = Depends(get_jwt_verify_service),
) -> TokenClaims:
    """Authenticate the request using an externally issued Bearer token."""
    # the auth scheme is case-insensitive (RFC 7235)
    scheme, _, token = request.headers.get("Authorization", "").partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer" or not token:
        raise HTTPException(
            status_code=401, detail="Missing Bearer token", headers=_BEARER_CHALLENGE
        )

    try:
        claims = await jwt_verify.verify_jwt(token)
    except HTTPException as exc:
        if exc.status_code == 401:
            raise HTTPException(
                status_code=401, detail=exc.detail, headers=_BEARER_CHALLENGE
            ) from exc
        raise

    request.state.token_claims = claims
    return claims
