"""Core services exports."""

# Catalog Services
from .beer_service import BeerService
from .customer_service import CustomerService

# Database Service
from .database.db_session import DbSessionService

# JWT Services
from .jwt.jwks import JWKSCache, JWKSCacheInMemory, JwksService
from .jwt.jwt_verify import JwtVerificationService

__all__ = [
    # Catalog Services
    "BeerService",
    "CustomerService",
    # JWT Services
    "JWKSCache",
    "JWKSCacheInMemory",
    "JwksService",
    "JwtVerificationService",
    # Database Service
    "DbSessionService",
]
