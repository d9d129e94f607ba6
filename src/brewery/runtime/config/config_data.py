"""Typed view of config.yaml.

Every section has defaults, so a missing file or a partial file still yields a
usable configuration.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, computed_field

Environment = Literal["development", "production", "test"]


class CORSConfig(BaseModel):
    origins: list[str] = Field(default_factory=lambda: ["http://localhost:3000"])
    allow_credentials: bool = False
    allow_methods: list[str] = Field(
        default_factory=lambda: ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]
    )
    allow_headers: list[str] = Field(default_factory=lambda: ["*"])


class OIDCProviderConfig(BaseModel):
    """One external token issuer the API trusts."""

    issuer: str = Field(description="Expected value of the 'iss' claim")
    jwks_uri: str = Field(description="Where the issuer publishes its signing keys")
    client_id: str | None = Field(
        default=None, description="Audience to require when jwt.audiences is empty"
    )
    enabled: bool = True
    dev_only: bool = Field(
        default=False, description="Ignored outside development and test"
    )


class OIDCConfig(BaseModel):
    providers: dict[str, OIDCProviderConfig] = Field(default_factory=dict)
    jwks_cache_ttl_seconds: int = 3600
    jwks_fetch_timeout_seconds: float = 5.0


class JWTClaimsConfig(BaseModel):
    """Names of the claims mapped onto TokenClaims."""

    user_id: str = "sub"
    email: str = "email"


class JWTConfig(BaseModel):
    allowed_algorithms: list[str] = Field(
        default_factory=lambda: ["RS256", "RS512", "ES256", "ES384"]
    )
    audiences: list[str] = Field(
        default_factory=list,
        description="Accepted 'aud' values; empty falls back to the issuer's client_id",
    )
    clock_skew: int = Field(default=60, description="Leeway in seconds for exp/nbf/iat")
    claims: JWTClaimsConfig = Field(default_factory=JWTClaimsConfig)


class LoggingConfig(BaseModel):
    level: str = "INFO"
    format: Literal["json", "plain"] = Field(
        default="plain", description="Format of the file sink; the console is always plain"
    )
    file: str | None = Field(default=None, description="Optional rotating log file")
    max_size_mb: int = 10
    backup_count: int = 5


class DatabaseConfig(BaseModel):
    url: str = Field(
        default="sqlite+aiosqlite:///./brewery.db",
        description="SQLAlchemy async URL, e.g. postgresql+asyncpg://user:pw@host/db",
    )
    echo: bool = False
    pool_size: int = 20
    max_overflow: int = 10
    pool_timeout: int = 30
    pool_recycle: int = 1800
    create_tables: bool = Field(
        default=True, description="Run CREATE TABLE for missing tables at startup"
    )

    @computed_field
    @property
    def is_sqlite(self) -> bool:
        return self.url.startswith("sqlite")

    @computed_field
    @property
    def is_memory(self) -> bool:
        """True for in-memory SQLite, which must share a single connection."""
        return self.is_sqlite and (":memory:" in self.url or self.url.endswith("://"))


class AppConfig(BaseModel):
    environment: Environment = "development"
    host: str = "localhost"
    port: int = 8000
    api_prefix: str = Field(default="/api/v3", description="Prefix of the catalog routes")
    cors: CORSConfig = Field(default_factory=CORSConfig)


class ConfigData(BaseModel):
    """Root of config.yaml (the mapping under the top-level ``config`` key)."""

    app: AppConfig = Field(default_factory=AppConfig)
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    oidc: OIDCConfig = Field(default_factory=OIDCConfig)
    jwt: JWTConfig = Field(default_factory=JWTConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
