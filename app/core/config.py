"""Application configuration using Pydantic Settings V2."""

from functools import cached_property
from pathlib import Path

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from app.core.settings import (
    AppConfig,
    AuthConfig,
    DatabaseConfig,
    FrontendConfig,
    MediaConfig,
    RateLimitConfig,
    ServerConfig,
)
from app.core.settings.app_config import Environment


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Flat fields are loaded directly from environment variables.
    Domain properties provide grouped access (e.g. settings.media.public_key).
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # App
    app_name: str = Field(
        default="chat-history-api",
        description="Application name",
    )
    app_version: str = Field(
        default="0.1.0",
        description="Application version reported by the OpenAPI schema",
    )
    app_env: Environment = Field(
        default="development",
        description="Application environment",
    )
    debug: bool = Field(
        default=False,
        description="Debug mode",
    )

    # Server
    host: str = Field(
        default="0.0.0.0",
        description="Server host",
    )
    port: int = Field(
        default=3000,
        ge=1,
        le=65535,
        description="Server port",
    )
    client_url: str = Field(
        default="http://localhost:5173",
        description="Comma-separated origins allowed by CORS",
    )

    # Identity provider
    identity_jwt_key: SecretStr = Field(
        description="Shared secret or PEM public key used to verify session tokens",
    )
    identity_jwt_algorithm: str = Field(
        default="RS256",
        description="Session token signing algorithm",
    )
    identity_jwt_issuer: str | None = Field(
        default=None,
        description="Expected token issuer; not checked when unset",
    )
    identity_jwt_leeway_seconds: int = Field(
        default=5,
        ge=0,
        le=300,
        description="Clock skew tolerated when checking token expiry",
    )

    # Database
    database_url: SecretStr = Field(
        description="Async database URL (mysql+aiomysql://...)",
    )

    # Media host
    image_kit_endpoint: str = Field(
        default="",
        description="ImageKit URL endpoint",
    )
    image_kit_public_key: str = Field(
        default="",
        description="ImageKit public key",
    )
    image_kit_private_key: SecretStr = Field(
        default=SecretStr(""),
        description="ImageKit private key used to sign upload parameters",
    )
    upload_token_ttl_seconds: int = Field(
        default=1800,
        ge=60,
        le=3600,
        description="Lifetime of issued upload parameters in seconds",
    )

    # Frontend
    static_dir: Path = Field(
        default=Path("./frontend/dist"),
        description="Directory holding the built single-page application",
    )

    # Rate limiting
    rate_limit_enabled: bool = Field(
        default=True,
        description="Enable the request rate limiter",
    )
    rate_limit_default: str = Field(
        default="120/minute",
        description="Default per-client rate limit",
    )

    # --- Domain properties ---

    @cached_property
    def app(self) -> AppConfig:
        """Application environment configuration."""
        return AppConfig(
            name=self.app_name,
            version=self.app_version,
            env=self.app_env,
            debug=self.debug,
        )

    @cached_property
    def server(self) -> ServerConfig:
        """Server configuration."""
        return ServerConfig(
            host=self.host,
            port=self.port,
            client_url=self.client_url,
        )

    @cached_property
    def auth(self) -> AuthConfig:
        """Identity token verification configuration."""
        return AuthConfig(
            jwt_key=self.identity_jwt_key,
            algorithm=self.identity_jwt_algorithm,
            issuer=self.identity_jwt_issuer,
            leeway_seconds=self.identity_jwt_leeway_seconds,
        )

    @cached_property
    def database(self) -> DatabaseConfig:
        """Database connection configuration."""
        return DatabaseConfig(url=self.database_url)

    @cached_property
    def media(self) -> MediaConfig:
        """Media host configuration."""
        return MediaConfig(
            url_endpoint=self.image_kit_endpoint,
            public_key=self.image_kit_public_key,
            private_key=self.image_kit_private_key,
            upload_token_ttl_seconds=self.upload_token_ttl_seconds,
        )

    @cached_property
    def frontend(self) -> FrontendConfig:
        """Static frontend configuration."""
        return FrontendConfig(static_dir=self.static_dir)

    @cached_property
    def rate_limit(self) -> RateLimitConfig:
        """Rate limiter configuration."""
        return RateLimitConfig(
            enabled=self.rate_limit_enabled,
            default_limit=self.rate_limit_default,
        )

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.app.is_development


# Global settings instance
settings = Settings()
