"""Identity provider token verification configuration."""

from pydantic import BaseModel, SecretStr


class AuthConfig(BaseModel, frozen=True):
    """Settings used to verify identity provider session tokens."""

    jwt_key: SecretStr
    algorithm: str
    issuer: str | None = None
    leeway_seconds: int = 0
