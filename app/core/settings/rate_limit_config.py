"""Rate limiting configuration."""

from pydantic import BaseModel


class RateLimitConfig(BaseModel, frozen=True):
    """Default request rate limit applied by the limiter middleware."""

    enabled: bool
    default_limit: str
