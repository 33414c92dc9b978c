"""Domain-specific configuration models."""

from app.core.settings.app_config import AppConfig
from app.core.settings.auth_config import AuthConfig
from app.core.settings.database_config import DatabaseConfig
from app.core.settings.frontend_config import FrontendConfig
from app.core.settings.media_config import MediaConfig
from app.core.settings.rate_limit_config import RateLimitConfig
from app.core.settings.server_config import ServerConfig

__all__ = [
    "AppConfig",
    "AuthConfig",
    "DatabaseConfig",
    "FrontendConfig",
    "MediaConfig",
    "RateLimitConfig",
    "ServerConfig",
]
