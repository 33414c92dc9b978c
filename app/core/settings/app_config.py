"""Application environment configuration."""

from typing import Literal

from pydantic import BaseModel

Environment = Literal["development", "test", "staging", "production"]


class AppConfig(BaseModel, frozen=True):
    """Application identity and environment."""

    name: str
    version: str
    env: Environment
    debug: bool

    @property
    def is_development(self) -> bool:
        """Tables are created on startup only in development."""
        return self.env == "development"

    @property
    def is_production(self) -> bool:
        return self.env == "production"
