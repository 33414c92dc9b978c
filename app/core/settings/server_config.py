"""Server configuration."""

from pydantic import BaseModel


class ServerConfig(BaseModel, frozen=True):
    """Server settings."""

    host: str
    port: int
    client_url: str

    @property
    def cors_origins(self) -> list[str]:
        """Origins allowed to send credentialed requests."""
        return [origin.strip() for origin in self.client_url.split(",") if origin.strip()]
