"""Media host (ImageKit) configuration."""

from pydantic import BaseModel, SecretStr


class MediaConfig(BaseModel, frozen=True):
    """Credentials for issuing client-side upload parameters."""

    url_endpoint: str
    public_key: str
    private_key: SecretStr
    upload_token_ttl_seconds: int
