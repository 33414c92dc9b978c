"""Signed upload parameters for direct client uploads to ImageKit."""

import time

from imagekitio import ImageKit

from app.schemas.upload_schema import UploadCredentials


class UploadCredentialService:
    """Issue short-lived upload parameters through the ImageKit client.

    The client presents ``token``, ``expire`` and ``signature`` with its
    upload; ImageKit verifies them against the account's private key.
    """

    def __init__(self, client: ImageKit, ttl_seconds: int = 1800) -> None:
        self._client = client
        self._ttl_seconds = ttl_seconds

    def get_authentication_parameters(
        self,
        token: str | None = None,
        expire: int | None = None,
    ) -> UploadCredentials:
        """Build upload parameters, generating token and expiry if omitted."""
        params = self._client.get_authentication_parameters(
            token=token or "",
            expire=expire or int(time.time()) + self._ttl_seconds,
        )
        return UploadCredentials.model_validate(params)
