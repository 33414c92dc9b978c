"""Tests for UploadCredentialService."""

import time
from unittest.mock import MagicMock

import pytest
from imagekitio import ImageKit

from app.services.upload_service import UploadCredentialService


@pytest.fixture
def client() -> MagicMock:
    client = MagicMock(spec=ImageKit)
    client.get_authentication_parameters.return_value = {
        "token": "abc",
        "expire": 1700000000,
        "signature": "f" * 40,
    }
    return client


class TestUploadCredentialService:
    """Upload parameters are issued by the ImageKit client."""

    def test_returns_client_parameters(self, client: MagicMock) -> None:
        service = UploadCredentialService(client=client)

        creds = service.get_authentication_parameters(token="abc", expire=1700000000)

        client.get_authentication_parameters.assert_called_once_with(
            token="abc", expire=1700000000
        )
        assert creds.token == "abc"
        assert creds.expire == 1700000000
        assert creds.signature == "f" * 40

    def test_default_expiry_uses_ttl(self, client: MagicMock) -> None:
        service = UploadCredentialService(client=client, ttl_seconds=600)
        before = int(time.time())

        service.get_authentication_parameters()

        kwargs = client.get_authentication_parameters.call_args.kwargs
        assert kwargs["token"] == ""
        assert before + 600 <= kwargs["expire"] <= int(time.time()) + 600


class TestWithImageKitClient:
    """Against a real ImageKit client configured with test keys."""

    @pytest.fixture
    def service(self) -> UploadCredentialService:
        client = ImageKit(
            private_key="private_test_key",
            public_key="public_test_key",
            url_endpoint="https://ik.imagekit.io/test",
        )
        return UploadCredentialService(client=client, ttl_seconds=600)

    def test_generates_token_and_signature(
        self, service: UploadCredentialService
    ) -> None:
        creds = service.get_authentication_parameters()

        assert len(creds.token) == 36
        assert len(creds.signature) == 40
        assert creds.expire > int(time.time())

    def test_tokens_are_unique(self, service: UploadCredentialService) -> None:
        first = service.get_authentication_parameters()
        second = service.get_authentication_parameters()
        assert first.token != second.token
        assert first.signature != second.signature
