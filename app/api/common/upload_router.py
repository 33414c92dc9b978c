"""Media upload credential endpoint."""

from typing import Annotated

from fastapi import APIRouter, Depends

from app.dependencies import get_upload_service
from app.schemas.upload_schema import UploadCredentials
from app.services.upload_service import UploadCredentialService

router = APIRouter(prefix="/api", tags=["upload"])


@router.get("/upload", response_model=UploadCredentials)
async def get_upload_credentials(
    upload_service: Annotated[UploadCredentialService, Depends(get_upload_service)],
) -> UploadCredentials:
    """Issue signed parameters for a direct upload to the media host.

    Returned unwrapped because the media host's client SDK reads these keys
    at the top level.
    """
    return upload_service.get_authentication_parameters()
