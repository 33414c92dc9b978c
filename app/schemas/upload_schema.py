"""Media upload credential schema."""

from pydantic import BaseModel, ConfigDict


class UploadCredentials(BaseModel):
    """Short-lived parameters a client presents to the media host."""

    model_config = ConfigDict(frozen=True)

    token: str
    expire: int
    signature: str
