"""Static frontend configuration."""

from pathlib import Path

from pydantic import BaseModel


class FrontendConfig(BaseModel, frozen=True):
    """Location of the built single-page application."""

    static_dir: Path
