"""Application settings."""

from pathlib import Path
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    host: str = "127.0.0.1"
    port: int = 8788
    debug: bool = False
    settings_file: Path = Path.home() / ".drop-shelf" / "settings.json"
    default_destination: Path = Path.home() / "Documents" / "DropShelf"
    max_recent_destinations: int = 10

    model_config = {"env_prefix": "DROPSHELF_"}


settings = Settings()
