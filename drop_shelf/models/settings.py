"""File settings supplied by the settings provider."""

from typing import Optional
from pydantic import BaseModel, Field


class FileSettings(BaseModel):
    default_destination: str = ""
    categorize_by_type: bool = True
    recent_destinations: list[str] = Field(default_factory=list)
    auto_clear_timeout: Optional[float] = None  # minutes, None means never


class FileSettingsUpdate(BaseModel):
    default_destination: Optional[str] = None
    categorize_by_type: Optional[bool] = None
    auto_clear_timeout: Optional[float] = None
