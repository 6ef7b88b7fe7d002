"""Stack-related models."""

from pydantic import BaseModel, Field

from .common import FileCategory, FileDescriptor


class AddResult(BaseModel):
    added: list[FileDescriptor] = Field(default_factory=list)
    duplicate_count: int = 0
    failed_count: int = 0
    files: list[FileDescriptor] = Field(default_factory=list)


class StackStats(BaseModel):
    total_files: int = 0
    total_size: int = 0
    by_category: dict[FileCategory, int] = Field(default_factory=dict)


class CopyPathsResult(BaseModel):
    paths: list[str] = Field(default_factory=list)
    text: str = ""
