"""
StorageObject model for representing files and folders behind a storage URL.
"""

from datetime import datetime
from typing import Optional
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field, field_validator


class StorageObject(BaseModel):
    """
    Represents a file or folder returned by a storage backend.

    Objects are created by a backend's listing or lookup operations and are
    never mutated by the storage service; the URL is all the service needs
    to route a download or delete back to the owning backend.
    """

    url: str = Field(
        ...,
        description="Storage URL of the object (e.g., 'mem://bucket/data.csv')",
        min_length=1
    )

    name: str = Field(
        "",
        description="Last path segment of the object",
        validate_default=True
    )

    size: int = Field(
        0,
        description="Content length in bytes (0 for folders)",
        ge=0
    )

    modified: Optional[datetime] = Field(
        None,
        description="Last modification time"
    )

    is_dir: bool = Field(
        False,
        description="True when the object is a folder"
    )

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "url": "file:///tmp/data/report.csv",
                "name": "report.csv",
                "size": 1256,
                "modified": "2024-03-15T14:30:22Z",
                "is_dir": False
            }
        }
    )

    @field_validator('name', mode='before')
    @classmethod
    def default_name(cls, v, info):
        """Derive name from the URL path when not given."""
        if v:
            return v
        parsed = urlparse(info.data.get('url', ''))
        return parsed.path.rstrip('/').rsplit('/', 1)[-1] or parsed.netloc

    @property
    def is_file(self) -> bool:
        return not self.is_dir

    @property
    def scheme(self) -> str:
        """URL scheme, 'file' for bare paths."""
        return urlparse(self.url).scheme or 'file'
