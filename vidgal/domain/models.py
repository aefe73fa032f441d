from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

class DiscoverySource(str, Enum):
    MANIFEST = "manifest"
    DIRECTORY_LISTING = "directory_listing"

class VideoEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    url: str = Field(min_length=1)
    poster: Optional[str] = None

class CatalogItem(BaseModel):
    """An entry paired with its sensitivity flag, as handed to the presentation layer."""
    model_config = ConfigDict(frozen=True)

    entry: VideoEntry
    sensitive: bool = False
