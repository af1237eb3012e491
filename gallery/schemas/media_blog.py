from datetime import datetime
from typing import Literal

from pydantic import ConfigDict, Field, field_validator

from gallery.schemas.artwork import MediaFileIn, MediaFileRead
from gallery.schemas.common import CamelModel, blank_to_none, not_blank

MediaBlogEntryType = Literal["BLOG_POST", "VIDEO", "AUDIO", "IMAGES", "EXTERNAL_LINK"]


class MediaBlogEntryWrite(CamelModel):
    """
    Payload for creating or updating a media blog entry (admin only).

    Required: title, type.
    mediaFiles on update: None leaves files untouched, a list is synced.
    """

    model_config = ConfigDict(extra="ignore")

    title: str = Field(max_length=255)
    type: MediaBlogEntryType
    short_desc: str | None = None
    external_link: str | None = None
    thumbnail_url: str | None = None
    duration: str | None = None
    content: str | None = None
    media_files: list[MediaFileIn] | None = None

    @field_validator("title")
    @classmethod
    def title_not_empty(cls, v: str) -> str:
        return not_blank(v)

    @field_validator("type", mode="before")
    @classmethod
    def upper_type(cls, v):
        if isinstance(v, str):
            return v.strip().upper()
        return v

    @field_validator(
        "short_desc", "external_link", "thumbnail_url", "duration", "content"
    )
    @classmethod
    def normalize_optional(cls, v: str | None) -> str | None:
        return blank_to_none(v)


class MediaBlogEntryRead(CamelModel):
    id: int
    title: str
    short_desc: str | None = None
    type: MediaBlogEntryType
    external_link: str | None = None
    thumbnail_url: str | None = None
    duration: str | None = None
    content: str | None = None
    created_at: datetime
    updated_at: datetime
    media_files: list[MediaFileRead] = []
