from datetime import datetime, timezone

from sqlmodel import SQLModel, Field


class MediaBlogEntry(SQLModel, table=True):
    """
    Press / media / blog entry shown on the media page.

    type: BLOG_POST | VIDEO | AUDIO | IMAGES | EXTERNAL_LINK
    """

    __tablename__ = "media_blog_entries"

    id: int | None = Field(
        default=None,
        primary_key=True,
    )

    title: str = Field(
        max_length=255,
        index=True,
    )
    short_desc: str | None = None

    type: str = Field(
        index=True,
    )

    external_link: str | None = None
    thumbnail_url: str | None = None
    duration: str | None = None
    content: str | None = None

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )

    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )


class MediaBlogFile(SQLModel, table=True):
    """
    Ordered media file attached to a media blog entry.
    """

    __tablename__ = "media_blog_files"

    id: int | None = Field(
        default=None,
        primary_key=True,
    )

    entry_id: int = Field(
        foreign_key="media_blog_entries.id",
        index=True,
    )

    url: str
    type: str = Field(default="IMAGE")
    description: str | None = None
    thumbnail_url: str | None = None
    order: int = Field(default=0, ge=0)
