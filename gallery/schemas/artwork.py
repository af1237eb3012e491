from datetime import datetime
from decimal import Decimal
from typing import Literal

from pydantic import ConfigDict, Field, field_validator

from gallery.schemas.common import CamelModel, blank_to_none, not_blank

MediaFileType = Literal["IMAGE", "VIDEO", "AUDIO"]

ArtworkSort = Literal[
    "price_asc",
    "price_desc",
    "name_asc",
    "name_desc",
    "year_asc",
    "year_desc",
    "views_asc",
    "views_desc",
]


class MediaFileIn(CamelModel):
    """
    Nested media file in an artwork or media-blog payload.

    - id present => update that file in place
    - id absent  => create a new file
    `order` is derived from the position in the list.
    """

    model_config = ConfigDict(extra="ignore")

    id: int | None = None
    url: str
    type: MediaFileType = "IMAGE"
    description: str | None = None
    thumbnail_url: str | None = None

    @field_validator("url")
    @classmethod
    def url_not_empty(cls, v: str) -> str:
        return not_blank(v)

    @field_validator("description", "thumbnail_url")
    @classmethod
    def normalize_optional(cls, v: str | None) -> str | None:
        return blank_to_none(v)


class MediaFileRead(CamelModel):
    id: int
    url: str
    type: MediaFileType
    description: str | None = None
    thumbnail_url: str | None = None
    order: int


class ArtworkWrite(CamelModel):
    """
    Payload for creating or replacing an artwork (admin only).

    Required: title, artist, category, price, imageUrl, medium, year.
    seriesId is only linked when present and non-empty.
    mediaFiles:
      - on create: files to attach (default none)
      - on update: None leaves files untouched, a list is synced
    """

    model_config = ConfigDict(extra="forbid")

    title: str = Field(max_length=255)
    artist: str = Field(max_length=255)
    category: str = Field(max_length=100)
    price: Decimal = Field(ge=0, max_digits=10, decimal_places=2)
    image_url: str
    medium: str
    year: int = Field(ge=0, le=9999)
    description: str | None = None
    dimensions: str | None = None
    is_available: bool = True
    in_gallery: bool = False
    series_id: int | None = None
    media_files: list[MediaFileIn] | None = None

    @field_validator("title", "artist", "category", "image_url", "medium")
    @classmethod
    def required_not_empty(cls, v: str) -> str:
        return not_blank(v)

    @field_validator("description", "dimensions")
    @classmethod
    def normalize_optional(cls, v: str | None) -> str | None:
        return blank_to_none(v)

    @field_validator("series_id", mode="before")
    @classmethod
    def empty_series_to_none(cls, v):
        if v is None or (isinstance(v, str) and not v.strip()):
            return None
        return v


class ArtworkRead(CamelModel):
    """
    Artwork representation for clients. Price is a float.
    """

    id: int
    title: str
    artist: str
    category: str
    price: float
    image_url: str
    description: str | None = None
    dimensions: str | None = None
    medium: str | None = None
    year: int | None = None
    is_available: bool
    in_gallery: bool
    views: int
    likes: int
    series_id: int | None = None
    created_at: datetime
    updated_at: datetime


class SeriesRead(CamelModel):
    id: int
    name: str
    slug: str
    description: str | None = None
    created_at: datetime
    updated_at: datetime


class ArtworkDetailRead(ArtworkRead):
    """
    Single artwork with its series and ordered media files.
    """

    series: SeriesRead | None = None
    media_files: list[MediaFileRead] = []


class SeriesWithArtworksRead(SeriesRead):
    artworks: list[ArtworkRead] = []


class SeriesWrite(CamelModel):
    """
    Payload for creating or renaming a series (admin only).
    The slug is always derived from the name.
    """

    model_config = ConfigDict(extra="ignore")

    name: str = Field(max_length=255)
    description: str | None = None

    @field_validator("name")
    @classmethod
    def name_not_empty(cls, v: str) -> str:
        return not_blank(v)

    @field_validator("description")
    @classmethod
    def normalize_description(cls, v: str | None) -> str | None:
        return blank_to_none(v)


class ArtworkFilters(CamelModel):
    """
    Query parameters accepted by GET /artworks.
    """

    category: str | None = None
    artist: str | None = None
    medium: str | None = None
    year: int | None = None
    search: str | None = None
    min_price: float | None = Field(default=None, ge=0)
    max_price: float | None = Field(default=None, ge=0)
    is_available: bool | None = None
    in_gallery: bool | None = None
    series_id: int | None = None
    sort: ArtworkSort | None = None
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=12, ge=1, le=100)
