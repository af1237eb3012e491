from datetime import datetime, timezone
from decimal import Decimal

from sqlmodel import SQLModel, Field


class Series(SQLModel, table=True):
    """
    Named, sluggable grouping of artworks.
    """

    __tablename__ = "series"

    id: int | None = Field(
        default=None,
        primary_key=True,
    )

    name: str = Field(
        max_length=255,
        index=True,
    )

    slug: str = Field(
        max_length=255,
        unique=True,
        index=True,
        description="URL-friendly identifier (unique)",
    )

    description: str | None = None

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )

    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )


class Artwork(SQLModel, table=True):
    """
    Purchasable or gallery-displayed art piece.

    Price is stored as a fixed-point decimal and surfaced to clients as float.
    """

    __tablename__ = "artworks"

    id: int | None = Field(
        default=None,
        primary_key=True,
    )

    title: str = Field(
        max_length=255,
        index=True,
    )
    artist: str = Field(
        max_length=255,
        index=True,
    )
    category: str = Field(
        max_length=100,
        index=True,
    )

    price: Decimal = Field(
        default=Decimal("0"),
        ge=0,
        max_digits=10,
        decimal_places=2,
    )

    image_url: str = Field(
        description="Main image URL (hosted on the image CDN)",
    )

    description: str | None = None
    dimensions: str | None = None
    medium: str | None = None
    year: int | None = None

    is_available: bool = Field(
        default=True,
        index=True,
        description="False once sold or reserved by a checkout",
    )

    in_gallery: bool = Field(
        default=False,
        index=True,
        description="Shown on the gallery page",
    )

    views: int = Field(default=0, ge=0)
    likes: int = Field(default=0, ge=0)

    series_id: int | None = Field(
        default=None,
        foreign_key="series.id",
        index=True,
    )

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )

    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )


class ArtworkMediaFile(SQLModel, table=True):
    """
    Additional ordered media (images, video, audio) for an artwork.
    """

    __tablename__ = "artwork_media_files"

    id: int | None = Field(
        default=None,
        primary_key=True,
    )

    artwork_id: int = Field(
        foreign_key="artworks.id",
        index=True,
    )

    url: str
    # IMAGE | VIDEO | AUDIO
    type: str = Field(default="IMAGE")
    description: str | None = None
    thumbnail_url: str | None = None

    order: int = Field(
        default=0,
        ge=0,
        description="Position within the artwork's media list",
    )
