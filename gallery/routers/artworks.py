from fastapi import APIRouter, Depends, Query, status
from sqlmodel import Session

from gallery.core.auth import require_admin
from gallery.database import get_session
from gallery.repositories.artwork_repo import ArtworkRepository
from gallery.repositories.series_repo import SeriesRepository
from gallery.schemas.artwork import (
    ArtworkDetailRead,
    ArtworkFilters,
    ArtworkRead,
    ArtworkSort,
    ArtworkWrite,
)
from gallery.schemas.common import APIResponse, ok
from gallery.services.artwork_service import ArtworkService

router = APIRouter(prefix="/artworks", tags=["Artworks"])

repo = ArtworkRepository()
series_repo = SeriesRepository()
service = ArtworkService(repo, series_repo)


# -------- Public endpoints --------


@router.get("", response_model=APIResponse[list[ArtworkRead]])
def list_artworks(
    session: Session = Depends(get_session),
    category: str | None = None,
    artist: str | None = None,
    medium: str | None = None,
    year: int | None = None,
    search: str | None = None,
    min_price: float | None = Query(default=None, alias="minPrice", ge=0),
    max_price: float | None = Query(default=None, alias="maxPrice", ge=0),
    is_available: bool | None = Query(default=None, alias="isAvailable"),
    in_gallery: bool | None = Query(default=None, alias="inGallery"),
    series_id: int | None = Query(default=None, alias="seriesId"),
    sort: ArtworkSort | None = None,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=12, ge=1, le=100),
):
    """
    List artworks.

    - Public endpoint.
    - `total` is the number of matching artworks before pagination.
    - Default order is newest first.
    """
    filters = ArtworkFilters(
        category=category,
        artist=artist,
        medium=medium,
        year=year,
        search=search,
        min_price=min_price,
        max_price=max_price,
        is_available=is_available,
        in_gallery=in_gallery,
        series_id=series_id,
        sort=sort,
        page=page,
        limit=limit,
    )
    artworks, total = service.list_artworks(session, filters)
    return ok(artworks, total=total)


@router.get("/{artwork_id}", response_model=APIResponse[ArtworkDetailRead])
def get_artwork(
    artwork_id: int,
    session: Session = Depends(get_session),
):
    """
    Get a single artwork with its series and media files.
    """
    return ok(service.get_artwork(session, artwork_id))


@router.post("/{artwork_id}/like", response_model=APIResponse[ArtworkRead])
def like_artwork(
    artwork_id: int,
    session: Session = Depends(get_session),
):
    """Increment the like counter."""
    return ok(service.like(session, artwork_id))


@router.post("/{artwork_id}/view", response_model=APIResponse[ArtworkRead])
def record_artwork_view(
    artwork_id: int,
    session: Session = Depends(get_session),
):
    """Increment the view counter."""
    return ok(service.record_view(session, artwork_id))


# -------- Admin endpoints --------


@router.post(
    "",
    response_model=APIResponse[ArtworkDetailRead],
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
def create_artwork(
    payload: ArtworkWrite,
    session: Session = Depends(get_session),
):
    """
    Create a new artwork (admin only).
    """
    return ok(service.create_artwork(session, payload))


@router.put(
    "/{artwork_id}",
    response_model=APIResponse[ArtworkDetailRead],
    dependencies=[Depends(require_admin)],
)
def update_artwork(
    artwork_id: int,
    payload: ArtworkWrite,
    session: Session = Depends(get_session),
):
    """
    Replace an existing artwork (admin only).
    """
    return ok(service.update_artwork(session, artwork_id, payload))


@router.delete(
    "/{artwork_id}",
    response_model=APIResponse[None],
    dependencies=[Depends(require_admin)],
)
def delete_artwork(
    artwork_id: int,
    session: Session = Depends(get_session),
):
    """
    Delete an artwork and its media files (admin only).
    """
    service.delete_artwork(session, artwork_id)
    return ok(message="Artwork deleted successfully")
