from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from gallery.core.auth import require_admin
from gallery.database import get_session
from gallery.repositories.artwork_repo import ArtworkRepository
from gallery.repositories.series_repo import SeriesRepository
from gallery.schemas.artwork import ArtworkDetailRead, ArtworkRead, ArtworkWrite
from gallery.schemas.common import APIResponse, ok
from gallery.services.artwork_service import ArtworkService

router = APIRouter(
    prefix="/admin/artworks",
    tags=["Admin Artworks"],
    dependencies=[Depends(require_admin)],
)

repo = ArtworkRepository()
series_repo = SeriesRepository()
service = ArtworkService(repo, series_repo)


@router.get("", response_model=APIResponse[list[ArtworkRead]])
def list_all_artworks(session: Session = Depends(get_session)):
    """
    Every artwork, sold or not, newest first (admin only).
    """
    artworks = service.list_all(session)
    return ok(artworks, total=len(artworks))


@router.post(
    "",
    response_model=APIResponse[ArtworkDetailRead],
    status_code=status.HTTP_201_CREATED,
)
def create_artwork(
    payload: ArtworkWrite,
    session: Session = Depends(get_session),
):
    """
    Create an artwork together with its media files.
    """
    return ok(service.create_artwork(session, payload))


@router.get("/{artwork_id}", response_model=APIResponse[ArtworkDetailRead])
def get_artwork(
    artwork_id: int,
    session: Session = Depends(get_session),
):
    return ok(service.get_artwork(session, artwork_id))


@router.put("/{artwork_id}", response_model=APIResponse[ArtworkDetailRead])
def update_artwork(
    artwork_id: int,
    payload: ArtworkWrite,
    session: Session = Depends(get_session),
):
    """
    Replace an artwork. When `mediaFiles` is sent the stored files are
    synced to it: ids update in place, new entries are created, missing
    ones are deleted.
    """
    return ok(service.update_artwork(session, artwork_id, payload))


@router.delete("/{artwork_id}", response_model=APIResponse[None])
def delete_artwork(
    artwork_id: int,
    session: Session = Depends(get_session),
):
    service.delete_artwork(session, artwork_id)
    return ok(message="Artwork deleted successfully")
