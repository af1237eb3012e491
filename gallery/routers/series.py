from fastapi import APIRouter, Depends
from sqlmodel import Session

from gallery.database import get_session
from gallery.repositories.artwork_repo import ArtworkRepository
from gallery.repositories.series_repo import SeriesRepository
from gallery.schemas.artwork import SeriesRead, SeriesWithArtworksRead
from gallery.schemas.common import APIResponse, ok
from gallery.services.series_service import SeriesService

router = APIRouter(prefix="/series", tags=["Series"])

repo = SeriesRepository()
artwork_repo = ArtworkRepository()
service = SeriesService(repo, artwork_repo)


@router.get("", response_model=APIResponse[list[SeriesRead]])
def list_series(session: Session = Depends(get_session)):
    """All series, ordered by name."""
    series = service.list_series(session)
    return ok(series, total=len(series))


@router.get("/{slug}", response_model=APIResponse[SeriesWithArtworksRead])
def get_series(
    slug: str,
    session: Session = Depends(get_session),
):
    """
    A series and its artworks (oldest first).
    """
    return ok(service.get_by_slug(session, slug))
