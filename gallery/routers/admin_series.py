from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from gallery.core.auth import require_admin
from gallery.database import get_session
from gallery.repositories.artwork_repo import ArtworkRepository
from gallery.repositories.series_repo import SeriesRepository
from gallery.schemas.artwork import SeriesRead, SeriesWrite
from gallery.schemas.common import APIResponse, ok
from gallery.services.series_service import SeriesService

router = APIRouter(
    prefix="/admin/series",
    tags=["Admin Series"],
    dependencies=[Depends(require_admin)],
)

repo = SeriesRepository()
artwork_repo = ArtworkRepository()
service = SeriesService(repo, artwork_repo)


@router.get("", response_model=APIResponse[list[SeriesRead]])
def list_series(session: Session = Depends(get_session)):
    """All series, newest first."""
    series = service.list_for_admin(session)
    return ok(series, total=len(series))


@router.post(
    "",
    response_model=APIResponse[SeriesRead],
    status_code=status.HTTP_201_CREATED,
)
def create_series(
    payload: SeriesWrite,
    session: Session = Depends(get_session),
):
    """
    Create a series. The slug is derived from the name and made unique.
    """
    return ok(service.create_series(session, payload))


@router.put("/{series_id}", response_model=APIResponse[SeriesRead])
def update_series(
    series_id: int,
    payload: SeriesWrite,
    session: Session = Depends(get_session),
):
    return ok(service.update_series(session, series_id, payload))


@router.delete("/{series_id}", response_model=APIResponse[None])
def delete_series(
    series_id: int,
    session: Session = Depends(get_session),
):
    """
    Delete a series.

    409 while any artwork still belongs to it.
    """
    service.delete_series(session, series_id)
    return ok(message="Series deleted successfully")
