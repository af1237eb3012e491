from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from gallery.core.auth import require_admin
from gallery.database import get_session
from gallery.repositories.media_blog_repo import MediaBlogRepository
from gallery.schemas.common import APIResponse, ok
from gallery.schemas.media_blog import MediaBlogEntryRead, MediaBlogEntryWrite
from gallery.services.media_blog_service import MediaBlogService

router = APIRouter(
    prefix="/admin/media-blog",
    tags=["Admin Media Blog"],
    dependencies=[Depends(require_admin)],
)

repo = MediaBlogRepository()
service = MediaBlogService(repo)


@router.get("", response_model=APIResponse[list[MediaBlogEntryRead]])
def list_entries(session: Session = Depends(get_session)):
    """Every entry, newest first, without pagination."""
    entries, total = service.list_entries(session, page=1, limit=None)
    return ok(entries, total=total)


@router.post(
    "",
    response_model=APIResponse[MediaBlogEntryRead],
    status_code=status.HTTP_201_CREATED,
)
def create_entry(
    payload: MediaBlogEntryWrite,
    session: Session = Depends(get_session),
):
    return ok(service.create_entry(session, payload))


@router.get("/{entry_id}", response_model=APIResponse[MediaBlogEntryRead])
def get_entry(
    entry_id: int,
    session: Session = Depends(get_session),
):
    return ok(service.get_entry(session, entry_id))


@router.put("/{entry_id}", response_model=APIResponse[MediaBlogEntryRead])
def update_entry(
    entry_id: int,
    payload: MediaBlogEntryWrite,
    session: Session = Depends(get_session),
):
    """
    Replace an entry. `mediaFiles` follows the same sync rules as artworks.
    """
    return ok(service.update_entry(session, entry_id, payload))


@router.delete("/{entry_id}", response_model=APIResponse[None])
def delete_entry(
    entry_id: int,
    session: Session = Depends(get_session),
):
    service.delete_entry(session, entry_id)
    return ok(message="Media blog entry deleted successfully")
