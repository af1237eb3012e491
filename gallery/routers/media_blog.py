from fastapi import APIRouter, Depends, Query
from sqlmodel import Session

from gallery.database import get_session
from gallery.repositories.media_blog_repo import MediaBlogRepository
from gallery.schemas.common import APIResponse, ok
from gallery.schemas.media_blog import MediaBlogEntryRead
from gallery.services.media_blog_service import MediaBlogService

router = APIRouter(prefix="/media-blog", tags=["Media Blog"])

repo = MediaBlogRepository()
service = MediaBlogService(repo)


@router.get("", response_model=APIResponse[list[MediaBlogEntryRead]])
def list_entries(
    session: Session = Depends(get_session),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
    type: str | None = None,
    search: str | None = None,
):
    """
    Media blog entries, newest first.

    - `type` filters by entry type (case-insensitive).
    - `search` matches title and short description.
    """
    entries, total = service.list_entries(
        session, page=page, limit=limit, entry_type=type, search=search
    )
    return ok(entries, total=total)


@router.get("/{entry_id}", response_model=APIResponse[MediaBlogEntryRead])
def get_entry(
    entry_id: int,
    session: Session = Depends(get_session),
):
    return ok(service.get_entry(session, entry_id))
