from datetime import datetime, timezone

from fastapi import HTTPException, status
from sqlmodel import Session

from gallery.models.media_blog import MediaBlogEntry, MediaBlogFile
from gallery.repositories.media_blog_repo import MediaBlogRepository
from gallery.schemas.artwork import MediaFileRead
from gallery.schemas.media_blog import MediaBlogEntryRead, MediaBlogEntryWrite
from gallery.services.media_sync import sync_media_files


class MediaBlogService:
    """
    Business logic for media blog entries and their ordered files.
    """

    def __init__(self, repo: MediaBlogRepository):
        self.repo = repo

    def _get_or_404(self, session: Session, entry_id: int) -> MediaBlogEntry:
        entry = self.repo.get_by_id(session, entry_id)
        if not entry:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Media blog entry not found",
            )
        return entry

    def _to_read(self, session: Session, entry: MediaBlogEntry) -> MediaBlogEntryRead:
        files = self.repo.list_files(session, entry.id)
        return MediaBlogEntryRead(
            id=entry.id,
            title=entry.title,
            short_desc=entry.short_desc,
            type=entry.type,
            external_link=entry.external_link,
            thumbnail_url=entry.thumbnail_url,
            duration=entry.duration,
            content=entry.content,
            created_at=entry.created_at,
            updated_at=entry.updated_at,
            media_files=[MediaFileRead.model_validate(f) for f in files],
        )

    @staticmethod
    def _apply(entry: MediaBlogEntry, payload: MediaBlogEntryWrite) -> None:
        entry.title = payload.title
        entry.type = payload.type
        entry.short_desc = payload.short_desc
        entry.external_link = payload.external_link
        entry.thumbnail_url = payload.thumbnail_url
        entry.duration = payload.duration
        entry.content = payload.content

    def _sync_files(
        self,
        session: Session,
        entry: MediaBlogEntry,
        payload: MediaBlogEntryWrite,
    ) -> None:
        if payload.media_files is None:
            return
        sync_media_files(
            existing=self.repo.list_files(session, entry.id),
            incoming=payload.media_files,
            new_file=lambda: MediaBlogFile(entry_id=entry.id, url=""),
            save=lambda row: self.repo.add_file(session, row),
            remove=lambda row: self.repo.delete_file(session, row),
        )

    # ----- Public -----

    def list_entries(
        self,
        session: Session,
        page: int = 1,
        limit: int | None = 10,
        entry_type: str | None = None,
        search: str | None = None,
    ) -> tuple[list[MediaBlogEntryRead], int]:
        skip = (page - 1) * limit if limit else 0
        entries, total = self.repo.list_entries(
            session,
            skip=skip,
            limit=limit,
            entry_type=entry_type.upper() if entry_type else None,
            search=search,
        )
        return [self._to_read(session, e) for e in entries], total

    def get_entry(self, session: Session, entry_id: int) -> MediaBlogEntryRead:
        return self._to_read(session, self._get_or_404(session, entry_id))

    # ----- Admin -----

    def create_entry(
        self,
        session: Session,
        payload: MediaBlogEntryWrite,
    ) -> MediaBlogEntryRead:
        entry = MediaBlogEntry(title=payload.title, type=payload.type)
        self._apply(entry, payload)
        self.repo.add(session, entry)
        self._sync_files(session, entry, payload)
        session.commit()
        session.refresh(entry)
        return self._to_read(session, entry)

    def update_entry(
        self,
        session: Session,
        entry_id: int,
        payload: MediaBlogEntryWrite,
    ) -> MediaBlogEntryRead:
        entry = self._get_or_404(session, entry_id)
        self._apply(entry, payload)
        entry.updated_at = datetime.now(timezone.utc)
        self.repo.add(session, entry)
        self._sync_files(session, entry, payload)
        session.commit()
        session.refresh(entry)
        return self._to_read(session, entry)

    def delete_entry(self, session: Session, entry_id: int) -> None:
        entry = self._get_or_404(session, entry_id)
        for media_file in self.repo.list_files(session, entry_id):
            self.repo.delete_file(session, media_file)
        session.flush()
        self.repo.delete(session, entry)
        session.commit()
