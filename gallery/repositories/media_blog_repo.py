from sqlalchemy import func, or_
from sqlmodel import Session, select

from gallery.models.media_blog import MediaBlogEntry, MediaBlogFile


class MediaBlogRepository:
    """
    Data access layer for MediaBlogEntry & MediaBlogFile.

    NOTE:
      - No commits here; an entry and its files are saved as one
        unit of work by the service.
    """

    # ----- Entries -----

    def get_by_id(self, session: Session, entry_id: int) -> MediaBlogEntry | None:
        return session.get(MediaBlogEntry, entry_id)

    def list_entries(
        self,
        session: Session,
        skip: int = 0,
        limit: int | None = None,
        entry_type: str | None = None,
        search: str | None = None,
    ) -> tuple[list[MediaBlogEntry], int]:
        conditions = []
        if entry_type:
            conditions.append(MediaBlogEntry.type == entry_type)
        if search:
            pattern = f"%{search.lower()}%"
            conditions.append(
                or_(
                    func.lower(MediaBlogEntry.title).like(pattern),
                    func.lower(MediaBlogEntry.short_desc).like(pattern),
                )
            )

        count_stmt = select(func.count()).select_from(MediaBlogEntry).where(*conditions)
        total = int(session.exec(count_stmt).one() or 0)

        stmt = (
            select(MediaBlogEntry)
            .where(*conditions)
            .order_by(MediaBlogEntry.created_at.desc(), MediaBlogEntry.id.desc())
            .offset(skip)
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        return list(session.exec(stmt).all()), total

    def add(self, session: Session, entry: MediaBlogEntry) -> MediaBlogEntry:
        session.add(entry)
        session.flush()
        return entry

    def delete(self, session: Session, entry: MediaBlogEntry) -> None:
        session.delete(entry)
        session.flush()

    # ----- Files -----

    def list_files(self, session: Session, entry_id: int) -> list[MediaBlogFile]:
        stmt = (
            select(MediaBlogFile)
            .where(MediaBlogFile.entry_id == entry_id)
            .order_by(MediaBlogFile.order, MediaBlogFile.id)
        )
        return list(session.exec(stmt).all())

    def add_file(self, session: Session, media_file: MediaBlogFile) -> None:
        session.add(media_file)

    def delete_file(self, session: Session, media_file: MediaBlogFile) -> None:
        session.delete(media_file)
