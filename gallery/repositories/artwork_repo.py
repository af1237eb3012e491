from datetime import datetime, timezone

from sqlalchemy import func, or_, update
from sqlmodel import Session, select

from gallery.models.artwork import Artwork, ArtworkMediaFile
from gallery.schemas.artwork import ArtworkFilters

SORT_COLUMNS = {
    "price_asc": Artwork.price.asc(),
    "price_desc": Artwork.price.desc(),
    "name_asc": Artwork.title.asc(),
    "name_desc": Artwork.title.desc(),
    "year_asc": Artwork.year.asc(),
    "year_desc": Artwork.year.desc(),
    "views_asc": Artwork.views.asc(),
    "views_desc": Artwork.views.desc(),
}


class ArtworkRepository:
    """
    Data access layer for Artwork & ArtworkMediaFile.

    NOTE:
      - No commits here; creating an artwork together with its media
        files, or syncing them, is one unit of work. The service is
        responsible for calling session.commit().
    """

    # ----- Artworks -----

    def get_by_id(self, session: Session, artwork_id: int) -> Artwork | None:
        return session.get(Artwork, artwork_id)

    def list_filtered(
        self,
        session: Session,
        filters: ArtworkFilters,
    ) -> tuple[list[Artwork], int]:
        """
        Filtered, sorted, paginated listing.

        Returns:
            (page of artworks, total matching rows before pagination)
        """
        conditions = []
        if filters.category and filters.category.lower() != "all":
            conditions.append(func.lower(Artwork.category) == filters.category.lower())
        if filters.artist:
            conditions.append(func.lower(Artwork.artist) == filters.artist.lower())
        if filters.medium:
            conditions.append(func.lower(Artwork.medium) == filters.medium.lower())
        if filters.year is not None:
            conditions.append(Artwork.year == filters.year)
        if filters.min_price is not None:
            conditions.append(Artwork.price >= filters.min_price)
        if filters.max_price is not None:
            conditions.append(Artwork.price <= filters.max_price)
        if filters.is_available is not None:
            conditions.append(Artwork.is_available == filters.is_available)
        if filters.in_gallery is not None:
            conditions.append(Artwork.in_gallery == filters.in_gallery)
        if filters.series_id is not None:
            conditions.append(Artwork.series_id == filters.series_id)
        if filters.search:
            pattern = f"%{filters.search.lower()}%"
            conditions.append(
                or_(
                    func.lower(Artwork.title).like(pattern),
                    func.lower(Artwork.artist).like(pattern),
                    func.lower(Artwork.category).like(pattern),
                    func.lower(Artwork.description).like(pattern),
                )
            )

        count_stmt = select(func.count()).select_from(Artwork).where(*conditions)
        total = int(session.exec(count_stmt).one() or 0)

        order_by = SORT_COLUMNS.get(filters.sort or "", Artwork.created_at.desc())
        stmt = (
            select(Artwork)
            .where(*conditions)
            .order_by(order_by, Artwork.id.desc())
            .offset((filters.page - 1) * filters.limit)
            .limit(filters.limit)
        )
        return list(session.exec(stmt).all()), total

    def list_all(self, session: Session) -> list[Artwork]:
        stmt = select(Artwork).order_by(Artwork.created_at.desc(), Artwork.id.desc())
        return list(session.exec(stmt).all())

    def list_for_series(self, session: Session, series_id: int) -> list[Artwork]:
        stmt = (
            select(Artwork)
            .where(Artwork.series_id == series_id)
            .order_by(Artwork.created_at.asc(), Artwork.id.asc())
        )
        return list(session.exec(stmt).all())

    def count_for_series(self, session: Session, series_id: int) -> int:
        stmt = select(func.count()).select_from(Artwork).where(Artwork.series_id == series_id)
        return int(session.exec(stmt).one() or 0)

    def list_available_for_update(
        self,
        session: Session,
        artwork_ids: list[int],
    ) -> list[Artwork]:
        """
        Available artworks among `artwork_ids`, row-locked (FOR UPDATE)
        until the surrounding transaction ends.
        """
        stmt = (
            select(Artwork)
            .where(Artwork.id.in_(artwork_ids), Artwork.is_available == True)  # noqa: E712
            .with_for_update()
        )
        return list(session.exec(stmt).all())

    def set_availability(
        self,
        session: Session,
        artwork_ids: list[int],
        is_available: bool,
    ) -> None:
        stmt = (
            update(Artwork)
            .where(Artwork.id.in_(artwork_ids))
            .values(is_available=is_available, updated_at=datetime.now(timezone.utc))
        )
        session.exec(stmt)

    def increment_counter(self, session: Session, artwork_id: int, column: str) -> None:
        """
        Atomic `column = column + 1` (views / likes) done in SQL so
        concurrent requests do not lose updates.
        """
        col = getattr(Artwork, column)
        stmt = update(Artwork).where(Artwork.id == artwork_id).values({col: col + 1})
        session.exec(stmt)

    def add(self, session: Session, artwork: Artwork) -> Artwork:
        """Insert or update without committing; ensures id is populated."""
        session.add(artwork)
        session.flush()
        return artwork

    def delete(self, session: Session, artwork: Artwork) -> None:
        session.delete(artwork)
        session.flush()

    # ----- Media files -----

    def list_media_files(
        self,
        session: Session,
        artwork_id: int,
    ) -> list[ArtworkMediaFile]:
        stmt = (
            select(ArtworkMediaFile)
            .where(ArtworkMediaFile.artwork_id == artwork_id)
            .order_by(ArtworkMediaFile.order, ArtworkMediaFile.id)
        )
        return list(session.exec(stmt).all())

    def add_media_file(self, session: Session, media_file: ArtworkMediaFile) -> None:
        session.add(media_file)

    def delete_media_file(self, session: Session, media_file: ArtworkMediaFile) -> None:
        session.delete(media_file)
