import logging
from datetime import datetime, timezone

from fastapi import HTTPException, status
from sqlmodel import Session

from gallery.models.artwork import Artwork, ArtworkMediaFile
from gallery.repositories.artwork_repo import ArtworkRepository
from gallery.repositories.series_repo import SeriesRepository
from gallery.schemas.artwork import (
    ArtworkDetailRead,
    ArtworkFilters,
    ArtworkRead,
    ArtworkWrite,
    MediaFileRead,
    SeriesRead,
)
from gallery.services.media_sync import sync_media_files

logger = logging.getLogger(__name__)


class ArtworkService:
    """
    Business logic for Artwork & ArtworkMediaFile.

    Responsibilities:
      - public catalogue queries (filters, sort, pagination)
      - admin create/update/delete (enforced at router via require_admin)
      - linking series only when a seriesId is given
      - media file diff-and-sync on update
      - view / like counters
    """

    def __init__(self, repo: ArtworkRepository, series_repo: SeriesRepository):
        self.repo = repo
        self.series_repo = series_repo

    # ----- Helpers -----

    def _get_or_404(self, session: Session, artwork_id: int) -> Artwork:
        artwork = self.repo.get_by_id(session, artwork_id)
        if not artwork:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Artwork not found",
            )
        return artwork

    def _ensure_series(self, session: Session, series_id: int | None) -> None:
        if series_id is None:
            return
        if self.series_repo.get_by_id(session, series_id) is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Series {series_id} not found",
            )

    def _to_detail(self, session: Session, artwork: Artwork) -> ArtworkDetailRead:
        series = (
            self.series_repo.get_by_id(session, artwork.series_id)
            if artwork.series_id is not None
            else None
        )
        media_files = self.repo.list_media_files(session, artwork.id)
        return ArtworkDetailRead(
            **ArtworkRead.model_validate(artwork).model_dump(),
            series=SeriesRead.model_validate(series) if series else None,
            media_files=[MediaFileRead.model_validate(mf) for mf in media_files],
        )

    @staticmethod
    def _apply(artwork: Artwork, payload: ArtworkWrite) -> None:
        artwork.title = payload.title
        artwork.artist = payload.artist
        artwork.category = payload.category
        artwork.price = payload.price
        artwork.image_url = payload.image_url
        artwork.medium = payload.medium
        artwork.year = payload.year
        artwork.description = payload.description
        artwork.dimensions = payload.dimensions
        artwork.is_available = payload.is_available
        artwork.in_gallery = payload.in_gallery
        artwork.series_id = payload.series_id

    def _sync_media(self, session: Session, artwork: Artwork, payload: ArtworkWrite) -> None:
        if payload.media_files is None:
            return
        sync_media_files(
            existing=self.repo.list_media_files(session, artwork.id),
            incoming=payload.media_files,
            new_file=lambda: ArtworkMediaFile(artwork_id=artwork.id, url=""),
            save=lambda row: self.repo.add_media_file(session, row),
            remove=lambda row: self.repo.delete_media_file(session, row),
        )

    # ----- Public -----

    def list_artworks(
        self,
        session: Session,
        filters: ArtworkFilters,
    ) -> tuple[list[Artwork], int]:
        return self.repo.list_filtered(session, filters)

    def list_all(self, session: Session) -> list[Artwork]:
        return self.repo.list_all(session)

    def get_artwork(self, session: Session, artwork_id: int) -> ArtworkDetailRead:
        return self._to_detail(session, self._get_or_404(session, artwork_id))

    def record_view(self, session: Session, artwork_id: int) -> Artwork:
        return self._increment(session, artwork_id, "views")

    def like(self, session: Session, artwork_id: int) -> Artwork:
        return self._increment(session, artwork_id, "likes")

    def _increment(self, session: Session, artwork_id: int, column: str) -> Artwork:
        artwork = self._get_or_404(session, artwork_id)
        self.repo.increment_counter(session, artwork_id, column)
        session.commit()
        session.refresh(artwork)
        return artwork

    # ----- Admin -----

    def create_artwork(self, session: Session, payload: ArtworkWrite) -> ArtworkDetailRead:
        """
        Create an artwork and its media files in one transaction.
        """
        self._ensure_series(session, payload.series_id)

        artwork = Artwork(title=payload.title, image_url=payload.image_url)
        self._apply(artwork, payload)
        self.repo.add(session, artwork)

        if payload.media_files:
            self._sync_media(session, artwork, payload)

        session.commit()
        session.refresh(artwork)
        logger.info("Created artwork %s (%s)", artwork.id, artwork.title)
        return self._to_detail(session, artwork)

    def update_artwork(
        self,
        session: Session,
        artwork_id: int,
        payload: ArtworkWrite,
    ) -> ArtworkDetailRead:
        """
        Replace an artwork's fields and, when mediaFiles is sent,
        sync its media files. All-or-nothing.
        """
        artwork = self._get_or_404(session, artwork_id)
        self._ensure_series(session, payload.series_id)

        self._apply(artwork, payload)
        artwork.updated_at = datetime.now(timezone.utc)
        self.repo.add(session, artwork)
        self._sync_media(session, artwork, payload)

        session.commit()
        session.refresh(artwork)
        return self._to_detail(session, artwork)

    def delete_artwork(self, session: Session, artwork_id: int) -> None:
        """
        Delete an artwork and its media files.

        Transactions keep their JSON id list as a historical record.
        """
        artwork = self._get_or_404(session, artwork_id)
        for media_file in self.repo.list_media_files(session, artwork_id):
            self.repo.delete_media_file(session, media_file)
        # Child rows must be gone before the artwork row (no ORM relationship to order them)
        session.flush()
        self.repo.delete(session, artwork)
        session.commit()
        logger.info("Deleted artwork %s", artwork_id)
