import re
from datetime import datetime, timezone

from fastapi import HTTPException, status
from sqlmodel import Session

from gallery.models.artwork import Series
from gallery.repositories.artwork_repo import ArtworkRepository
from gallery.repositories.series_repo import SeriesRepository
from gallery.schemas.artwork import (
    ArtworkRead,
    SeriesRead,
    SeriesWithArtworksRead,
    SeriesWrite,
)


class SeriesService:
    """
    Business logic for Series.

    Responsibilities:
      - slug generation & uniqueness
      - refusing to delete a series that still holds artworks
    """

    def __init__(self, repo: SeriesRepository, artwork_repo: ArtworkRepository):
        self.repo = repo
        self.artwork_repo = artwork_repo

    # ----- Helpers -----

    @staticmethod
    def _slugify(raw: str) -> str:
        """
        Basic slugification:
          - lowercase
          - non-alphanumeric -> '-'
          - strip leading/trailing '-'
        """
        value = raw.strip().lower()
        value = re.sub(r"[^a-z0-9]+", "-", value)
        value = value.strip("-")
        return value or "series"

    def _ensure_unique_slug(
        self,
        session: Session,
        base_slug: str,
        exclude_id: int | None = None,
    ) -> str:
        """
        Ensure slug is unique by appending -2, -3, ... if needed.
        """
        slug = base_slug
        i = 2
        while True:
            existing = self.repo.get_by_slug(session, slug)
            if existing is None or existing.id == exclude_id:
                return slug
            slug = f"{base_slug}-{i}"
            i += 1

    def _get_or_404(self, session: Session, series_id: int) -> Series:
        series = self.repo.get_by_id(session, series_id)
        if not series:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Series not found",
            )
        return series

    # ----- Public -----

    def list_series(self, session: Session) -> list[Series]:
        return self.repo.list_by_name(session)

    def get_by_slug(self, session: Session, slug: str) -> SeriesWithArtworksRead:
        series = self.repo.get_by_slug(session, slug)
        if not series:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Series not found",
            )
        artworks = self.artwork_repo.list_for_series(session, series.id)
        return SeriesWithArtworksRead(
            **SeriesRead.model_validate(series).model_dump(),
            artworks=[ArtworkRead.model_validate(a) for a in artworks],
        )

    # ----- Admin -----

    def list_for_admin(self, session: Session) -> list[Series]:
        return self.repo.list_newest_first(session)

    def create_series(self, session: Session, payload: SeriesWrite) -> Series:
        slug = self._ensure_unique_slug(session, self._slugify(payload.name))
        series = Series(
            name=payload.name,
            slug=slug,
            description=payload.description,
        )
        return self.repo.create(session, series)

    def update_series(
        self,
        session: Session,
        series_id: int,
        payload: SeriesWrite,
    ) -> Series:
        """
        Rename / re-describe a series. The slug follows the new name.
        """
        series = self._get_or_404(session, series_id)
        if payload.name != series.name:
            series.slug = self._ensure_unique_slug(
                session, self._slugify(payload.name), exclude_id=series.id
            )
        series.name = payload.name
        series.description = payload.description
        series.updated_at = datetime.now(timezone.utc)
        return self.repo.update(session, series)

    def delete_series(self, session: Session, series_id: int) -> None:
        """
        Delete an empty series.

        Raises:
            HTTPException(409): if artworks still reference the series.
        """
        series = self._get_or_404(session, series_id)
        if self.artwork_repo.count_for_series(session, series_id) > 0:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail=(
                    "Cannot delete series: It still contains artworks. "
                    "Please reassign or delete artworks first."
                ),
            )
        self.repo.delete(session, series)
