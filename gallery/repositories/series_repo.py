from sqlmodel import Session, select

from gallery.models.artwork import Series


class SeriesRepository:
    """
    Data access layer for Series.

    - Pure DB operations (CRUD + queries).
    - No FastAPI, no business logic.
    """

    def get_by_id(self, session: Session, series_id: int) -> Series | None:
        return session.get(Series, series_id)

    def get_by_slug(self, session: Session, slug: str) -> Series | None:
        stmt = select(Series).where(Series.slug == slug)
        return session.exec(stmt).first()

    def list_by_name(self, session: Session) -> list[Series]:
        stmt = select(Series).order_by(Series.name)
        return list(session.exec(stmt).all())

    def list_newest_first(self, session: Session) -> list[Series]:
        stmt = select(Series).order_by(Series.created_at.desc(), Series.id.desc())
        return list(session.exec(stmt).all())

    def create(self, session: Session, series: Series) -> Series:
        session.add(series)
        session.commit()
        session.refresh(series)
        return series

    def update(self, session: Session, series: Series) -> Series:
        session.add(series)
        session.commit()
        session.refresh(series)
        return series

    def delete(self, session: Session, series: Series) -> None:
        session.delete(series)
        session.commit()
