from typing import Callable, Protocol, Sequence, TypeVar

from fastapi import HTTPException, status

from gallery.schemas.artwork import MediaFileIn


class MediaFileRow(Protocol):
    id: int | None
    url: str
    type: str
    description: str | None
    thumbnail_url: str | None
    order: int


F = TypeVar("F", bound=MediaFileRow)


def sync_media_files(
    existing: Sequence[F],
    incoming: Sequence[MediaFileIn],
    new_file: Callable[[], F],
    save: Callable[[F], None],
    remove: Callable[[F], None],
) -> None:
    """
    Reconcile a record's stored media files with the incoming list.

      - incoming file with an id  -> update that row in place
      - incoming file without id  -> create a new row
      - stored row not in payload -> delete it

    `order` follows the position in `incoming`.

    Raises:
        HTTPException(400): if an incoming id does not belong to the record.
    """
    existing_by_id = {f.id: f for f in existing}
    incoming_ids = {mf.id for mf in incoming if mf.id is not None}

    foreign = sorted(incoming_ids - existing_by_id.keys())
    if foreign:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Media files do not belong to this record: IDs {', '.join(map(str, foreign))}",
        )

    for stored in existing:
        if stored.id not in incoming_ids:
            remove(stored)

    for position, mf in enumerate(incoming):
        row = existing_by_id[mf.id] if mf.id is not None else new_file()
        row.url = mf.url
        row.type = mf.type
        row.description = mf.description
        row.thumbnail_url = mf.thumbnail_url
        row.order = position
        save(row)
