from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, model_serializer
from pydantic.alias_generators import to_camel
from sqlmodel import SQLModel

T = TypeVar("T")


class CamelModel(SQLModel):
    """
    Base for request/response schemas.

    Attributes are snake_case in Python and camelCase on the wire
    (imageUrl, isAvailable, artworkIds, ...). Either spelling is accepted
    on input.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class APIResponse(BaseModel, Generic[T]):
    """
    Envelope shared by every endpoint:

        {"success": bool, "data"?: T, "message"?: str, "total"?: int}

    Envelope keys left as None are omitted; nulls inside `data` are kept.
    """

    success: bool = True
    data: T | None = None
    message: str | None = None
    total: int | None = None

    @model_serializer(mode="wrap")
    def drop_empty_keys(self, handler):
        body = handler(self)
        return {key: value for key, value in body.items() if value is not None}


def ok(data: Any = None, *, message: str | None = None, total: int | None = None) -> APIResponse:
    """Successful envelope; the route's response_model narrows `data`."""
    return APIResponse(success=True, data=data, message=message, total=total)


def not_blank(v: str | None) -> str | None:
    """Strip a string field; reject it if nothing is left."""
    if v is None:
        return v
    v = v.strip()
    if not v:
        raise ValueError("field cannot be empty")
    return v


def blank_to_none(v: str | None) -> str | None:
    if v is None:
        return v
    v = v.strip()
    return v or None
