from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, BeforeValidator, field_serializer

from game.core.epoch import from_epoch_millis, to_epoch_millis
from game.models.player import Profession, Race


def _birthday_from_millis(value):
    # JSON clients send epoch milliseconds; Python callers may pass a datetime.
    if isinstance(value, int) and not isinstance(value, bool):
        return from_epoch_millis(value)
    return value


Birthday = Annotated[datetime | None, BeforeValidator(_birthday_from_millis)]


class PlayerCreate(BaseModel):
    # Everything is optional here so the service can report a BadRequestError
    # naming the offending field instead of a generic schema error.
    name: str | None = None
    title: str | None = None
    race: Race | None = None
    profession: Profession | None = None
    birthday: Birthday = None
    banned: bool | None = None
    experience: int | None = None


class PlayerUpdate(BaseModel):
    """Partial update.

    Only the fields the caller actually sent (``model_fields_set``) are
    applied, and a field sent as ``null`` counts as not sent.
    """

    name: str | None = None
    title: str | None = None
    race: Race | None = None
    profession: Profession | None = None
    birthday: Birthday = None
    banned: bool | None = None
    experience: int | None = None

    def update_mask(self) -> dict:
        return {
            name: value
            for name in self.model_fields_set
            if (value := getattr(self, name)) is not None
        }


class PlayerOut(BaseModel):
    id: int
    name: str
    title: str
    race: Race
    profession: Profession
    birthday: datetime
    banned: bool
    experience: int
    level: int
    until_next_level: int

    class Config:
        from_attributes = True

    @field_serializer("birthday")
    def _birthday_to_millis(self, value: datetime) -> int:
        return to_epoch_millis(value)
