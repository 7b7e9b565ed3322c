from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, field_serializer
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class DataResponse(BaseModel, Generic[T]):
    data: T


class MessageResponse(BaseModel):
    message: str
    errors: dict[str, list[str]] | None = None


class RecordRead(BaseModel):
    """Base for persisted records: camelCase keys and string ids on the wire."""

    id: int

    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)

    @field_serializer("id")
    def _serialize_id(self, value: int) -> str:
        return str(value)
