"""
Helpers de serialización compartidos por los esquemas de respuesta.
"""
from datetime import date, datetime
from typing import Optional, Union

from pydantic import BaseModel, field_serializer


def serialize_datetime(value: Optional[Union[datetime, date]]) -> Optional[str]:
    if value is None:
        return None
    return value.isoformat()


class RecordOut(BaseModel):
    """Base for persisted records: id plus ISO timestamps."""

    id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

    @field_serializer("created_at", "updated_at")
    def _timestamps(self, value: Optional[datetime]) -> Optional[str]:
        return serialize_datetime(value)
