from datetime import datetime

from pydantic import BaseModel
from pydantic import Field as PydanticField
from sqlmodel import Field, SQLModel


class EntityDTO(BaseModel):
    """Base transfer object carrying the store-assigned identifier and timestamps.

    All three are optional so inbound payloads can omit them.
    """

    id: str | None = PydanticField(
        default=None, description="Unique identifier, assigned by the store"
    )
    created_at: datetime | None = PydanticField(default=None)
    updated_at: datetime | None = PydanticField(default=None)


class EntityTable(SQLModel, table=False):
    """Base persistence record.

    ``id`` and the timestamps are left empty until the repository saves the
    record for the first time.
    """

    id: str | None = Field(
        default=None,
        primary_key=True,
        max_length=36,
        description="Unique identifier for the entity",
    )
    created_at: datetime | None = Field(default=None)
    updated_at: datetime | None = Field(default=None)
