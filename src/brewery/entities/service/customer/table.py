"""Customer database table model."""

from sqlmodel import Field

from src.brewery.entities._base import EntityTable


class CustomerTable(EntityTable, table=True):
    """Stored customer record."""

    __tablename__ = "customer"

    customer_name: str | None = Field(default=None, index=True)
