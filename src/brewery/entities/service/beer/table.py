"""Beer database table model."""

from decimal import Decimal

from sqlmodel import Field

from src.brewery.entities._base import EntityTable


class BeerTable(EntityTable, table=True):
    """Stored beer record.

    ``beer_name`` is intended to be unique but the store does not enforce it;
    lookups by name return the first match.
    """

    __tablename__ = "beer"

    beer_name: str | None = Field(default=None, index=True)
    beer_style: str | None = Field(default=None, index=True)
    price: Decimal | None = Field(default=None, max_digits=10, decimal_places=2)
    upc: str | None = None
    quantity_on_hand: int | None = None
