"""Beer transfer object."""

from decimal import Decimal

from pydantic import Field

from src.brewery.entities._base import EntityDTO


class BeerDTO(EntityDTO):
    """External representation of a beer.

    No field is required: create payloads omit the store-assigned fields and
    patch payloads carry only what changes.
    """

    beer_name: str | None = Field(default=None, description="Beer name")
    beer_style: str | None = Field(default=None, description="Beer style, e.g. IPA")
    price: Decimal | None = Field(
        default=None, max_digits=10, decimal_places=2, description="Unit price"
    )
    upc: str | None = Field(default=None, description="Universal product code")
    quantity_on_hand: int | None = Field(default=None, description="Units in stock")
