"""Unit tests for the beer transfer object, table model and mapper."""

from datetime import UTC, datetime
from decimal import Decimal

import pytest
from pydantic import ValidationError

from src.brewery.entities import BeerDTO, BeerMapper, BeerTable


class TestBeerMapper:
    """Conversion between BeerDTO and BeerTable."""

    def test_dto_to_table_copies_every_field(self, beer_mapper: BeerMapper):
        """Every DTO field should land on the table model unchanged."""
        now = datetime.now(UTC)
        dto = BeerDTO(
            id="beer-1",
            beer_name="Space Dust",
            beer_style="IPA",
            price=Decimal("12.99"),
            upc="0123456789",
            quantity_on_hand=42,
            created_at=now,
            updated_at=now,
        )

        beer = beer_mapper.beer_dto_to_beer(dto)

        assert isinstance(beer, BeerTable)
        assert beer.id == "beer-1"
        assert beer.beer_name == "Space Dust"
        assert beer.beer_style == "IPA"
        assert beer.price == Decimal("12.99")
        assert beer.upc == "0123456789"
        assert beer.quantity_on_hand == 42
        assert beer.created_at == now
        assert beer.updated_at == now

    def test_round_trip_preserves_fields(self, beer_mapper: BeerMapper):
        dto = BeerDTO(
            id="beer-2",
            beer_name="Galaxy Cat",
            beer_style="Pale Ale",
            price=Decimal("9.50"),
            upc="111",
            quantity_on_hand=3,
        )

        assert beer_mapper.beer_to_beer_dto(beer_mapper.beer_dto_to_beer(dto)) == dto

    def test_absent_fields_stay_absent(self, beer_mapper: BeerMapper):
        """Missing input fields map to None rather than defaults."""
        beer = beer_mapper.beer_dto_to_beer(BeerDTO(beer_name="Only Name"))

        assert beer.id is None
        assert beer.beer_style is None
        assert beer.price is None
        assert beer.quantity_on_hand is None
        assert beer.created_at is None


class TestBeerDTO:
    def test_all_fields_optional(self):
        dto = BeerDTO()

        assert dto.model_dump() == {
            "id": None,
            "created_at": None,
            "updated_at": None,
            "beer_name": None,
            "beer_style": None,
            "price": None,
            "upc": None,
            "quantity_on_hand": None,
        }

    def test_price_parsed_as_decimal(self):
        dto = BeerDTO.model_validate({"price": "7.25"})

        assert dto.price == Decimal("7.25")

    @pytest.mark.parametrize("price", ["12.345", "123456789.99"])
    def test_price_outside_column_precision_rejected(self, price: str):
        """Prices must fit the stored NUMERIC(10, 2) column without rounding."""
        with pytest.raises(ValidationError):
            BeerDTO.model_validate({"price": price})
