"""Unit tests for the async repositories against an in-memory database."""

from decimal import Decimal

from src.brewery.entities import (
    BeerRepository,
    BeerTable,
    CustomerRepository,
    CustomerTable,
)


def _beer(name: str, style: str = "IPA", **kwargs) -> BeerTable:
    return BeerTable(
        beer_name=name,
        beer_style=style,
        price=kwargs.pop("price", Decimal("10.00")),
        upc=kwargs.pop("upc", "12345"),
        quantity_on_hand=kwargs.pop("quantity_on_hand", 10),
        **kwargs,
    )


async def _collect(aiter) -> list:
    return [item async for item in aiter]


class TestBeerRepository:
    """Persistence behaviour of BeerRepository."""

    async def test_save_assigns_id_and_timestamps(self, beer_repository: BeerRepository):
        saved = await beer_repository.save(_beer("Space Dust"))

        assert saved.id is not None
        assert saved.created_at is not None
        assert saved.updated_at is not None

    async def test_find_by_id_returns_saved_record(self, beer_repository: BeerRepository):
        saved = await beer_repository.save(_beer("Space Dust", price=Decimal("12.99")))

        found = await beer_repository.find_by_id(saved.id)

        assert found is not None
        assert found.beer_name == "Space Dust"
        assert found.price == Decimal("12.99")

    async def test_find_by_id_unknown_returns_none(self, beer_repository: BeerRepository):
        assert await beer_repository.find_by_id("does-not-exist") is None

    async def test_save_with_existing_id_replaces_record(
        self, beer_repository: BeerRepository
    ):
        """Saving a record with a known id should overwrite it, not duplicate it."""
        saved = await beer_repository.save(_beer("Old Name"))
        created_at = saved.created_at

        replacement = _beer("New Name", style="Stout", id=saved.id)
        await beer_repository.save(replacement)

        rows = await _collect(beer_repository.find_all())
        assert len(rows) == 1
        assert rows[0].beer_name == "New Name"
        assert rows[0].beer_style == "Stout"
        assert rows[0].created_at == created_at

    async def test_find_all(self, beer_repository: BeerRepository):
        await beer_repository.save(_beer("One"))
        await beer_repository.save(_beer("Two", style="Stout"))

        names = {b.beer_name for b in await _collect(beer_repository.find_all())}

        assert names == {"One", "Two"}

    async def test_find_all_empty(self, beer_repository: BeerRepository):
        assert await _collect(beer_repository.find_all()) == []

    async def test_find_first_by_beer_name(self, beer_repository: BeerRepository):
        await beer_repository.save(_beer("Galaxy Cat"))
        await beer_repository.save(_beer("Space Dust"))

        found = await beer_repository.find_first_by_beer_name("Galaxy Cat")

        assert found is not None
        assert found.beer_name == "Galaxy Cat"
        assert await beer_repository.find_first_by_beer_name("Missing") is None

    async def test_find_first_by_beer_name_with_duplicates(
        self, beer_repository: BeerRepository
    ):
        """Duplicate names are allowed; exactly one match is returned."""
        await beer_repository.save(_beer("Twin", style="IPA"))
        await beer_repository.save(_beer("Twin", style="Stout"))

        found = await beer_repository.find_first_by_beer_name("Twin")

        assert found is not None
        assert found.beer_name == "Twin"

    async def test_find_by_beer_style(self, beer_repository: BeerRepository):
        for name in ("A", "B", "C"):
            await beer_repository.save(_beer(name, style="IPA"))
        await beer_repository.save(_beer("D", style="Stout"))

        ipas = await _collect(beer_repository.find_by_beer_style("IPA"))
        stouts = await _collect(beer_repository.find_by_beer_style("Stout"))

        assert len(ipas) == 3
        assert len(stouts) == 1
        assert await _collect(beer_repository.find_by_beer_style("Lager")) == []

    async def test_delete_by_id(self, beer_repository: BeerRepository):
        saved = await beer_repository.save(_beer("Doomed"))

        await beer_repository.delete_by_id(saved.id)

        assert await beer_repository.find_by_id(saved.id) is None

    async def test_delete_unknown_id_is_noop(self, beer_repository: BeerRepository):
        await beer_repository.save(_beer("Survivor"))

        await beer_repository.delete_by_id("does-not-exist")

        assert len(await _collect(beer_repository.find_all())) == 1


class TestCustomerRepository:
    async def test_save_and_find(self, customer_repository: CustomerRepository):
        saved = await customer_repository.save(CustomerTable(customer_name="Ada"))

        found = await customer_repository.find_by_id(saved.id)

        assert found is not None
        assert found.customer_name == "Ada"

    async def test_delete_twice(self, customer_repository: CustomerRepository):
        saved = await customer_repository.save(CustomerTable(customer_name="Ada"))

        await customer_repository.delete_by_id(saved.id)
        await customer_repository.delete_by_id(saved.id)

        assert await customer_repository.find_by_id(saved.id) is None
