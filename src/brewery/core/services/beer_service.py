"""Beer catalog operations."""

from collections.abc import AsyncIterator

from loguru import logger

from src.brewery.core.services.text import has_text
from src.brewery.entities.service.beer import BeerDTO, BeerMapper, BeerRepository


class BeerService:
    """Beer business operations over a repository and a mapper.

    Absent records are reported as ``None``, never as an exception. Store
    errors propagate unchanged.
    """

    def __init__(self, beer_repository: BeerRepository, beer_mapper: BeerMapper) -> None:
        self._repository = beer_repository
        self._mapper = beer_mapper

    async def list_beers(self) -> AsyncIterator[BeerDTO]:
        async for beer in self._repository.find_all():
            yield self._mapper.beer_to_beer_dto(beer)

    async def find_first_by_beer_name(self, beer_name: str) -> BeerDTO | None:
        beer = await self._repository.find_first_by_beer_name(beer_name)
        return self._mapper.beer_to_beer_dto(beer) if beer is not None else None

    async def find_by_beer_style(self, beer_style: str) -> AsyncIterator[BeerDTO]:
        async for beer in self._repository.find_by_beer_style(beer_style):
            yield self._mapper.beer_to_beer_dto(beer)

    async def get_by_id(self, beer_id: str) -> BeerDTO | None:
        beer = await self._repository.find_by_id(beer_id)
        return self._mapper.beer_to_beer_dto(beer) if beer is not None else None

    async def save_beer(self, beer_dto: BeerDTO) -> BeerDTO:
        """Create a new beer; any identifier on the input is ignored."""
        beer = self._mapper.beer_dto_to_beer(beer_dto)
        beer.id = None
        beer.created_at = None
        saved = await self._repository.save(beer)
        logger.info("Created beer {}", saved.id)
        return self._mapper.beer_to_beer_dto(saved)

    async def update_beer(self, beer_id: str, beer_dto: BeerDTO) -> BeerDTO | None:
        """Overwrite every mutable field of an existing beer."""
        found = await self._repository.find_by_id(beer_id)
        if found is None:
            return None

        found.beer_name = beer_dto.beer_name
        found.beer_style = beer_dto.beer_style
        found.price = beer_dto.price
        found.upc = beer_dto.upc
        found.quantity_on_hand = beer_dto.quantity_on_hand

        saved = await self._repository.save(found)
        logger.info("Updated beer {}", beer_id)
        return self._mapper.beer_to_beer_dto(saved)

    async def patch_beer(self, beer_id: str, beer_dto: BeerDTO) -> BeerDTO | None:
        """Overwrite only the fields the input actually carries.

        Blank strings and ``None`` numbers leave the stored value untouched.
        """
        found = await self._repository.find_by_id(beer_id)
        if found is None:
            return None

        if has_text(beer_dto.beer_name):
            found.beer_name = beer_dto.beer_name
        if has_text(beer_dto.beer_style):
            found.beer_style = beer_dto.beer_style
        if beer_dto.price is not None:
            found.price = beer_dto.price
        if has_text(beer_dto.upc):
            found.upc = beer_dto.upc
        if beer_dto.quantity_on_hand is not None:
            found.quantity_on_hand = beer_dto.quantity_on_hand

        saved = await self._repository.save(found)
        logger.info("Patched beer {}", beer_id)
        return self._mapper.beer_to_beer_dto(saved)

    async def delete_beer(self, beer_id: str) -> None:
        await self._repository.delete_by_id(beer_id)
        logger.info("Deleted beer {}", beer_id)
