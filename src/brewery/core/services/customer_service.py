"""Customer operations."""

from collections.abc import AsyncIterator

from loguru import logger

from src.brewery.core.services.text import has_text
from src.brewery.entities.service.customer import (
    CustomerDTO,
    CustomerMapper,
    CustomerRepository,
)


class CustomerService:
    def __init__(
        self, customer_repository: CustomerRepository, customer_mapper: CustomerMapper
    ) -> None:
        self._repository = customer_repository
        self._mapper = customer_mapper

    async def list_customers(self) -> AsyncIterator[CustomerDTO]:
        async for customer in self._repository.find_all():
            yield self._mapper.customer_to_customer_dto(customer)

    async def get_by_id(self, customer_id: str) -> CustomerDTO | None:
        customer = await self._repository.find_by_id(customer_id)
        if customer is None:
            return None
        return self._mapper.customer_to_customer_dto(customer)

    async def save_customer(self, customer_dto: CustomerDTO) -> CustomerDTO:
        customer = self._mapper.customer_dto_to_customer(customer_dto)
        customer.id = None
        customer.created_at = None
        saved = await self._repository.save(customer)
        logger.info("Created customer {}", saved.id)
        return self._mapper.customer_to_customer_dto(saved)

    async def update_customer(
        self, customer_id: str, customer_dto: CustomerDTO
    ) -> CustomerDTO | None:
        found = await self._repository.find_by_id(customer_id)
        if found is None:
            return None

        found.customer_name = customer_dto.customer_name

        saved = await self._repository.save(found)
        logger.info("Updated customer {}", customer_id)
        return self._mapper.customer_to_customer_dto(saved)

    async def patch_customer(
        self, customer_id: str, customer_dto: CustomerDTO
    ) -> CustomerDTO | None:
        found = await self._repository.find_by_id(customer_id)
        if found is None:
            return None

        if has_text(customer_dto.customer_name):
            found.customer_name = customer_dto.customer_name

        saved = await self._repository.save(found)
        logger.info("Patched customer {}", customer_id)
        return self._mapper.customer_to_customer_dto(saved)

    async def delete_customer(self, customer_id: str) -> None:
        await self._repository.delete_by_id(customer_id)
        logger.info("Deleted customer {}", customer_id)
