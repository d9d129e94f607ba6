"""Entities module with an entity-centric structure.

Each entity has its own package containing:
- table.py: Database persistence model (the stored record)
- dto.py: Transfer object exchanged with API callers
- mapper.py: Field-for-field conversion between the two
- repository.py: Async data access
"""

from .service.beer import BeerDTO, BeerMapper, BeerRepository, BeerTable
from .service.customer import (
    CustomerDTO,
    CustomerMapper,
    CustomerRepository,
    CustomerTable,
)

__all__ = [
    "BeerDTO",
    "BeerMapper",
    "BeerRepository",
    "BeerTable",
    "CustomerDTO",
    "CustomerMapper",
    "CustomerRepository",
    "CustomerTable",
]
