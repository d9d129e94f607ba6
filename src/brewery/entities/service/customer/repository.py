"""Customer repository."""

from src.brewery.entities._repository import EntityRepository
from src.brewery.entities.service.customer.table import CustomerTable


class CustomerRepository(EntityRepository[CustomerTable]):
    """Data-access layer for customers."""

    model = CustomerTable
