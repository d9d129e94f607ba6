"""Entity package: Customer."""

from .dto import CustomerDTO
from .mapper import CustomerMapper
from .repository import CustomerRepository
from .table import CustomerTable

__all__ = ["CustomerDTO", "CustomerMapper", "CustomerRepository", "CustomerTable"]
