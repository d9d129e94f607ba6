"""Entity package: Beer."""

from .dto import BeerDTO
from .mapper import BeerMapper
from .repository import BeerRepository
from .table import BeerTable

__all__ = ["BeerDTO", "BeerMapper", "BeerRepository", "BeerTable"]
