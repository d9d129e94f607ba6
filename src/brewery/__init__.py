"""Brewery catalog API.

Asynchronous CRUD service for beers and customers, backed by SQLModel over an
async SQLAlchemy engine and secured with externally issued bearer tokens.
"""

__version__ = "0.1.0"
