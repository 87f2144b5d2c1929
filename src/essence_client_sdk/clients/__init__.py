from .auth import AuthClient
from .catalog_client import CatalogClient
from .stock_client import StockClient

__all__ = [
    "AuthClient",
    "CatalogClient",
    "StockClient",
]
