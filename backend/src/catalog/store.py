"""Catalog ports and the in-memory catalog used by the matching API.

The matcher never fetches products itself; request handlers read the full
candidate list from a CatalogPort and pass it in.
"""

import threading
from abc import ABC, abstractmethod
from typing import Dict, Iterable, List

from domain.boq.models import CatalogProduct
from observability.metrics import catalog_products


class CatalogPort(ABC):
    """Port interface for catalog sources."""

    @abstractmethod
    def list_products(self) -> List[CatalogProduct]:
        """All products, in catalog order."""
        pass

    @abstractmethod
    def upsert_many(self, products: Iterable[CatalogProduct]) -> int:
        """Insert or replace products by id.

        Returns:
            Number of products written
        """
        pass

    @abstractmethod
    def clear(self) -> None:
        pass


class InMemoryCatalog(CatalogPort):
    """Process-local catalog keyed by product id.

    Insertion order is preserved so ranking ties resolve in import order.
    Replacing an existing id keeps its original position.
    """

    def __init__(self, products: Iterable[CatalogProduct] = ()):
        self._lock = threading.Lock()
        self._products: Dict[object, CatalogProduct] = {}
        self.upsert_many(products)

    def __len__(self) -> int:
        return len(self._products)

    def list_products(self) -> List[CatalogProduct]:
        with self._lock:
            return list(self._products.values())

    def upsert_many(self, products: Iterable[CatalogProduct]) -> int:
        count = 0
        with self._lock:
            for product in products:
                self._products[product.id] = product
                count += 1
            catalog_products.set(len(self._products))
        return count

    def clear(self) -> None:
        with self._lock:
            self._products.clear()
            catalog_products.set(0)
