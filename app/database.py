import threading
from typing import Any, Dict, List, Optional

from .models import Product

# This file holds the in-memory product collection. Nothing is persisted;
# the collection is rebuilt from SEED_PRODUCTS on startup and on reset().

SEED_PRODUCTS: List[Product] = [
    Product(
        id="1",
        name="Laptop",
        description="High-performance laptop with 16GB RAM",
        price=1200,
        category="electronics",
        inStock=True,
    ),
    Product(
        id="2",
        name="Smartphone",
        description="Latest model with 128GB storage",
        price=800,
        category="electronics",
        inStock=True,
    ),
    Product(
        id="3",
        name="Coffee Maker",
        description="Programmable coffee maker with timer",
        price=50,
        category="kitchen",
        inStock=False,
    ),
]


def _seed_records() -> List[Dict[str, Any]]:
    return [p.model_dump() for p in SEED_PRODUCTS]


class ProductStore:
    """Sole owner of the product list. Index-based mutations keep order."""

    def __init__(self, seed: bool = True):
        self._lock = threading.RLock()
        self._products: List[Dict[str, Any]] = _seed_records() if seed else []

    def __len__(self) -> int:
        return len(self._products)

    def list(self) -> List[Dict[str, Any]]:
        with self._lock:
            return [dict(p) for p in self._products]

    def find(self, product_id: str) -> Optional[Dict[str, Any]]:
        with self._lock:
            for p in self._products:
                if p["id"] == product_id:
                    return dict(p)
        return None

    def find_index(self, product_id: str) -> int:
        with self._lock:
            for i, p in enumerate(self._products):
                if p["id"] == product_id:
                    return i
        return -1

    def insert(self, product: Dict[str, Any]) -> None:
        with self._lock:
            self._products.append(product)

    def replace(self, index: int, product: Dict[str, Any]) -> None:
        with self._lock:
            self._products[index] = product

    def remove(self, index: int) -> None:
        with self._lock:
            del self._products[index]

    def reset(self) -> None:
        with self._lock:
            self._products = _seed_records()


store = ProductStore()
