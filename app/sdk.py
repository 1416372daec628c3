import uuid
from typing import Any, Dict, List, Optional

from .core import parse_int_param
from .database import ProductStore
from .errors import BadRequest, NotFound

# This file contains the core logic for all API endpoints. Payloads reaching
# the create/update functions have already passed auth and validate_product.

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10


def list_products_logic(
    store: ProductStore,
    category: Optional[str] = None,
    page: Optional[str] = None,
    limit: Optional[str] = None,
) -> Dict[str, Any]:
    products = store.list()
    if category:
        wanted = category.lower()
        products = [p for p in products if str(p.get("category", "")).lower() == wanted]

    page_n = parse_int_param(page, DEFAULT_PAGE)
    limit_n = parse_int_param(limit, DEFAULT_LIMIT)
    start = (page_n - 1) * limit_n
    return {
        "page": page_n,
        "limit": limit_n,
        "total": len(products),
        "data": products[start:start + limit_n],
    }


def get_product_logic(store: ProductStore, product_id: str) -> Dict[str, Any]:
    p = store.find(product_id)
    if p is None:
        raise NotFound()
    return p


def create_product_logic(store: ProductStore, payload: Dict[str, Any]) -> Dict[str, Any]:
    # id goes last so a client-supplied id never survives
    product = {**payload, "id": str(uuid.uuid4())}
    store.insert(product)
    return product


def update_product_logic(store: ProductStore, product_id: str, payload: Dict[str, Any]) -> Dict[str, Any]:
    index = store.find_index(product_id)
    if index == -1:
        raise NotFound()
    existing = store.list()[index]
    updated = {**existing, **payload, "id": existing["id"]}
    store.replace(index, updated)
    return updated


def delete_product_logic(store: ProductStore, product_id: str) -> None:
    index = store.find_index(product_id)
    if index == -1:
        raise NotFound()
    store.remove(index)


def search_products_logic(store: ProductStore, name: Optional[str]) -> List[Dict[str, Any]]:
    if not name:
        raise BadRequest("Search term is required.")
    term = name.lower()
    return [p for p in store.list() if term in str(p.get("name", "")).lower()]


def product_stats_logic(store: ProductStore) -> Dict[str, int]:
    stats: Dict[str, int] = {}
    for p in store.list():
        stats[p["category"]] = stats.get(p["category"], 0) + 1
    return stats
