# sdk/pystore.py
import requests
from typing import Any, Dict, List, Optional


class ProductApiError(Exception):
    """Non-2xx response from the products API, decoded from its error envelope."""

    def __init__(self, status: int, message: str):
        self.status = status
        self.message = message
        super().__init__(f"HTTP {status}: {message}")


class ProductClient:
    def __init__(
        self,
        base_url: str = "http://localhost:3000",
        api_key: Optional[str] = None,
        timeout: int = 10,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        # anything with a requests-style API works here (e.g. a TestClient)
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout
        if api_key:
            self.session.headers.update({"x-api-key": api_key})

    def _request(self, method: str, path: str, **kwargs) -> Any:
        r = self.session.request(method, f"{self.base_url}{path}", timeout=self.timeout, **kwargs)
        if r.status_code >= 400:
            raise _error_from_response(r)
        if r.status_code == 204 or not r.content:
            return None
        if r.headers.get("content-type", "").startswith("application/json"):
            return r.json()
        return r.text

    def welcome(self) -> str:
        return self._request("GET", "/")

    # Products
    def list_products(
        self,
        category: Optional[str] = None,
        page: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> Dict[str, Any]:
        params = {}
        if category:
            params["category"] = category
        if page is not None:
            params["page"] = page
        if limit is not None:
            params["limit"] = limit
        return self._request("GET", "/api/products", params=params)

    def get_product(self, product_id: str) -> Dict[str, Any]:
        return self._request("GET", f"/api/products/{product_id}")

    def create_product(self, **fields) -> Dict[str, Any]:
        return self._request("POST", "/api/products", json=fields)

    def update_product(self, product_id: str, **fields) -> Dict[str, Any]:
        return self._request("PUT", f"/api/products/{product_id}", json=fields)

    def delete_product(self, product_id: str) -> None:
        self._request("DELETE", f"/api/products/{product_id}")

    def search_products(self, name: str) -> List[Dict[str, Any]]:
        return self._request("GET", "/api/products/search", params={"name": name})

    def stats(self) -> Dict[str, int]:
        return self._request("GET", "/api/products/stats")


def _error_from_response(r) -> ProductApiError:
    try:
        body = r.json()
    except ValueError:
        return ProductApiError(r.status_code, r.text)
    if isinstance(body, dict) and isinstance(body.get("error"), dict):
        err = body["error"]
        return ProductApiError(err.get("status", r.status_code), err.get("message", ""))
    return ProductApiError(r.status_code, r.text)
