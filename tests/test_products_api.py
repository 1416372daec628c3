# tests/test_products_api.py
from app.database import store


def test_root_returns_welcome_text(client):
    r = client.get("/")
    assert r.status_code == 200
    assert r.text.startswith("Welcome to the Product API!")


def test_list_defaults(client):
    body = client.get("/api/products").json()
    assert body["page"] == 1
    assert body["limit"] == 10
    assert body["total"] == 3
    assert [p["id"] for p in body["data"]] == ["1", "2", "3"]


def test_pagination(client):
    body = client.get("/api/products", params={"page": 1, "limit": 2}).json()
    assert len(body["data"]) == 2
    assert body["total"] == 3

    body = client.get("/api/products", params={"page": 2, "limit": 2}).json()
    assert [p["name"] for p in body["data"]] == ["Coffee Maker"]


def test_pagination_bad_values_fall_back(client):
    body = client.get("/api/products", params={"page": "abc", "limit": "0"}).json()
    assert body["page"] == 1
    assert body["limit"] == 10
    assert len(body["data"]) == 3


def test_filter_by_category_case_insensitive(client):
    body = client.get("/api/products", params={"category": "Electronics"}).json()
    assert body["total"] == 2
    assert {p["name"] for p in body["data"]} == {"Laptop", "Smartphone"}


def test_get_by_id(client):
    r = client.get("/api/products/3")
    assert r.status_code == 200
    assert r.json()["name"] == "Coffee Maker"


def test_get_unknown_id_is_404_envelope(client):
    r = client.get("/api/products/nope")
    assert r.status_code == 404
    assert r.json() == {"error": {"status": 404, "message": "Product not found"}}


def test_create_round_trip(client, auth, new_product):
    r = client.post("/api/products", json=new_product, headers=auth)
    assert r.status_code == 201
    created = r.json()
    assert created["id"] not in {"1", "2", "3"}

    fetched = client.get(f"/api/products/{created['id']}").json()
    assert fetched == created
    for key, value in new_product.items():
        assert fetched[key] == value
    assert len(store) == 4


def test_create_ids_are_unique(client, auth, new_product):
    ids = {client.post("/api/products", json=new_product, headers=auth).json()["id"] for _ in range(20)}
    assert len(ids) == 20


def test_create_ignores_client_id(client, auth, new_product):
    created = client.post("/api/products", json={**new_product, "id": "1"}, headers=auth).json()
    assert created["id"] != "1"
    assert client.get("/api/products/1").json()["name"] == "Laptop"


def test_create_requires_api_key(client, new_product):
    r = client.post("/api/products", json=new_product)
    assert r.status_code == 401
    assert r.json() == {"error": {"status": 401, "message": "Unauthorized: Invalid API key"}}
    assert len(store) == 3


def test_create_wrong_api_key(client, new_product):
    r = client.post("/api/products", json=new_product, headers={"x-api-key": "wrong"})
    assert r.status_code == 401
    assert len(store) == 3


def test_auth_runs_before_validation(client):
    r = client.post("/api/products", json={"price": 0})
    assert r.status_code == 401


def test_create_zero_price_rejected(client, auth, new_product):
    r = client.post("/api/products", json={**new_product, "price": 0}, headers=auth)
    assert r.status_code == 400
    assert r.json()["error"]["message"] == "Product price is required and must be a positive number."
    assert len(store) == 3


def test_validation_is_fail_fast(client, auth):
    r = client.post("/api/products", json={"name": "  ", "price": -1}, headers=auth)
    assert r.status_code == 400
    assert r.json()["error"] == {
        "status": 400,
        "message": "Product name is required and must be a non-empty string.",
    }


def test_missing_category_rejected(client, auth):
    r = client.post("/api/products", json={"name": "Kettle", "price": 20}, headers=auth)
    assert r.status_code == 400
    assert "category" in r.json()["error"]["message"]


def test_malformed_json_is_400(client, auth):
    r = client.post(
        "/api/products",
        content="{not json",
        headers={**auth, "content-type": "application/json"},
    )
    assert r.status_code == 400
    assert r.json() == {"error": {"status": 400, "message": "Request body must be valid JSON."}}


def test_update_merges_and_keeps_id(client, auth):
    body = {"name": "Gaming Laptop", "price": 1500, "category": "electronics", "id": "999"}
    r = client.put("/api/products/1", json=body, headers=auth)
    assert r.status_code == 200
    updated = r.json()
    assert updated["id"] == "1"
    assert updated["name"] == "Gaming Laptop"
    assert updated["description"] == "High-performance laptop with 16GB RAM"
    assert client.get("/api/products/1").json() == updated
    assert [p["id"] for p in store.list()] == ["1", "2", "3"]


def test_update_unknown_id(client, auth, new_product):
    r = client.put("/api/products/nope", json=new_product, headers=auth)
    assert r.status_code == 404


def test_update_requires_valid_body(client, auth):
    r = client.put("/api/products/1", json={"name": "Laptop"}, headers=auth)
    assert r.status_code == 400
    assert client.get("/api/products/1").json()["price"] == 1200


def test_update_requires_api_key(client, new_product):
    assert client.put("/api/products/1", json=new_product).status_code == 401


def test_delete_then_get_is_404(client, auth):
    r = client.delete("/api/products/2", headers=auth)
    assert r.status_code == 204
    assert r.content == b""
    assert client.get("/api/products/2").status_code == 404
    assert [p["id"] for p in store.list()] == ["1", "3"]


def test_delete_requires_api_key(client):
    assert client.delete("/api/products/2").status_code == 401
    assert len(store) == 3


def test_delete_unknown_id(client, auth):
    r = client.delete("/api/products/nope", headers=auth)
    assert r.status_code == 404
    assert r.json()["error"]["status"] == 404


def test_search(client):
    r = client.get("/api/products/search", params={"name": "lap"})
    assert r.status_code == 200
    assert [p["name"] for p in r.json()] == ["Laptop"]


def test_search_no_match_is_empty_list(client):
    assert client.get("/api/products/search", params={"name": "tractor"}).json() == []


def test_search_requires_term(client):
    for params in ({}, {"name": ""}):
        r = client.get("/api/products/search", params=params)
        assert r.status_code == 400
        assert r.json() == {"error": {"status": 400, "message": "Search term is required."}}


def test_stats(client):
    assert client.get("/api/products/stats").json() == {"electronics": 2, "kitchen": 1}


def test_stats_follow_mutations(client, auth, new_product):
    client.post("/api/products", json=new_product, headers=auth)
    client.delete("/api/products/3", headers=auth)
    assert client.get("/api/products/stats").json() == {"electronics": 2, "home": 1}


def test_unknown_route_uses_envelope(client):
    r = client.get("/api/nothing-here")
    assert r.status_code == 404
    assert set(r.json()["error"]) == {"status", "message"}


def test_method_not_allowed_uses_envelope(client):
    r = client.patch("/api/products/1")
    assert r.status_code == 405
    assert r.json()["error"]["status"] == 405


def test_out_of_range_price_rejected(client, auth):
    for raw in ('{"name":"Big","price":1e400,"category":"x"}', '{"name":"Big","price":NaN,"category":"x"}'):
        r = client.post("/api/products", content=raw, headers={**auth, "content-type": "application/json"})
        assert r.status_code == 400
        assert r.json()["error"]["message"] == "Product price is required and must be a positive number."
    assert len(store) == 3
    assert client.get("/api/products").status_code == 200


def test_update_out_of_range_price_rejected(client, auth):
    r = client.put(
        "/api/products/1",
        content='{"name":"Laptop","price":Infinity,"category":"electronics"}',
        headers={**auth, "content-type": "application/json"},
    )
    assert r.status_code == 400
    assert client.get("/api/products/1").json()["price"] == 1200


def test_non_json_content_type_fails_on_name(client, auth):
    r = client.post(
        "/api/products",
        content='{"name":"Kettle","price":20,"category":"kitchen"}',
        headers={**auth, "content-type": "text/plain"},
    )
    assert r.status_code == 400
    assert r.json()["error"]["message"] == "Product name is required and must be a non-empty string."
    assert len(store) == 3


def test_empty_body_fails_on_name(client, auth):
    r = client.post("/api/products", headers=auth)
    assert r.status_code == 400
    assert r.json()["error"]["message"] == "Product name is required and must be a non-empty string."


def test_negative_page_is_kept(client):
    body = client.get("/api/products", params={"page": -1}).json()
    assert body["page"] == -1
    assert body["limit"] == 10
    assert body["total"] == 3
    assert body["data"] == []
