from tests.factories import (
    FailingProductsService,
    StubProductsService,
    make_product,
    make_row,
)


def test_create_product_returns_created(client):
    r = client.post("/api/products/create", json=make_product())
    assert r.status_code == 201
    assert r.text == "product created"


def test_create_product_twice_is_bad_request(client):
    client.post("/api/products/create", json=make_product())
    r = client.post("/api/products/create", json=make_product(name="other"))
    assert r.status_code == 400
    assert r.text == "could not save product"


def test_create_product_service_failure(use_service):
    client = use_service(FailingProductsService())
    r = client.post("/api/products/create", json=make_product())
    assert r.status_code == 400
    assert r.text == "could not save product"


def test_update_unknown_product_echoes_payload(client):
    payload = make_product(name="renamed")
    r = client.put("/api/products/update", params={"id": "missing"}, json=payload)
    assert r.status_code == 404
    assert r.json() == payload


def test_update_existing_product_echoes_request_body(client):
    client.post("/api/products/create", json=make_product())

    payload = make_product(name="renamed", price="450", purchased=True)
    r = client.put("/api/products/update", params={"id": "2222"}, json=payload)
    assert r.status_code == 200
    assert r.json() == payload

    listed = client.get("/api/products").json()
    assert listed == [payload]


def test_update_keeps_stored_id(client):
    client.post("/api/products/create", json=make_product())

    payload = make_product(id="9999", name="renamed")
    r = client.put("/api/products/update", params={"id": "2222"}, json=payload)
    # response is the submitted body, not the stored row
    assert r.status_code == 200
    assert r.json()["id"] == "9999"

    listed = client.get("/api/products").json()
    assert [p["id"] for p in listed] == ["2222"]
    assert listed[0]["name"] == "renamed"


def test_update_service_failure_returns_empty_product(use_service):
    client = use_service(FailingProductsService())
    r = client.put("/api/products/update", params={"id": "2222"}, json=make_product())
    assert r.status_code == 400
    assert r.json() == {"id": "", "name": "", "price": "", "purchased": False}


def test_update_requires_id_query_param(client):
    r = client.put("/api/products/update", json=make_product())
    assert r.status_code == 400
    assert r.json()["success"] is False


def test_create_unreadable_body_is_bad_request(client):
    r = client.post(
        "/api/products/create",
        content="not json",
        headers={"content-type": "application/json"},
    )
    assert r.status_code == 400


def test_create_product_with_numeric_price(client):
    r = client.post("/api/products/create", json=make_product(price=300))
    assert r.status_code == 201

    listed = client.get("/api/products").json()
    assert listed[0]["price"] == "300"


def test_list_products_empty(client):
    r = client.get("/api/products")
    assert r.status_code == 404
    assert r.json() == []


def test_list_products_returns_all(client):
    client.post("/api/products/create", json=make_product(id="1", name="first"))
    client.post("/api/products/create", json=make_product(id="2", name="second"))

    r = client.get("/api/products")
    assert r.status_code == 200
    assert {p["id"] for p in r.json()} == {"1", "2"}


def test_list_products_keeps_service_order(use_service):
    rows = [make_row(id="b", name="second"), make_row(id="a", name="first")]
    client = use_service(StubProductsService(rows))

    r = client.get("/api/products")
    assert r.status_code == 200
    assert [p["id"] for p in r.json()] == ["b", "a"]
    assert r.json()[0] == {"id": "b", "name": "second", "price": "300", "purchased": False}


def test_list_products_service_returns_none(use_service):
    client = use_service(StubProductsService(None))
    r = client.get("/api/products")
    assert r.status_code == 404
    assert r.json() == []
