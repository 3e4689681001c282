from fastapi.testclient import TestClient

from storefront.main import app

client = TestClient(app)


def test_root():
    res = client.get("/")
    assert res.status_code == 200
    assert "API is running" in res.text


def test_list_products():
    res = client.get("/api/products")
    assert res.status_code == 200
    body = res.json()
    assert isinstance(body["items"], list)
    slugs = [it["slug"] for it in body["items"]]
    assert "smart-fitness-watch" in slugs
    assert body["total"] >= 3


def test_search_and_category_filter():
    res = client.get("/api/products", params={"q": "watch"})
    assert [it["slug"] for it in res.json()["items"]] == ["smart-fitness-watch"]

    res = client.get("/api/products", params={"category": "home-kitchen"})
    assert [it["slug"] for it in res.json()["items"]] == ["stainless-steel-water-bottle"]


def test_get_product():
    listed = client.get("/api/products").json()["items"][0]
    res = client.get(f"/api/products/{listed['id']}")
    assert res.status_code == 200
    assert res.json()["name"] == listed["name"]

    assert client.get("/api/products/999999").status_code == 404


def test_list_categories():
    res = client.get("/api/categories")
    assert res.status_code == 200
    assert {"electronics", "home-kitchen"} <= {c["slug"] for c in res.json()}
