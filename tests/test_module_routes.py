from fastapi.testclient import TestClient

from learnhub.api.app import create_app
from learnhub.config.settings import Settings
from learnhub.repositories.module_repository import ModuleRepository

BASE = "/api/v1/modules"


def test_health(client: TestClient) -> None:
    response = client.get("/")
    assert response.status_code == 200
    assert "message" in response.json()


def test_list_defaults(client: TestClient) -> None:
    response = client.get(BASE)
    assert response.status_code == 200
    body = response.json()
    assert body["total"] == 12
    assert len(body["modules"]) == 10
    assert set(body["modules"][0]) == {"id", "title", "category", "completed"}


def test_list_filtered_and_paginated(client: TestClient) -> None:
    response = client.get(BASE, params={"category": "Sustainability", "page": 2, "pageSize": 3})
    body = response.json()
    assert response.status_code == 200
    assert body["total"] == 4
    assert [m["category"] for m in body["modules"]] == ["Sustainability"]


def test_page_beyond_results(client: TestClient) -> None:
    body = client.get(BASE, params={"page": 10}).json()
    assert body == {"total": 12, "modules": []}


def test_invalid_category_is_400(client: TestClient) -> None:
    response = client.get(BASE, params={"category": "Cooking"})
    assert response.status_code == 400
    assert "Cooking" in response.json()["detail"]


def test_invalid_pagination_rejected_by_default(client: TestClient) -> None:
    assert client.get(BASE, params={"page": 0}).status_code == 400
    assert client.get(BASE, params={"page": "abc"}).status_code == 400
    assert client.get(BASE, params={"pageSize": 51}).status_code == 400
    assert client.get(BASE, params={"pageSize": -1}).status_code == 400


def test_invalid_pagination_coerced_when_configured() -> None:
    settings = Settings(default_page_size=5, max_page_size=8, pagination_policy="coerce")
    client = TestClient(create_app(repo=ModuleRepository(), settings=settings))

    body = client.get(BASE, params={"page": "0", "pageSize": "abc"}).json()
    assert body["total"] == 12
    assert len(body["modules"]) == 5

    body = client.get(BASE, params={"pageSize": 100}).json()
    assert len(body["modules"]) == 8

    # la categoría inválida sigue siendo 400 con cualquier política
    assert client.get(BASE, params={"category": "Cooking"}).status_code == 400


def test_categories_in_priority_order(client: TestClient) -> None:
    body = client.get(f"{BASE}/categories").json()
    assert [c["value"] for c in body] == ["AI", "DigitalSkills", "Sustainability"]
    assert body[1]["label"] == "Digital Skills"


def test_update_then_fetch_reflects_it(client: TestClient) -> None:
    response = client.patch(f"{BASE}/m-ai-101", json={"completed": True})
    assert response.status_code == 200
    assert response.json()["completed"] is True

    assert client.get(f"{BASE}/m-ai-101").json()["completed"] is True

    response = client.patch(f"{BASE}/m-ai-101", json={"completed": False})
    assert response.json()["completed"] is False


def test_update_unknown_id_is_404(client: TestClient) -> None:
    response = client.patch(f"{BASE}/nonexistent", json={"completed": True})
    assert response.status_code == 404
    assert client.get(f"{BASE}/nonexistent").status_code == 404


def test_update_only_accepts_completed(client: TestClient) -> None:
    assert client.patch(f"{BASE}/m-ai-101", json={"title": "Hacked"}).status_code == 422
    assert client.patch(f"{BASE}/m-ai-101", json={"completed": True, "title": "x"}).status_code == 422
    assert client.patch(f"{BASE}/m-ai-101", json={"completed": "yes"}).status_code == 422
    assert client.get(f"{BASE}/m-ai-101").json()["title"] == "Introduction to Machine Learning"


def test_apps_do_not_share_store(settings: Settings) -> None:
    first = TestClient(create_app(repo=ModuleRepository(), settings=settings))
    second = TestClient(create_app(repo=ModuleRepository(), settings=settings))

    first.patch(f"{BASE}/m-su-101", json={"completed": True})
    assert second.get(f"{BASE}/m-su-101").json()["completed"] is False
