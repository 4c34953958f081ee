import re

import pytest
from sqlalchemy.exc import OperationalError

from tinylink.db import repository


def test_healthz(client):
    response = client.get("/healthz")
    assert response.status_code == 200
    assert response.json() == {
        "ok": True,
        "version": "1.0",
        "message": "TinyLink server is healthy and running.",
    }


def test_readyz(client):
    response = client.get("/readyz")
    assert response.status_code == 200
    assert response.json() == {"ready": True, "details": {"db": "ok"}}


def test_create_link_success(client):
    """Test successful URL shortening."""
    response = client.post("/api/links", json={"targetUrl": "https://example.com/test"})
    assert response.status_code == 201
    data = response.json()
    assert data["message"] == "Link created successfully."
    link = data["link"]
    assert set(link) == {"id", "shortCode", "targetUrl", "totalClicks", "createdAt", "lastClickedAt"}
    assert link["targetUrl"] == "https://example.com/test"
    assert re.fullmatch(r"[A-Za-z0-9]{6,8}", link["shortCode"])
    assert link["totalClicks"] == 0
    assert link["lastClickedAt"] is None


def test_create_link_with_custom_code(client):
    response = client.post(
        "/api/links",
        json={"targetUrl": "https://example.com/custom", "customCode": "mybrand"}
    )
    assert response.status_code == 201
    assert response.json()["link"]["shortCode"] == "mybrand"


def test_create_link_empty_custom_code_is_generated(client):
    """The dashboard always posts customCode; an empty one means 'pick for me'."""
    response = client.post(
        "/api/links",
        json={"targetUrl": "https://example.com/custom", "customCode": ""}
    )
    assert response.status_code == 201
    assert re.fullmatch(r"[A-Za-z0-9]{6,8}", response.json()["link"]["shortCode"])


def test_create_link_custom_code_collision(client):
    """Test that duplicate custom code returns 409 and leaves the first link alone."""
    first = client.post(
        "/api/links",
        json={"targetUrl": "https://example.com/first", "customCode": "taken01"}
    ).json()["link"]

    response = client.post(
        "/api/links",
        json={"targetUrl": "https://example.com/second", "customCode": "taken01"}
    )
    assert response.status_code == 409
    assert "already exists" in response.json()["error"].lower()

    stored = client.get("/api/links/taken01").json()
    assert stored["id"] == first["id"]
    assert stored["targetUrl"] == "https://example.com/first"


@pytest.mark.parametrize("code", ["invalid!", "short", "waytoolong1", "has space"])
def test_create_link_invalid_custom_code(client, code):
    response = client.post(
        "/api/links",
        json={"targetUrl": "https://example.com/test", "customCode": code}
    )
    assert response.status_code == 400
    assert "customCode" in response.json()["error"]
    assert client.get("/api/links").json() == []


@pytest.mark.parametrize(
    "url", ["not-a-url", "ftp://example.com", "http://", "https://exa mple.com", "https://a b.com"]
)
def test_create_link_invalid_url(client, url):
    response = client.post("/api/links", json={"targetUrl": url})
    assert response.status_code == 400, f"Should reject: {url}"
    assert "targetUrl" in response.json()["error"]
    assert client.get("/api/links").json() == []


def test_create_link_missing_url(client):
    response = client.post("/api/links", json={})
    assert response.status_code == 400


def test_create_link_malformed_body(client):
    response = client.post(
        "/api/links", content="not json", headers={"Content-Type": "application/json"}
    )
    assert response.status_code == 400
    assert "error" in response.json()


def test_create_link_generation_exhausted(client, monkeypatch):
    monkeypatch.setattr(repository, "short_code_exists", lambda db, code: True)
    response = client.post("/api/links", json={"targetUrl": "https://example.com"})
    assert response.status_code == 500
    assert "try again" in response.json()["error"].lower()


def test_list_links_empty(client):
    response = client.get("/api/links")
    assert response.status_code == 200
    assert response.json() == []


def test_list_links_newest_first(client, sample_urls):
    codes = []
    for url in sample_urls:
        codes.append(client.post("/api/links", json={"targetUrl": url}).json()["link"]["shortCode"])

    response = client.get("/api/links")
    assert response.status_code == 200
    data = response.json()
    assert [l["shortCode"] for l in data] == list(reversed(codes))
    assert [l["targetUrl"] for l in data] == list(reversed(sample_urls))

    for code in codes:
        assert client.delete(f"/api/links/{code}").status_code == 204
    assert client.get("/api/links").json() == []


def test_get_link(client):
    client.post("/api/links", json={"targetUrl": "https://example.com/stats", "customCode": "stats01"})

    response = client.get("/api/links/stats01")
    assert response.status_code == 200
    data = response.json()
    assert data["targetUrl"] == "https://example.com/stats"
    assert data["shortCode"] == "stats01"
    assert data["totalClicks"] == 0
    assert "createdAt" in data


def test_get_link_not_found(client):
    response = client.get("/api/links/nonexistent")
    assert response.status_code == 404
    assert response.json() == {"error": "Link not found."}


def test_delete_link(client):
    client.post("/api/links", json={"targetUrl": "https://example.com", "customCode": "delete1"})

    response = client.delete("/api/links/delete1")
    assert response.status_code == 204
    assert response.content == b""

    assert client.get("/delete1", follow_redirects=False).status_code == 404
    assert client.get("/api/links/delete1").status_code == 404
    response = client.delete("/api/links/delete1")
    assert response.status_code == 404
    assert response.json() == {"error": "Link not found or already deleted."}


def test_redirect_success(client):
    """Test successful redirect."""
    code = client.post(
        "/api/links",
        json={"targetUrl": "https://example.com/redirect-test"}
    ).json()["link"]["shortCode"]

    response = client.get(f"/{code}", follow_redirects=False)
    assert response.status_code == 302
    assert response.headers["location"] == "https://example.com/redirect-test"


def test_redirect_not_found(client):
    response = client.get("/nonexistent", follow_redirects=False)
    assert response.status_code == 404
    assert "does not exist" in response.json()["error"]


def test_redirect_increments_click_count(client):
    code = client.post(
        "/api/links",
        json={"targetUrl": "https://example.com/clicks"}
    ).json()["link"]["shortCode"]

    stats = client.get(f"/api/links/{code}").json()
    assert stats["totalClicks"] == 0
    assert stats["lastClickedAt"] is None

    for _ in range(3):
        client.get(f"/{code}", follow_redirects=False)

    stats = client.get(f"/api/links/{code}").json()
    assert stats["totalClicks"] == 3
    assert stats["lastClickedAt"] is not None


def test_redirect_does_not_shadow_health(client):
    """A code spelled like a fixed route is stored but the fixed route still wins."""
    response = client.post(
        "/api/links", json={"targetUrl": "https://example.com", "customCode": "healthz"}
    )
    assert response.status_code == 201
    assert client.get("/healthz").json()["ok"] is True


def test_end_to_end(client):
    response = client.post(
        "/api/links",
        json={"targetUrl": "https://example.com/docs", "customCode": "airocks7"}
    )
    assert response.status_code == 201
    assert response.json()["link"]["shortCode"] == "airocks7"

    response = client.get("/airocks7", follow_redirects=False)
    assert response.status_code == 302
    assert response.headers["location"] == "https://example.com/docs"
    assert client.get("/api/links/airocks7").json()["totalClicks"] == 1

    assert client.delete("/api/links/airocks7").status_code == 204
    assert client.get("/airocks7", follow_redirects=False).status_code == 404


def test_storage_failure_is_generic_500(client, monkeypatch):
    def broken(db):
        raise OperationalError("SELECT", {}, Exception("password=hunter2 connection lost"))

    monkeypatch.setattr(repository, "list_links", broken)
    response = client.get("/api/links")
    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error"}
    assert "hunter2" not in response.text
