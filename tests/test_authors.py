"""Author catalogue endpoint tests."""
import pytest

from library_api.core.constants import UserRole


@pytest.fixture
def admin_headers(make_user, auth_headers):
    return auth_headers(make_user(role=UserRole.ADMIN))


@pytest.fixture
def reader_headers(make_user, auth_headers):
    return auth_headers(make_user())


async def _create(async_client, headers, **fields):
    body = {"name": "Ursula K. Le Guin", "nationality": "American", "birthDate": "1929-10-21"}
    body.update(fields)
    return await async_client.post("/api/authors", json=body, headers=headers)


async def test_create_and_get_author(async_client, admin_headers, reader_headers):
    r = await _create(async_client, admin_headers, bio="Wrote Earthsea.")

    assert r.status_code == 201
    author = r.json()["data"]
    assert author["name"] == "Ursula K. Le Guin"
    assert author["birthDate"] == "1929-10-21"
    assert author["isActive"] is True

    r = await async_client.get(f"/api/authors/{author['id']}", headers=reader_headers)
    assert r.status_code == 200
    assert r.json()["data"]["bio"] == "Wrote Earthsea."


async def test_readers_cannot_write(async_client, reader_headers):
    r = await _create(async_client, reader_headers)

    assert r.status_code == 401
    assert r.json()["detail"] == "Insufficient permissions"


async def test_reads_require_authentication(async_client):
    r = await async_client.get("/api/authors")

    assert r.status_code == 401


async def test_duplicate_name_rejected(async_client, admin_headers):
    await _create(async_client, admin_headers)

    r = await _create(async_client, admin_headers)

    assert r.status_code == 400
    assert r.json()["detail"] == "Author with this name already exists"


async def test_list_search_and_filter(async_client, admin_headers, reader_headers):
    await _create(async_client, admin_headers)
    await _create(async_client, admin_headers, name="Octavia E. Butler")
    r = await _create(async_client, admin_headers, name="Stanislaw Lem", nationality="Polish")
    lem_id = r.json()["data"]["id"]
    await async_client.patch(f"/api/authors/{lem_id}/deactivate", headers=admin_headers)

    r = await async_client.get("/api/authors?search=butler", headers=reader_headers)
    assert [a["name"] for a in r.json()["data"]["authors"]] == ["Octavia E. Butler"]

    r = await async_client.get("/api/authors?isActive=false", headers=reader_headers)
    assert [a["id"] for a in r.json()["data"]["authors"]] == [lem_id]

    r = await async_client.get("/api/authors?limit=2", headers=reader_headers)
    data = r.json()["data"]
    assert len(data["authors"]) == 2
    assert data["pagination"] == {"page": 1, "limit": 2, "total": 3, "totalPages": 2}


async def test_update_author(async_client, admin_headers):
    r = await _create(async_client, admin_headers)
    author_id = r.json()["data"]["id"]
    await _create(async_client, admin_headers, name="Octavia E. Butler")

    r = await async_client.put(
        f"/api/authors/{author_id}", json={"bio": "Updated bio"}, headers=admin_headers
    )
    assert r.status_code == 200
    assert r.json()["data"]["bio"] == "Updated bio"
    assert r.json()["data"]["name"] == "Ursula K. Le Guin"

    r = await async_client.put(
        f"/api/authors/{author_id}", json={"name": "Octavia E. Butler"}, headers=admin_headers
    )
    assert r.status_code == 400


async def test_activate_and_deactivate(async_client, admin_headers):
    r = await _create(async_client, admin_headers)
    author_id = r.json()["data"]["id"]

    r = await async_client.patch(f"/api/authors/{author_id}/activate", headers=admin_headers)
    assert r.status_code == 400
    assert r.json()["detail"] == "Author is already active"

    r = await async_client.patch(f"/api/authors/{author_id}/deactivate", headers=admin_headers)
    assert r.status_code == 200
    assert r.json()["data"]["isActive"] is False

    r = await async_client.patch(f"/api/authors/{author_id}/deactivate", headers=admin_headers)
    assert r.status_code == 400
    assert r.json()["detail"] == "Author is already inactive"


async def test_delete_author(async_client, admin_headers):
    r = await _create(async_client, admin_headers)
    author_id = r.json()["data"]["id"]

    r = await async_client.delete(f"/api/authors/{author_id}", headers=admin_headers)
    assert r.status_code == 200

    r = await async_client.get(f"/api/authors/{author_id}", headers=admin_headers)
    assert r.status_code == 404
    assert r.json()["detail"] == "Author not found"
