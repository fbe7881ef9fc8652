"""
TimeTracker Backend - Client & Project API Tests
================================================

What we test:
    ✅ Client CRUD round trip
    ✅ Project create resolves its client (404 and nothing stored otherwise)
    ✅ Project update reassigns the client
    ✅ clientId outside 1..2^63-1 is a validation error
    ✅ Deprecated /api/v1 prefix serves clients and projects
"""

import pytest


async def total_count(client, path, headers):
    response = await client.get(path, headers=headers)
    assert response.status_code == 200
    return response.json()["totalCount"]


class TestClients:
    @pytest.mark.asyncio
    async def test_create_get_rename(self, test_client, admin_headers, reader_headers):
        response = await test_client.post("/api/clients", json={"name": "Acme"}, headers=admin_headers)
        assert response.status_code == 201
        client_id = response.json()["id"]

        response = await test_client.get(f"/api/clients/{client_id}", headers=reader_headers)
        assert response.json() == {"id": client_id, "name": "Acme"}

        response = await test_client.put(
            f"/api/clients/{client_id}", json={"name": "Acme Corp"}, headers=admin_headers
        )
        assert response.status_code == 200
        assert response.json()["name"] == "Acme Corp"

    @pytest.mark.asyncio
    async def test_seeded_page(self, test_client, seeded, reader_headers):
        body = (await test_client.get("/api/clients", headers=reader_headers)).json()
        assert [c["name"] for c in body["items"]] == ["Client 1", "Client 2"]
        assert body["totalPages"] == 1

    @pytest.mark.asyncio
    async def test_non_admin_delete_leaves_client(self, test_client, seeded, reader_headers):
        response = await test_client.delete("/api/clients/1", headers=reader_headers)
        assert response.status_code == 403

        response = await test_client.get("/api/clients/1", headers=reader_headers)
        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_get_unknown_client(self, test_client, reader_headers):
        response = await test_client.get("/api/clients/404", headers=reader_headers)
        assert response.status_code == 404


class TestProjects:
    @pytest.mark.asyncio
    async def test_create_for_existing_client(self, test_client, seeded, admin_headers):
        response = await test_client.post(
            "/api/projects", json={"name": "Apollo", "clientId": 2}, headers=admin_headers
        )

        assert response.status_code == 201
        body = response.json()
        assert body["name"] == "Apollo"
        assert body["clientId"] == 2
        assert body["clientName"] == "Client 2"
        assert response.headers["location"].endswith(f"/api/projects/{body['id']}")

    @pytest.mark.asyncio
    async def test_create_for_unknown_client_stores_nothing(
        self, test_client, seeded, admin_headers, reader_headers
    ):
        before = await total_count(test_client, "/api/projects", reader_headers)

        response = await test_client.post(
            "/api/projects", json={"name": "Orphan", "clientId": 99}, headers=admin_headers
        )

        assert response.status_code == 404
        assert await total_count(test_client, "/api/projects", reader_headers) == before

    @pytest.mark.asyncio
    @pytest.mark.parametrize("client_id", [0, -1, 2**63, 10**20])
    async def test_out_of_range_client_id_is_invalid(self, test_client, admin_headers, client_id):
        response = await test_client.post(
            "/api/projects", json={"name": "Apollo", "clientId": client_id}, headers=admin_headers
        )
        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "clientId"

    @pytest.mark.asyncio
    async def test_update_reassigns_client(self, test_client, seeded, admin_headers, reader_headers):
        response = await test_client.put(
            "/api/projects/1", json={"name": "Project One", "clientId": 2}, headers=admin_headers
        )
        assert response.status_code == 200

        body = (await test_client.get("/api/projects/1", headers=reader_headers)).json()
        assert body == {"id": 1, "name": "Project One", "clientId": 2, "clientName": "Client 2"}

    @pytest.mark.asyncio
    async def test_update_with_unknown_client(self, test_client, seeded, admin_headers, reader_headers):
        response = await test_client.put(
            "/api/projects/1", json={"name": "Project One", "clientId": 99}, headers=admin_headers
        )
        assert response.status_code == 404

        body = (await test_client.get("/api/projects/1", headers=reader_headers)).json()
        assert body["name"] == "Project 1"
        assert body["clientId"] == 1

    @pytest.mark.asyncio
    async def test_delete(self, test_client, admin_headers, reader_headers):
        client = (await test_client.post("/api/clients", json={"name": "Acme"}, headers=admin_headers)).json()
        project = (
            await test_client.post(
                "/api/projects", json={"name": "Apollo", "clientId": client["id"]}, headers=admin_headers
            )
        ).json()

        response = await test_client.delete(f"/api/projects/{project['id']}", headers=admin_headers)
        assert response.status_code == 200

        response = await test_client.get(f"/api/projects/{project['id']}", headers=reader_headers)
        assert response.status_code == 404


class TestVersionedPrefix:
    @pytest.mark.asyncio
    async def test_v1_serves_the_same_clients(self, test_client, admin_headers, reader_headers):
        client = (await test_client.post("/api/clients", json={"name": "Acme"}, headers=admin_headers)).json()

        response = await test_client.get(f"/api/v1/clients/{client['id']}", headers=reader_headers)

        assert response.status_code == 200
        assert response.json() == client

    @pytest.mark.asyncio
    async def test_v1_location_header(self, test_client, seeded, admin_headers):
        response = await test_client.post(
            "/api/v1/projects", json={"name": "Apollo", "clientId": 1}, headers=admin_headers
        )
        assert response.status_code == 201
        assert response.headers["location"].endswith(f"/api/v1/projects/{response.json()['id']}")

    @pytest.mark.asyncio
    async def test_v1_monthly_timesheet(self, test_client, seeded, reader_headers):
        response = await test_client.get("/api/v1/time-entries/user/2/2019/7", headers=reader_headers)
        assert [e["id"] for e in response.json()] == [4]
