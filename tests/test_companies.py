"""
Test suite for company endpoints.

Tests cover:
- Creation (admin only)
- Listing with filters
- Retrieval with jobs
- Partial update and deletion
"""

import pytest

COMPANIES = "/api/v1/companies/"


def handles(response):
    return [c["handle"] for c in response.json()]


class TestCompanyCreation:
    """Tests for company creation endpoint"""

    new_company = {
        "handle": "new",
        "name": "New",
        "logoUrl": "http://new.img",
        "description": "DescNew",
        "numEmployees": 10,
    }

    def test_create_as_admin(self, client, seed_data, admin_headers):
        response = client.post(COMPANIES, json=self.new_company, headers=admin_headers)

        assert response.status_code == 201
        assert response.json() == self.new_company

    def test_create_as_user_unauthorized(self, client, seed_data, u1_headers):
        response = client.post(COMPANIES, json=self.new_company, headers=u1_headers)
        assert response.status_code == 401

    def test_create_anon_unauthorized(self, client, seed_data):
        response = client.post(COMPANIES, json=self.new_company)
        assert response.status_code == 401

    def test_create_missing_fields(self, client, seed_data, admin_headers):
        response = client.post(COMPANIES, json={"handle": "new"}, headers=admin_headers)
        assert response.status_code == 422

    def test_create_duplicate(self, client, seed_data, admin_headers):
        response = client.post(
            COMPANIES,
            json={**self.new_company, "handle": "c1"},
            headers=admin_headers
        )
        assert response.status_code == 400
        assert "duplicate" in response.json()["detail"].lower()


class TestCompanyListing:
    """Tests for company listing and filters"""

    def test_list_anon(self, client, seed_data):
        response = client.get(COMPANIES)

        assert response.status_code == 200
        assert response.json()[0] == {
            "handle": "c1",
            "name": "C1",
            "description": "Desc1",
            "numEmployees": 1,
            "logoUrl": "http://c1.img",
        }
        assert handles(response) == ["c1", "c2", "c3"]

    @pytest.mark.parametrize("query, expected", [
        ("minEmployees=2", ["c2", "c3"]),
        ("maxEmployees=2", ["c1", "c2"]),
        ("nameLike=c3", ["c3"]),
        ("maxEmployees=3&minEmployees=2&nameLike=c", ["c2", "c3"]),
        ("nameLike=nope", []),
    ])
    def test_filters(self, client, seed_data, query, expected):
        response = client.get(f"{COMPANIES}?{query}")

        assert response.status_code == 200
        assert handles(response) == expected

    def test_min_greater_than_max(self, client, seed_data):
        response = client.get(f"{COMPANIES}?minEmployees=3&maxEmployees=1")
        assert response.status_code == 400

    def test_unsupported_filter(self, client, seed_data):
        response = client.get(f"{COMPANIES}?nope=nope")

        assert response.status_code == 400
        assert "nope" in response.json()["detail"]

    def test_invalid_filter_value(self, client, seed_data):
        response = client.get(f"{COMPANIES}?minEmployees=lots")
        assert response.status_code == 422


class TestCompanyRetrieval:
    """Tests for company detail endpoint"""

    def test_get_with_jobs(self, client, seed_data):
        response = client.get(f"{COMPANIES}c1")

        assert response.status_code == 200
        data = response.json()
        assert data["handle"] == "c1"
        assert [job["id"] for job in data["jobs"]] == seed_data
        assert [job["title"] for job in data["jobs"]] == ["J1", "J2", "J3"]
        assert float(data["jobs"][0]["equity"]) == 0.1
        assert data["jobs"][2]["equity"] is None

    def test_get_without_jobs(self, client, seed_data):
        response = client.get(f"{COMPANIES}c2")

        assert response.status_code == 200
        assert response.json()["jobs"] == []

    def test_get_not_found(self, client, seed_data):
        response = client.get(f"{COMPANIES}nope")
        assert response.status_code == 404


class TestCompanyUpdate:
    """Tests for company partial update"""

    def test_update_as_admin(self, client, seed_data, admin_headers):
        response = client.patch(
            f"{COMPANIES}c1",
            json={"name": "C1-new", "numEmployees": 50},
            headers=admin_headers
        )

        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "C1-new"
        assert data["numEmployees"] == 50
        assert data["description"] == "Desc1"

    def test_update_as_user_unauthorized(self, client, seed_data, u1_headers):
        response = client.patch(f"{COMPANIES}c1", json={"name": "C1-new"}, headers=u1_headers)
        assert response.status_code == 401

    def test_update_not_found(self, client, seed_data, admin_headers):
        response = client.patch(f"{COMPANIES}nope", json={"name": "new nope"}, headers=admin_headers)
        assert response.status_code == 404

    def test_update_handle_rejected(self, client, seed_data, admin_headers):
        response = client.patch(f"{COMPANIES}c1", json={"handle": "c1-new"}, headers=admin_headers)
        assert response.status_code == 422

    def test_update_no_data(self, client, seed_data, admin_headers):
        response = client.patch(f"{COMPANIES}c1", json={}, headers=admin_headers)

        assert response.status_code == 400
        assert response.json()["detail"] == "No data"

    def test_update_null_name_rejected(self, client, seed_data, admin_headers):
        response = client.patch(f"{COMPANIES}c1", json={"name": None}, headers=admin_headers)
        assert response.status_code == 422

    def test_update_invalid_logo_url(self, client, seed_data, admin_headers):
        response = client.patch(f"{COMPANIES}c1", json={"logoUrl": "not-a-url"}, headers=admin_headers)
        assert response.status_code == 422

        company = client.get(f"{COMPANIES}c1").json()
        assert company["logoUrl"] == "http://c1.img"

    def test_update_logo_url(self, client, seed_data, admin_headers):
        response = client.patch(
            f"{COMPANIES}c1",
            json={"logoUrl": "https://new.img"},
            headers=admin_headers
        )

        assert response.status_code == 200
        assert response.json()["logoUrl"] == "https://new.img"


class TestCompanyDeletion:
    """Tests for company deletion"""

    def test_delete_as_admin(self, client, seed_data, admin_headers):
        response = client.delete(f"{COMPANIES}c1", headers=admin_headers)
        assert response.status_code == 204

        assert client.get(f"{COMPANIES}c1").status_code == 404
        assert client.get(f"/api/v1/jobs/{seed_data[0]}").status_code == 404

    def test_delete_as_user_unauthorized(self, client, seed_data, u1_headers):
        response = client.delete(f"{COMPANIES}c1", headers=u1_headers)
        assert response.status_code == 401

    def test_delete_not_found(self, client, seed_data, admin_headers):
        response = client.delete(f"{COMPANIES}nope", headers=admin_headers)
        assert response.status_code == 404
