"""
Test suite for job endpoints.

Tests cover:
- Job creation and validation
- Listing with filters
- Retrieval, update and deletion by id
"""

import pytest

URL = "/api/v1/jobs/"


@pytest.fixture
def sample_job_data():
    """Sample job payload for testing"""
    return {"title": "new", "salary": 10000, "equity": 0.1, "companyHandle": "c1"}


class TestJobCreation:
    """Tests for job creation endpoint"""

    def test_create_job_success(self, client, seeded, sample_job_data):
        response = client.post(URL, json=sample_job_data)

        assert response.status_code == 201
        job = response.json()["job"]
        assert isinstance(job["id"], int)
        assert job["title"] == "new"
        assert job["salary"] == 10000
        assert job["equity"] == pytest.approx(0.1)
        assert job["companyHandle"] == "c1"

    def test_create_for_unknown_company(self, client, seeded, sample_job_data):
        response = client.post(URL, json={**sample_job_data, "companyHandle": "nope"})

        assert response.status_code == 400
        assert response.json()["kind"] == "InvalidInput"

    def test_create_duplicate(self, client, seeded):
        response = client.post(URL, json={"title": "J1", "companyHandle": "c1"})

        assert response.status_code == 400
        assert response.json()["kind"] == "DuplicateEntity"

    def test_equity_above_one(self, client, seeded, sample_job_data):
        response = client.post(URL, json={**sample_job_data, "equity": 1.5})
        assert response.status_code == 422

    def test_oversized_salary(self, client, seeded, sample_job_data):
        response = client.post(URL, json={**sample_job_data, "salary": 2**31})
        assert response.status_code == 422

    def test_missing_company(self, client, seeded):
        response = client.post(URL, json={"title": "new"})
        assert response.status_code == 422


class TestJobList:
    """Tests for the job list endpoint"""

    def test_list_all(self, client, seeded):
        response = client.get(URL)

        assert response.status_code == 200
        assert [j["title"] for j in response.json()["jobs"]] == ["J1", "J2", "J3"]

    def test_filter_by_title(self, client, seeded):
        response = client.get(URL, params={"title": "3"})
        assert [j["title"] for j in response.json()["jobs"]] == ["J3"]

    def test_filter_by_min_salary(self, client, seeded):
        response = client.get(URL, params={"minSalary": 150})

        assert response.status_code == 200
        assert all(j["salary"] >= 150 for j in response.json()["jobs"])
        assert len(response.json()["jobs"]) == 2

    def test_filter_by_has_equity(self, client, seeded):
        response = client.get(URL, params={"hasEquity": "true"})

        assert response.status_code == 200
        jobs = response.json()["jobs"]
        assert [j["title"] for j in jobs] == ["J1", "J2"]
        assert all(j["equity"] > 0 for j in jobs)

    def test_invalid_filter_option(self, client, seeded):
        response = client.get(URL, params={"foo": "bar"})

        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid filter option"


class TestJobRetrieval:

    def test_get_job(self, client, seeded):
        response = client.get(f"{URL}{seeded['J3']}")

        assert response.status_code == 200
        assert response.json() == {
            "job": {"id": seeded["J3"], "title": "J3", "salary": 300, "equity": 0, "companyHandle": "c2"}
        }

    def test_get_nonexistent_job(self, client, seeded):
        response = client.get(f"{URL}99999")

        assert response.status_code == 404
        assert response.json()["detail"] == "No job: 99999"

    def test_get_oversized_id(self, client, seeded):
        response = client.get(f"{URL}99999999999999999999")
        assert response.status_code == 422


class TestJobUpdate:

    def test_update(self, client, seeded):
        response = client.patch(f"{URL}{seeded['J1']}", json={"title": "J1-new", "salary": 150})

        assert response.status_code == 200
        job = response.json()["job"]
        assert job["title"] == "J1-new"
        assert job["salary"] == 150
        assert job["companyHandle"] == "c1"

    def test_cannot_change_company(self, client, seeded):
        response = client.patch(f"{URL}{seeded['J1']}", json={"companyHandle": "c2"})
        assert response.status_code == 422

    def test_update_nonexistent(self, client, seeded):
        response = client.patch(f"{URL}99999", json={"title": "X"})
        assert response.status_code == 404

    def test_update_to_taken_title(self, client, seeded):
        response = client.patch(f"{URL}{seeded['J2']}", json={"title": "J1"})

        assert response.status_code == 400
        assert response.json() == {"detail": "Duplicate job: J1", "kind": "DuplicateEntity"}
        assert client.get(f"{URL}{seeded['J2']}").json()["job"]["title"] == "J2"

    def test_update_salary_over_limit(self, client, seeded):
        response = client.patch(f"{URL}{seeded['J1']}", json={"salary": 99999999999999999999})
        assert response.status_code == 422

    def test_update_empty_body(self, client, seeded):
        response = client.patch(f"{URL}{seeded['J1']}", json={})
        assert response.status_code == 400


class TestJobDeletion:
    """Tests for job deletion"""

    def test_delete_job(self, client, seeded):
        job_id = seeded["J1"]

        response = client.delete(f"{URL}{job_id}")
        assert response.status_code == 200
        assert response.json() == {"deleted": job_id}

        get_response = client.get(f"{URL}{job_id}")
        assert get_response.status_code == 404

    def test_delete_nonexistent_job(self, client, seeded):
        response = client.delete(f"{URL}99999")
        assert response.status_code == 404
