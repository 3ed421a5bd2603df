from conftest import JOB_PAYLOAD


def test_recruiter_creates_job_owned_by_caller(client, recruiter):
    me = client.get("/api/user", headers=recruiter).json()

    # A forged owner in the body is ignored
    response = client.post("/api/jobs", json={**JOB_PAYLOAD, "recruiterId": 9999}, headers=recruiter)

    assert response.status_code == 201
    body = response.json()
    assert body["recruiterId"] == me["id"]
    assert body["isActive"] is True
    assert body["jobType"] == "Full-time"
    assert body["skills"] == ["Python", "FastAPI"]


def test_candidate_cannot_create_job(client, candidate):
    response = client.post("/api/jobs", json=JOB_PAYLOAD, headers=candidate)
    assert response.status_code == 403


def test_create_job_missing_fields(client, recruiter):
    payload = {k: v for k, v in JOB_PAYLOAD.items() if k != "title"}
    response = client.post("/api/jobs", json=payload, headers=recruiter)

    assert response.status_code == 400
    assert any(error["loc"][-1] == "title" for error in response.json()["errors"])


def test_get_job(client, job):
    assert client.get(f"/api/jobs/{job['id']}").json()["title"] == "Backend Engineer"
    assert client.get("/api/jobs/12345").status_code == 404


def test_owner_updates_job(client, recruiter, job):
    response = client.patch(
        f"/api/jobs/{job['id']}",
        json={"title": "Staff Engineer", "salary": None},
        headers=recruiter,
    )

    assert response.status_code == 200
    assert response.json()["title"] == "Staff Engineer"
    assert response.json()["salary"] is None
    assert response.json()["company"] == "Acme Corp"


def test_non_owner_cannot_update_job(client, job, other_recruiter):
    response = client.patch(f"/api/jobs/{job['id']}", json={"title": "Hijacked"}, headers=other_recruiter)
    assert response.status_code == 403


def test_update_missing_job(client, recruiter):
    response = client.patch("/api/jobs/999", json={"title": "Ghost"}, headers=recruiter)
    assert response.status_code == 404


def test_deactivated_job_hidden_from_listing(client, recruiter, job):
    assert [j["id"] for j in client.get("/api/jobs").json()] == [job["id"]]

    response = client.patch(f"/api/jobs/{job['id']}", json={"isActive": False}, headers=recruiter)
    assert response.json()["isActive"] is False

    assert client.get("/api/jobs").json() == []
    # Still visible to its owner
    own_jobs = client.get("/api/recruiter/jobs", headers=recruiter).json()
    assert [j["id"] for j in own_jobs] == [job["id"]]


def test_list_jobs_newest_first_with_paging(client, recruiter):
    ids = []
    for title in ("First", "Second", "Third"):
        response = client.post("/api/jobs", json={**JOB_PAYLOAD, "title": title}, headers=recruiter)
        ids.append(response.json()["id"])

    listed = [j["id"] for j in client.get("/api/jobs").json()]
    assert listed == list(reversed(ids))

    page = client.get("/api/jobs", params={"limit": 1, "offset": 1}).json()
    assert [j["id"] for j in page] == [ids[1]]


def test_job_applications_require_ownership(client, job, other_recruiter):
    response = client.get(f"/api/jobs/{job['id']}/applications", headers=other_recruiter)
    assert response.status_code == 403
