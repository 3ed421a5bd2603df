from conftest import JOB_PAYLOAD, register


def test_recruiter_profile_roundtrip(client, recruiter):
    profile = client.get("/api/recruiter/profile", headers=recruiter).json()
    assert profile["company"] == "Acme Corp"
    assert profile["position"] == "Talent Lead"

    response = client.patch("/api/recruiter/profile", json={"position": "Head of Talent"}, headers=recruiter)

    assert response.status_code == 200
    assert response.json()["position"] == "Head of Talent"
    assert response.json()["company"] == "Acme Corp"


def test_analytics_counts_by_status(client, recruiter):
    first = client.post("/api/jobs", json=JOB_PAYLOAD, headers=recruiter).json()
    second = client.post("/api/jobs", json={**JOB_PAYLOAD, "title": "Designer"}, headers=recruiter).json()
    client.patch(f"/api/jobs/{second['id']}", json={"isActive": False}, headers=recruiter)

    alice = register(client, "alice")
    bob = register(client, "bobby")
    a1 = client.post("/api/applications", json={"jobId": first["id"]}, headers=alice).json()
    client.post("/api/applications", json={"jobId": first["id"]}, headers=bob)
    client.patch(f"/api/applications/{a1['id']}", json={"status": "rejected"}, headers=recruiter)

    analytics = client.get("/api/recruiter/analytics", headers=recruiter).json()

    assert analytics["totalJobs"] == 2
    assert analytics["activeJobs"] == 1
    assert analytics["totalApplications"] == 2
    assert analytics["applicationsByStatus"] == {
        "applied": 1,
        "under_review": 0,
        "interview_scheduled": 0,
        "rejected": 1,
        "accepted": 0,
    }
    per_job = {job["id"]: job for job in analytics["jobsWithApplications"]}
    assert per_job[first["id"]]["applications"] == 2
    assert per_job[first["id"]]["statusBreakdown"]["rejected"] == 1
    assert per_job[second["id"]]["applications"] == 0


def test_analytics_only_counts_own_jobs(client, job, other_recruiter):
    analytics = client.get("/api/recruiter/analytics", headers=other_recruiter).json()
    assert analytics["totalJobs"] == 0
    assert analytics["jobsWithApplications"] == []


def test_candidate_analysis_for_recruiter(client, recruiter, candidate):
    candidate_id = client.get("/api/user", headers=candidate).json()["id"]

    response = client.get(f"/api/recruiter/candidates/{candidate_id}/analysis", headers=recruiter)

    # Provider unavailable: placeholder analysis with zero score
    assert response.status_code == 200
    assert response.json()["overallScore"] == 0
    assert client.get("/api/recruiter/candidates/999/analysis", headers=recruiter).status_code == 404


def test_candidate_job_fit_requires_job_ownership(client, candidate, job, other_recruiter, recruiter):
    candidate_id = client.get("/api/user", headers=candidate).json()["id"]
    url = f"/api/recruiter/candidates/{candidate_id}/jobs/{job['id']}/fit"

    assert client.get(url, headers=other_recruiter).status_code == 403

    response = client.get(url, headers=recruiter)
    assert response.status_code == 200
    assert response.json()["score"] == 0
