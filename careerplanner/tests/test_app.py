import pytest
from fastapi.testclient import TestClient

from careerplanner.app import create_app

FULL = {
    "English": "5**", "Chinese": "5**", "Mathematics": "5**", "Liberal Studies": "5**",
    "Physics": "5**", "Chemistry": "5**",
}

@pytest.fixture
def client(settings):
    return TestClient(create_app(settings))

def test_subjects(client):
    body = client.get("/subjects").json()
    assert body["core"] == ["English", "Chinese", "Mathematics", "Liberal Studies"]
    assert "M1" in body["electives"]
    assert body["grades"][0] == "5**"

def test_compute_ranks_whole_catalog(client):
    n_programs = len(client.get("/programs").json())
    resp = client.post("/compute", json={"scores": FULL, "electives": ["Physics", "Chemistry"]})
    assert resp.status_code == 200
    matches = resp.json()
    assert len(matches) == n_programs
    flags = [m["qualified"] for m in matches]
    assert flags == sorted(flags, reverse=True)
    assert all(set(m) >= {"university", "code", "score", "qualified", "missing_requirements", "breakdown"}
               for m in matches)

def test_compute_top_unqualified(client, student_raw):
    resp = client.post("/compute", json={"scores": {**student_raw, "Physics": "U", "Chemistry": "U"},
                                         "top_unqualified": 2})
    matches = resp.json()
    assert len([m for m in matches if not m["qualified"]]) <= 2

def test_compute_incomplete(client):
    resp = client.post("/compute", json={"scores": {"English": "5"}, "electives": ["Physics", "Chemistry"]})
    assert resp.status_code == 422
    assert resp.json()["detail"].startswith("Missing required subject scores")

def test_compute_invalid_grade(client, student_raw):
    resp = client.post("/compute", json={"scores": {**student_raw, "Physics": "9"}})
    assert resp.status_code == 422

def test_onboarding_and_matches(client, student_raw):
    resp = client.post("/users", json={"email": "s@example.com", "user_type": "high_school",
                                       "dse_scores": student_raw})
    assert resp.status_code == 201
    user = resp.json()
    assert client.get(f"/users/{user['id']}").json()["dse_scores"] == student_raw
    matches = client.get(f"/users/{user['id']}/matches").json()
    assert len(matches) == len(client.get("/programs").json())

def test_matches_without_scores(client):
    user = client.post("/users", json={"email": "s@example.com", "user_type": "high_school"}).json()
    assert client.get(f"/users/{user['id']}/matches").status_code == 422

def test_onboarding_rejects_bad_input(client):
    assert client.post("/users", json={"email": "x", "user_type": "uni_postgrad"}).status_code == 422
    assert client.get("/users/user-missing").status_code == 404

def test_update_user(client):
    user = client.post("/users", json={"email": "u@example.com", "user_type": "uni_postgrad",
                                       "discipline": "Tech"}).json()
    resp = client.patch(f"/users/{user['id']}", json={"discipline": "Business"})
    assert resp.status_code == 200
    assert resp.json()["discipline"] == "Business"

def test_jobs_filters(client):
    assert len(client.get("/jobs").json()) == 6
    tech = client.get("/jobs", params={"user_type": "uni_postgrad", "discipline": "Tech"}).json()
    assert {j["discipline"] for j in tech} == {"Tech"}
    hs = client.get("/jobs", params={"user_type": "high_school"}).json()
    assert [j["id"] for j in hs] == [1, 2, 3]
    assert [j["id"] for j in client.get("/jobs", params={"q": "blockchain"}).json()] == [2]

def test_job_detail(client):
    job = client.get("/jobs/1").json()
    assert job["company_stats"]["response_rate"] == 0.72
    assert client.get("/jobs/6").json()["company_stats"] is None
    assert client.get("/jobs/99").status_code == 404
    assert len(client.get("/companies/stats").json()) == 5

def test_applications_flow(client):
    user = client.post("/users", json={"email": "u@example.com", "user_type": "uni_postgrad",
                                       "discipline": "Tech"}).json()
    first = client.post("/applications", json={"user_id": user["id"], "job_id": 2}).json()
    again = client.post("/applications", json={"user_id": user["id"], "job_id": 2}).json()
    assert first["id"] == again["id"]
    listed = client.get(f"/users/{user['id']}/applications").json()
    assert [a["job"]["id"] for a in listed] == [2]
    resp = client.patch(f"/applications/{first['id']}", json={"status": "Offer"})
    assert resp.json()["status"] == "Offer"
    assert client.patch("/applications/999", json={"status": "Offer"}).status_code == 404
    assert client.post("/applications", json={"user_id": user["id"], "job_id": 99}).status_code == 404

def test_chat_flow(client):
    user = client.post("/users", json={"email": "h@example.com", "user_type": "high_school"}).json()
    out = client.post("/chat", json={"user_id": user["id"], "query": "Which university should I study at?"}).json()
    assert out["saved"] is True
    assert out["limit_reached"] is False
    assert "universities" in out["response"]
    history = client.get(f"/users/{user['id']}/chat").json()
    assert [q["query"] for q in history] == ["Which university should I study at?"]
    assert client.post("/chat", json={"user_id": "user-nope", "query": "hi"}).status_code == 404

def test_rejected_patch_keeps_profile(client):
    user = client.post("/users", json={"email": "h@example.com", "user_type": "high_school"}).json()
    resp = client.patch(f"/users/{user['id']}", json={"discipline": "Business", "dse_scores": {"English": "5"}})
    assert resp.status_code == 422
    assert client.get(f"/users/{user['id']}").json()["discipline"] == "General"

def test_patch_to_uni_with_scores_rejected(client, student_raw):
    user = client.post("/users", json={"email": "h@example.com", "user_type": "high_school",
                                       "dse_scores": student_raw}).json()
    resp = client.patch(f"/users/{user['id']}", json={"user_type": "uni_postgrad"})
    assert resp.status_code == 422
    assert client.get(f"/users/{user['id']}").json()["user_type"] == "high_school"

def test_job_detail_has_applied(client):
    user = client.post("/users", json={"email": "u@example.com", "user_type": "uni_postgrad",
                                       "discipline": "Tech"}).json()
    assert "has_applied" not in client.get("/jobs/4").json()
    assert client.get("/jobs/4", params={"user_id": user["id"]}).json()["has_applied"] is False
    client.post("/applications", json={"user_id": user["id"], "job_id": 4})
    assert client.get("/jobs/4", params={"user_id": user["id"]}).json()["has_applied"] is True
