import pytest
from fastapi.testclient import TestClient

from policy_checker.config.settings import Settings
from policy_checker.ui.api import create_app

SCHENGEN_POLICY = (
    "Covers emergency medical treatment and repatriation in all Schengen states "
    "up to EUR 30,000 per trip."
)


@pytest.fixture
def client(tmp_path):
    settings = Settings(quota_path=tmp_path / "quota.json", free_checks=2)
    return TestClient(create_app(settings=settings))


def test_health(client):
    assert client.get("/").json() == {"status": "ok"}


def test_list_programs(client):
    response = client.get("/programs")
    assert response.status_code == 200
    labels = {item["id"]: item["label"] for item in response.json()}
    assert labels["us-j1"] == "J-1 Exchange Visitor Insurance (United States)"


def test_get_program(client):
    response = client.get("/programs/schengen-visa")
    assert response.status_code == 200
    body = response.json()
    assert body["requirements"]["min_medical_limit"]["display"] == "EUR 30,000"
    assert len(body["requirements"]["required_phrases"]) == 3

    assert client.get("/programs/atlantis").status_code == 404


def test_check_returns_verdict_and_display(client):
    response = client.post("/check", json={"program_id": "schengen-visa", "text": SCHENGEN_POLICY})
    assert response.status_code == 201
    body = response.json()
    assert body["verdict"]["overall_pass"] is True
    assert [r["found"] for r in body["verdict"]["required_phrase_results"]] == [True, True, True]
    assert body["display"]["sections"][0]["items"][0]["icon"] == "✓"
    assert body["quota"] == {"remaining": 1, "show_paywall": False}
    assert client.get("/quota").json() == {"remaining": 1, "limit": 2}


def test_check_rejections(client):
    assert client.post("/check", json={"text": SCHENGEN_POLICY}).status_code == 400
    assert client.post("/check", json={"program_id": "schengen-visa", "text": "  "}).status_code == 400

    for _ in range(2):
        client.post("/check", json={"program_id": "schengen-visa", "text": SCHENGEN_POLICY})
    response = client.post("/check", json={"program_id": "schengen-visa", "text": SCHENGEN_POLICY})
    assert response.status_code == 402
    assert "No free checks" in response.json()["detail"]


def test_export_report(client):
    response = client.post("/export", json={"program_id": "schengen-visa", "text": SCHENGEN_POLICY})
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")
    assert "Schengen Visa Travel Insurance" in response.text
