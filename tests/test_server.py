"""REST API tests — drive the FastAPI app through ``TestClient``.

The client is used as a context manager so the lifespan handler runs and
loads the rulesets from v1/.
"""

import base64
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from smartflow_rules.interfaces import TranscriptionBackend
from smartflow_rules.models.extraction import TranscriptionResult
from smartflow_rules.pipeline import SmartFlowPipeline
from smartflow_rules.transcription import TranscriptionError
from smartflow_server.app import create_app
from smartflow_server.config import ServerSettings, load_settings


class _StubBackend(TranscriptionBackend):

    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error

    async def transcribe(self, audio, filename):
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture
def app():
    return create_app(ServerSettings())


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


def _use_backend(app, backend):
    app.state.pipeline = SmartFlowPipeline(app.state.store, backend=backend)


# =====================================================================
# Health
# =====================================================================


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


# =====================================================================
# Flow
# =====================================================================


class TestFlow:

    def test_decision_quick(self, client):
        resp = client.post("/api/v1/flow/decision", json={"age": 30, "symptoms": ["tos"]})
        assert resp.status_code == 200
        body = resp.json()
        assert body["route"] == "quick"
        assert body["estimated_time"] == 8
        assert body["required_steps"][0] == "identification"

    def test_decision_camel_case(self, client):
        last_visit = (datetime.now(timezone.utc) - timedelta(days=3)).isoformat()
        resp = client.post(
            "/api/v1/flow/decision",
            json={"age": 50, "hasHistory": True, "lastVisit": last_visit},
        )
        assert resp.json()["route"] == "evolution"

    def test_decision_emergency(self, client):
        resp = client.post("/api/v1/flow/decision", json={"age": 50, "isEmergency": True})
        assert resp.json()["route"] == "emergency"
        assert resp.json()["priority"] == "high"

    def test_negative_age_is_rejected(self, client):
        resp = client.post("/api/v1/flow/decision", json={"age": -3})
        assert resp.status_code == 422

    def test_unknown_severity_is_rejected(self, client):
        resp = client.post("/api/v1/flow/decision", json={"age": 3, "severity": "critica"})
        assert resp.status_code == 422

    def test_navigation(self, client):
        resp = client.post(
            "/api/v1/flow/navigation",
            json={"context": {"age": 30}, "current_step": "identification"},
        )
        assert resp.status_code == 200
        body = resp.json()
        assert body["next_step"] == "basic_symptoms"
        assert body["should_skip"] is False
        assert body["estimated_time_remaining"] == 5
        assert body["decision"]["route"] == "quick"

    def test_navigation_last_step(self, client):
        resp = client.post(
            "/api/v1/flow/navigation",
            json={"context": {"age": 30}, "current_step": "quick_assessment"},
        )
        assert resp.json()["next_step"] is None
        assert resp.json()["estimated_time_remaining"] == 0


# =====================================================================
# Extraction and actions
# =====================================================================


class TestExtraction:

    def test_extraction(self, client):
        resp = client.post(
            "/api/v1/extraction",
            json={"transcript": "Tengo dolor de cabeza desde hace 3 días y tomo paracetamol"},
        )
        assert resp.status_code == 200
        body = resp.json()
        assert "dolor de cabeza" in body["symptoms"]
        assert body["duration"] == "3 días"
        assert body["medications"] == ["paracetamol"]
        assert body["painLocation"] == "cabeza"
        assert "pain_location" not in body

    def test_extraction_empty(self, client):
        body = client.post("/api/v1/extraction", json={}).json()
        assert body["symptoms"] == []
        assert body["severity"] is None

    def test_actions(self, client):
        resp = client.post(
            "/api/v1/actions",
            json={
                "context": {"age": 70},
                "transcript": "mareo y dolor",
                "analysis": "Presión 160/95 mmHg",
            },
        )
        assert resp.status_code == 200
        body = resp.json()
        targets = [a["target"] for a in body["actions"]]
        assert targets == [
            "symptoms", "geriatric_assessment", "pain_assessment", "blood_pressure",
        ]
        assert body["actions"][-1]["data"] == {"value": "160/95", "is_normal": False}
        assert body["decision"]["route"] == "quick"


# =====================================================================
# Recordings
# =====================================================================


class TestRecordings:

    def _payload(self):
        return {
            "context": {"age": 40},
            "audio": base64.b64encode(b"fake-audio").decode(),
            "filename": "nota.webm",
        }

    def test_without_backend_is_503(self, client):
        resp = client.post("/api/v1/recordings", json=self._payload())
        assert resp.status_code == 503

    def test_with_backend(self, app, client):
        _use_backend(
            app,
            _StubBackend(TranscriptionResult(transcription="tos y fiebre", analysis="")),
        )
        resp = client.post("/api/v1/recordings", json=self._payload())
        assert resp.status_code == 200
        assert resp.json()["extracted"]["symptoms"] == ["fiebre", "tos"]

    def test_backend_failure_is_502(self, app, client):
        _use_backend(app, _StubBackend(error=TranscriptionError("down")))
        resp = client.post("/api/v1/recordings", json=self._payload())
        assert resp.status_code == 502
        assert resp.json() == {"detail": "Transcription service failed"}


# =====================================================================
# Validation
# =====================================================================


class TestValidation:

    def test_vital_signs(self, client):
        resp = client.post(
            "/api/v1/validation/vital-signs",
            json={"systolic": 120, "diastolic": 80, "temperature": 50},
        )
        assert resp.status_code == 200
        body = resp.json()
        assert body["is_valid"] is False
        assert [i["field"] for i in body["issues"]] == ["temperature"]

    def test_anthropometry_camel_case(self, client):
        resp = client.post(
            "/api/v1/validation/anthropometry",
            json={"weight": 70, "waistCircumference": 90},
        )
        assert resp.json() == {"issues": [], "is_valid": True}


# =====================================================================
# Reference data
# =====================================================================


class TestReference:

    def test_symptoms(self, client):
        body = client.get("/api/v1/reference/symptoms").json()
        assert len(body) == 17
        assert body[0] == {"name": "dolor", "aliases": []}

    def test_medications(self, client):
        names = [m["name"] for m in client.get("/api/v1/reference/medications").json()]
        assert "paracetamol" in names

    def test_routes(self, client):
        body = client.get("/api/v1/reference/routes").json()
        assert {r["route"] for r in body} == {"emergency", "evolution", "quick", "complete"}

    def test_route_detail(self, client):
        body = client.get("/api/v1/reference/routes/complete").json()
        assert body["estimated_time"] == 20
        assert body["name"] == "Consulta completa"

    def test_unknown_route_is_404(self, client):
        resp = client.get("/api/v1/reference/routes/urgent")
        assert resp.status_code == 404
        assert resp.json() == {"detail": "Resource not found"}


# =====================================================================
# Settings
# =====================================================================


def test_load_settings_from_env(monkeypatch):
    monkeypatch.setenv("SERVER_PORT", "9000")
    monkeypatch.setenv("SERVER_CORS_ORIGINS", "https://a.test, https://b.test")
    monkeypatch.setenv("SERVER_LOG_LEVEL", "debug")
    monkeypatch.setenv("TRANSCRIPTION_URL", "https://t.test/upload")
    settings = load_settings()
    assert settings.port == 9000
    assert settings.cors_origins == ["https://a.test", "https://b.test"]
    assert settings.log_level == "DEBUG"
    assert settings.transcription_url == "https://t.test/upload"


def test_load_settings_defaults(monkeypatch):
    for name in ("SERVER_PORT", "SERVER_RULESET_DIR", "TRANSCRIPTION_URL"):
        monkeypatch.delenv(name, raising=False)
    settings = load_settings()
    assert settings.port == 8080
    assert settings.ruleset_dir is None
    assert settings.transcription_url is None
