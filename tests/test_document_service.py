import pytest
from fastapi.testclient import TestClient
from prometheus_client import REGISTRY

from wenshi.document_service import app


@pytest.fixture
def client():
    return TestClient(app)


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "healthy"


def test_validate(client):
    resp = client.post("/validate", json={"content": "你好世界"})
    assert resp.status_code == 200
    assert resp.json() == {"isValid": True, "errorMessage": ""}

    resp = client.post("/validate", json={"content": "hello"})
    assert resp.json() == {"isValid": False, "errorMessage": "File must contain at least 50% CJK characters"}


def test_parse(client, sample_envelope):
    resp = client.post("/wen/parse", json={"content": sample_envelope})
    assert resp.status_code == 200
    assert resp.json() == {
        "ver": "1.0",
        "createdAt": "2024-01-01T00:00:00Z",
        "modifiedAt": "2024-01-02T08:00:00+08:00",
        "content": "春眠不觉晓，\n处处闻啼鸟。",
    }


def test_parse_missing_ver(client):
    envelope = '<wenshi createdAt="2024-01-01T00:00:00Z" modifiedAt="2024-01-01T00:00:00Z">你好</wenshi>'
    resp = client.post("/wen/parse", json={"content": envelope})
    assert resp.status_code == 422
    assert resp.json()["detail"].endswith("missing required attribute 'ver'")


def test_serialize(client):
    payload = {
        "content": "你好\n世界",
        "createdAt": "2024-01-01T00:00:00Z",
        "modifiedAt": "2024-01-02T00:00:00Z",
    }
    resp = client.post("/wen/serialize", json=payload)
    assert resp.status_code == 200
    assert resp.json()["data"] == (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        '<wenshi ver="1.0" createdAt="2024-01-01T00:00:00Z" modifiedAt="2024-01-02T00:00:00Z">'
        "你好\r\n世界</wenshi>"
    )


def test_serialize_defaults_timestamps(client):
    resp = client.post("/wen/serialize", json={"content": "你好"})
    assert resp.status_code == 200
    parsed = client.post("/wen/parse", json={"content": resp.json()["data"]}).json()
    assert parsed["createdAt"] == parsed["modifiedAt"]


def test_serialize_invalid_content(client):
    resp = client.post("/wen/serialize", json={"content": "hello world"})
    assert resp.status_code == 422
    assert resp.json()["detail"] == "Invalid content: File must contain at least 50% CJK characters"


def test_read_and_write(client, tmp_path):
    path = str(tmp_path / "raw.txt")
    resp = client.post("/files/write", json={"path": path, "content": "任何内容 any content"})
    assert resp.status_code == 200

    resp = client.post("/files/read", json={"path": path})
    assert resp.status_code == 200
    assert resp.json() == {"path": path, "content": "任何内容 any content"}


def test_read_missing_file(client, tmp_path):
    resp = client.post("/files/read", json={"path": str(tmp_path / "missing.txt")})
    assert resp.status_code == 404


def test_save_and_open_wen(client, tmp_path):
    path = str(tmp_path / "poem.wen")
    resp = client.post("/files/save", json={"path": path, "content": "床前明月光"})
    assert resp.status_code == 200
    metadata = resp.json()["metadata"]
    assert metadata["ver"] == "1.0"
    assert metadata["createdAt"] == metadata["modifiedAt"]

    resp = client.post("/files/open", json={"path": path})
    assert resp.status_code == 200
    assert resp.json()["content"] == "床前明月光"
    assert resp.json()["metadata"] == metadata


def test_save_as_text_requires_confirmation(client, tmp_path):
    path = str(tmp_path / "poem.txt")
    metadata = {"ver": "1.0", "createdAt": "2024-01-01T00:00:00Z", "modifiedAt": "2024-01-01T00:00:00Z"}

    resp = client.post("/files/save", json={"path": path, "content": "床前明月光", "metadata": metadata})
    assert resp.status_code == 400

    resp = client.post(
        "/files/save",
        json={"path": path, "content": "床前明月光", "metadata": metadata, "allowMetadataLoss": True},
    )
    assert resp.status_code == 200
    assert resp.json()["metadata"] is None


def test_open_invalid_text(client, tmp_path):
    path = tmp_path / "english.txt"
    path.write_text("just english", encoding="utf-8")
    resp = client.post("/files/open", json={"path": str(path)})
    assert resp.status_code == 422
    assert resp.json()["detail"] == "File must contain at least 50% CJK characters"


def test_suggest_name(client):
    assert client.get("/files/suggest-name").json() == {"filename": "untitled.wen"}
    resp = client.get("/files/suggest-name", params={"current": "/docs/notes.txt"})
    assert resp.json() == {"filename": "notes.wen"}


def test_metrics(client):
    client.post("/validate", json={"content": "你好"})
    resp = client.get("/metrics")
    assert resp.status_code == 200
    assert "wenshi_validations_total" in resp.text


def test_validate_counts_results(client):
    def count(result):
        return REGISTRY.get_sample_value("wenshi_validations_total", {"result": result}) or 0.0

    valid_before, invalid_before = count("valid"), count("invalid")
    client.post("/validate", json={"content": "你好"})
    client.post("/validate", json={"content": "hello"})
    assert count("valid") == valid_before + 1
    assert count("invalid") == invalid_before + 1
