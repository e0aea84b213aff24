import json

from fastapi.testclient import TestClient

from api.app import create_app
from common.connections.storage import STORAGE_KEY
from common.connections.store import ConnectionStore
from common.providers.registry import ProviderRegistry


def test_list_providers_with_filters(client):
    resp = client.get("/integrations/providers", params={"category": "CRM"})
    assert resp.status_code == 200
    assert {p["id"] for p in resp.json()} >= {"salesforce", "hubspot"}

    resp = client.get("/integrations/providers", params={"q": "gong"})
    assert [p["id"] for p in resp.json()] == ["gong"]

    assert client.get("/integrations/providers", params={"category": "Nope"}).status_code == 400


def test_connect_and_reconnect(client):
    resp = client.post("/integrations/gong/connect", json={"account_label": "sales@acme.com"})
    assert resp.status_code == 200
    assert resp.json()["notice"] is None
    assert resp.json()["connection"]["status"] == "connected"

    again = client.post("/integrations/gong/connect")
    assert again.json()["notice"] == "ALREADY_CONNECTED"
    assert again.json()["connection"]["account_label"] == "sales@acme.com"
    assert len(client.get("/integrations/connections").json()) == 1


def test_connect_unknown_provider(client):
    resp = client.post("/integrations/myspace/connect")
    assert resp.status_code == 404
    assert resp.json()["detail"]["error"] == "UNKNOWN_PROVIDER"


def test_configure_requires_connection(client):
    resp = client.put("/integrations/gong/settings", json={"min_call_duration_minutes": 10})
    assert resp.status_code == 409
    assert resp.json()["detail"]["error"] == "NOT_CONNECTED"


def test_configure_validates_settings(client):
    client.post("/integrations/slack/connect")
    ok = client.put("/integrations/slack/settings", json={"selected_channels": ["#sales"]})
    assert ok.status_code == 200
    assert ok.json()["settings"]["kind"] == "communication"
    bad = client.put("/integrations/slack/settings", json={"kind": "crm"})
    assert bad.status_code == 422
    assert bad.json()["detail"]["error"] == "INVALID_SETTINGS"


def test_rule_crud_and_evaluate(client):
    client.post("/integrations/gong/connect")
    created = client.post(
        "/integrations/gong/rules",
        json={"name": "External demos", "record_type": "external", "title_keywords": ["Demo"]},
    )
    assert created.status_code == 201
    rule = created.json()
    assert rule["title_keywords"] == ["demo"]

    record = {"is_external": True, "title": "Demo walkthrough", "participant_ids": []}
    res = client.post("/integrations/gong/evaluate", json=record)
    assert res.json() == {"included": True, "matched_rule_ids": [rule["id"]]}

    toggled = client.post(f"/integrations/gong/rules/{rule['id']}/toggle")
    assert toggled.json()["is_active"] is False
    assert client.post("/integrations/gong/evaluate", json=record).json()["included"] is False

    updated = client.put(f"/integrations/gong/rules/{rule['id']}", json={"name": "Renamed", "record_type": "all"})
    assert updated.json()["name"] == "Renamed"
    assert updated.json()["is_active"] is False

    assert client.delete(f"/integrations/gong/rules/{rule['id']}").status_code == 200
    assert client.get("/integrations/gong/rules").json() == []
    assert client.delete(f"/integrations/gong/rules/{rule['id']}").status_code == 404


def test_rule_with_empty_name_is_rejected(client):
    client.post("/integrations/gong/connect")
    resp = client.post("/integrations/gong/rules", json={"name": "   "})
    assert resp.status_code == 422
    assert resp.json()["detail"]["error"] == "EMPTY_NAME"


def test_disconnect(client):
    client.post("/integrations/gong/connect")
    assert client.delete("/integrations/gong").status_code == 200
    assert client.delete("/integrations/gong").status_code == 409
    assert client.post("/integrations/gong/evaluate", json={"is_external": True}).status_code == 409


def test_shutdown_flushes_snapshot(snapshot_path):
    store = ConnectionStore(ProviderRegistry.default(), snapshot_path=snapshot_path)
    with TestClient(create_app(store)) as client:
        client.post("/integrations/notion/connect")

    with open(snapshot_path, encoding="utf-8") as handle:
        data = json.load(handle)
    assert list(data[STORAGE_KEY]["connections"]) == ["notion"]
