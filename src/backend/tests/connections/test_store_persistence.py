import json
import logging

from common.connections.models import ConnectionStatus
from common.connections.settings import CallIntelligenceSettings
from common.connections.storage import STORAGE_KEY, load_snapshot


def test_teardown_flushes_and_init_rehydrates(make_store, tmp_path):
    path = str(tmp_path / "store.json")
    store = make_store(snapshot_path=path)
    store.connect("gong", "sales@acme.com")
    rule = store.create_rule("gong", {"name": "Demo", "title_keywords": ["demo"], "selected_users": ["sme1"]}).value
    store.connect("slack")
    store.teardown()

    raw = json.loads((tmp_path / "store.json").read_text())
    assert set(raw[STORAGE_KEY]["connections"]) == {"gong", "slack"}

    restored = make_store(snapshot_path=path).init()
    gong = restored.get_connection("gong")
    assert gong.account_label == "sales@acme.com"
    assert gong.status == ConnectionStatus.CONNECTED
    assert isinstance(gong.settings, CallIntelligenceSettings)
    assert [r.model_dump() for r in restored.active_rules_of("gong")] == [rule.model_dump()]
    assert restored.get_connection("slack").settings is None


def test_init_without_snapshot_is_empty(make_store, tmp_path):
    store = make_store(snapshot_path=str(tmp_path / "missing.json")).init()
    assert store.list_connections() == []


def test_autosave_writes_after_each_mutation(make_store, tmp_path):
    path = str(tmp_path / "store.json")
    store = make_store(snapshot_path=path, autosave=True)
    store.connect("gong")
    assert set(load_snapshot(path)) == {"gong"}
    store.disconnect("gong")
    assert load_snapshot(path) == {}


def test_no_autosave_without_flush(make_store, tmp_path):
    path = tmp_path / "store.json"
    store = make_store(snapshot_path=str(path))
    store.connect("gong")
    assert not path.exists()


def test_init_skips_unknown_providers_and_malformed_entries(make_store, tmp_path):
    path = tmp_path / "store.json"
    path.write_text(
        json.dumps(
            {
                STORAGE_KEY: {
                    "version": 1,
                    "connections": {
                        "gong": {"provider_id": "gong", "status": "connected", "connected_at": "2025-01-01T00:00:00+00:00"},
                        "retired-tool": {"provider_id": "retired-tool", "connected_at": "2025-01-01T00:00:00+00:00"},
                        "slack": {"provider_id": "slack", "status": "weird"},
                    },
                }
            }
        )
    )
    store = make_store(snapshot_path=str(path)).init()
    assert [c.provider_id for c in store.list_connections()] == ["gong"]


def test_load_snapshot_ignores_foreign_documents(tmp_path):
    path = tmp_path / "other.json"
    path.write_text(json.dumps(["not", "a", "store"]))
    assert load_snapshot(str(path)) is None
    path.write_text(json.dumps({"something-else": {}}))
    assert load_snapshot(str(path)) is None


def test_init_skips_entries_keyed_under_another_provider(make_store, tmp_path, caplog):
    path = tmp_path / "store.json"
    path.write_text(
        json.dumps(
            {
                STORAGE_KEY: {
                    "version": 1,
                    "connections": {
                        "gong": {"provider_id": "slack", "status": "connected", "connected_at": "2025-01-01T00:00:00+00:00"},
                        "avoma": {"provider_id": "avoma", "status": "connected", "connected_at": "2025-01-01T00:00:00+00:00"},
                    },
                }
            }
        )
    )
    with caplog.at_level(logging.WARNING, logger="common.connections.store"):
        store = make_store(snapshot_path=str(path)).init()
    assert [c.provider_id for c in store.list_connections()] == ["avoma"]
    assert store.is_connected("gong") is False
    assert store.is_connected("slack") is False
    assert "naming provider slack" in caplog.text
