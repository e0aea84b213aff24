import logging

from common.connections.models import ConnectionStatus
from common.connections.settings import CallIntelligenceSettings, DocumentSettings
from common.results import CoreError


def test_connect_creates_connection(store, clock):
    res = store.connect("gong", "sales@acme.com")
    assert res.ok
    assert res.notice is None
    conn = res.value
    assert conn.provider_id == "gong"
    assert conn.status == ConnectionStatus.CONNECTED
    assert conn.account_label == "sales@acme.com"
    assert conn.settings is None
    assert store.is_connected("gong")


def test_reconnect_is_idempotent_and_refreshes_timestamp(store):
    first = store.connect("gong", "a").value
    second = store.connect("gong", "a")
    assert second.ok
    assert second.notice == CoreError.ALREADY_CONNECTED
    conns = store.list_connections()
    assert len(conns) == 1
    assert conns[0].connected_at > first.connected_at


def test_reconnect_preserves_settings_and_label_unless_cleared(store):
    store.connect("gong", "label")
    store.configure("gong", CallIntelligenceSettings(min_call_duration_minutes=12))
    store.mark_error("gong", "token expired")

    res = store.connect("gong")
    assert res.value.status == ConnectionStatus.CONNECTED
    assert res.value.status_message is None
    assert res.value.account_label == "label"
    assert res.value.settings.min_call_duration_minutes == 12

    cleared = store.connect("gong", "other", clear_settings=True).value
    assert cleared.settings is None
    assert cleared.account_label == "other"


def test_connect_unknown_provider(store, caplog):
    with caplog.at_level(logging.WARNING):
        res = store.connect("myspace")
    assert res.error == CoreError.UNKNOWN_PROVIDER
    assert store.list_connections() == []
    assert "UNKNOWN_PROVIDER" in caplog.text


def test_configure_requires_connection(store):
    res = store.configure("gong", {"kind": "call_intelligence"})
    assert res.error == CoreError.NOT_CONNECTED
    assert store.list_connections() == []
    assert store.get_connection("gong") is None


def test_configure_replaces_settings_wholesale(store):
    store.connect("google-drive")
    store.configure("google-drive", {"selected_items": ["1", "2"], "active_account": "acc1"})
    res = store.configure("google-drive", {"selected_items": ["3"]})
    assert res.ok
    settings = store.get_connection("google-drive").settings
    assert isinstance(settings, DocumentSettings)
    assert settings.selected_items == ["3"]
    assert settings.active_account == ""
    assert settings.last_updated is not None


def test_configure_rejects_wrong_kind_and_bad_payload(store):
    store.connect("gong")
    wrong = store.configure("gong", {"kind": "document", "selected_items": []})
    assert wrong.error == CoreError.INVALID_SETTINGS
    bad = store.configure("gong", {"min_call_duration_minutes": -3})
    assert bad.error == CoreError.INVALID_SETTINGS
    assert store.get_connection("gong").settings is None


def test_configure_copies_caller_payload(store):
    store.connect("gong")
    payload = CallIntelligenceSettings(selected_smes=["sme1"])
    store.configure("gong", payload)
    payload.selected_smes.append("sme2")
    assert store.get_connection("gong").settings.selected_smes == ["sme1"]


def test_disconnect_removes_connection_and_rules(store):
    store.connect("gong")
    store.create_rule("gong", {"name": "Demo", "title_keywords": ["demo"]})
    res = store.disconnect("gong")
    assert res.ok
    assert res.value.provider_id == "gong"
    assert not store.is_connected("gong")
    assert store.active_rules_of("gong") == []
    assert store.configure("gong", {}).error == CoreError.NOT_CONNECTED


def test_disconnect_unknown_connection(store):
    assert store.disconnect("gong").error == CoreError.NOT_CONNECTED


def test_mark_error(store):
    assert store.mark_error("gong", "boom").error == CoreError.NOT_CONNECTED
    store.connect("gong")
    res = store.mark_error("gong", "boom")
    assert res.value.status == ConnectionStatus.ERROR
    assert res.value.status_message == "boom"


def test_returned_connections_are_snapshots(store):
    store.connect("gong", "a")
    snapshot = store.list_connections()
    snapshot[0].account_label = "mutated"
    got = store.get_connection("gong")
    got.account_label = "mutated again"
    assert store.get_connection("gong").account_label == "a"
