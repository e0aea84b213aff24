from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from pydantic import ValidationError

from common.ingestion_rules.evaluator import active_rules
from common.ingestion_rules.models import IngestionRule, RuleDraft
from common.ingestion_rules.rule import apply_edit, build_rule, new_rule_id, normalize_rules, toggled, validate_draft
from common.providers.registry import ProviderRegistry
from common.results import CoreError, Result

from .config import StoreConfig, get_store_config
from .models import Connection, ConnectionStatus
from .settings import SettingsBase, default_settings, parse_settings
from .storage import load_snapshot, save_snapshot


logger = logging.getLogger(__name__)

# Errors that mean the caller holds a stale provider/rule id.
_CALLER_BUG_ERRORS = {CoreError.UNKNOWN_PROVIDER, CoreError.NOT_CONNECTED, CoreError.RULE_NOT_FOUND}

DraftInput = Union[RuleDraft, Mapping[str, Any]]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ConnectionStore:
    """
    Source of truth for provider connections, keyed by provider id.

    All mutations are synchronous and assume a single logical thread; hosts
    with several threads must serialize access themselves. Rule CRUD is
    expressed through `configure`, replacing the whole settings payload.
    """

    def __init__(
        self,
        registry: ProviderRegistry,
        *,
        snapshot_path: Optional[str] = None,
        autosave: bool = False,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self._registry = registry
        self._snapshot_path = snapshot_path
        self._autosave = autosave and snapshot_path is not None
        self._clock = clock
        self._connections: Dict[str, Connection] = {}

    @classmethod
    def from_config(
        cls,
        config: Optional[StoreConfig] = None,
        *,
        registry: Optional[ProviderRegistry] = None,
    ) -> "ConnectionStore":
        config = config or get_store_config()
        return cls(
            registry or ProviderRegistry.default(),
            snapshot_path=config.snapshot_path,
            autosave=config.autosave,
        )

    @property
    def registry(self) -> ProviderRegistry:
        return self._registry

    # Lifecycle

    def init(self) -> "ConnectionStore":
        """Load the persisted snapshot, if any. Returns self for chaining."""
        if not self._snapshot_path:
            return self
        raw = load_snapshot(self._snapshot_path)
        if raw is None:
            return self

        loaded: Dict[str, Connection] = {}
        for provider_id, payload in raw.items():
            if provider_id not in self._registry:
                logger.warning("Skipping persisted connection for unknown provider %s", provider_id)
                continue
            try:
                connection = Connection.model_validate(payload)
            except ValidationError as exc:
                logger.warning("Skipping malformed persisted connection for %s: %s", provider_id, exc)
                continue
            if connection.provider_id != provider_id:
                logger.warning(
                    "Skipping persisted connection stored under %s but naming provider %s",
                    provider_id,
                    connection.provider_id,
                )
                continue
            loaded[provider_id] = connection
        self._connections = loaded
        logger.info("Loaded %d connection(s) from %s", len(loaded), self._snapshot_path)
        return self

    def teardown(self) -> None:
        self.flush()

    def flush(self) -> None:
        if self._snapshot_path:
            save_snapshot(self._snapshot_path, self._connections)

    # Connections

    def connect(
        self,
        provider_id: str,
        account_label: Optional[str] = None,
        *,
        clear_settings: bool = False,
    ) -> Result[Connection]:
        """
        Create or overwrite the connection for `provider_id`.

        Reconnecting resets status and `connected_at`, keeps the prior settings
        (unless `clear_settings`) and the prior account label when none is
        given, and reports ALREADY_CONNECTED as a notice.
        """
        if self._registry.get_provider(provider_id) is None:
            return self._fail(CoreError.UNKNOWN_PROVIDER, f"Unknown provider: {provider_id}")

        previous = self._connections.get(provider_id)
        settings = None
        if previous is not None and not clear_settings:
            settings = previous.settings
        if account_label is None and previous is not None:
            account_label = previous.account_label

        connection = Connection(
            provider_id=provider_id,
            status=ConnectionStatus.CONNECTED,
            connected_at=self._clock(),
            account_label=account_label,
            settings=settings,
        )
        self._connections[provider_id] = connection
        self._changed()

        if previous is not None:
            logger.info("Reconnected provider %s", provider_id)
            return Result.success(
                connection.model_copy(deep=True),
                notice=CoreError.ALREADY_CONNECTED,
                message=f"Provider {provider_id} was already connected; connection refreshed.",
            )
        logger.info("Connected provider %s", provider_id)
        return Result.success(connection.model_copy(deep=True))

    def disconnect(self, provider_id: str) -> Result[Connection]:
        """Remove the connection and every rule embedded in its settings."""
        removed = self._connections.pop(provider_id, None)
        if removed is None:
            return self._fail(CoreError.NOT_CONNECTED, f"Provider {provider_id} is not connected.")
        self._changed()
        logger.info("Disconnected provider %s", provider_id)
        return Result.success(removed)

    def configure(self, provider_id: str, settings: Union[SettingsBase, Mapping[str, Any]]) -> Result[Connection]:
        """
        Replace the settings payload wholesale (last write wins).

        Embedded rules are normalized like drafts: rules without an id get one,
        duplicate ids fail with INVALID_SETTINGS and blank names with
        EMPTY_NAME. A failed call leaves the stored settings untouched.
        """
        current = self._connections.get(provider_id)
        if current is None:
            return self._fail(CoreError.NOT_CONNECTED, f"Provider {provider_id} is not connected.")

        provider = self._registry.get_provider(provider_id)
        expected_kind = provider.settings_kind if provider is not None else None
        raw = dict(settings) if isinstance(settings, Mapping) else settings.model_dump()
        entries = raw.get("rules") or []
        if not isinstance(entries, list):
            return self._fail(CoreError.INVALID_SETTINGS, f"Rules for {provider_id} must be a list.")
        try:
            normalized = normalize_rules(entries)
            if not normalized.ok:
                return self._fail(normalized.error, normalized.message)
            raw["rules"] = normalized.value
            parsed = parse_settings(raw, kind=expected_kind)
        except ValidationError as exc:
            return self._fail(CoreError.INVALID_SETTINGS, f"Invalid settings for {provider_id}: {exc}")
        parsed_kind = getattr(parsed, "kind", None)
        if expected_kind is not None and parsed_kind != expected_kind.value:
            return self._fail(
                CoreError.INVALID_SETTINGS,
                f"Provider {provider_id} expects {expected_kind.value} settings, got {parsed_kind}.",
            )

        stored = parsed.model_copy(deep=True, update={"last_updated": self._clock()})
        updated = current.model_copy(update={"settings": stored})
        self._connections[provider_id] = updated
        self._changed()
        logger.info("Configured provider %s (%d rule(s))", provider_id, len(stored.rules))
        return Result.success(updated.model_copy(deep=True))

    def mark_error(self, provider_id: str, message: str) -> Result[Connection]:
        current = self._connections.get(provider_id)
        if current is None:
            return self._fail(CoreError.NOT_CONNECTED, f"Provider {provider_id} is not connected.")
        updated = current.model_copy(update={"status": ConnectionStatus.ERROR, "status_message": message})
        self._connections[provider_id] = updated
        self._changed()
        logger.warning("Provider %s marked as errored: %s", provider_id, message)
        return Result.success(updated.model_copy(deep=True))

    def get_connection(self, provider_id: str) -> Optional[Connection]:
        connection = self._connections.get(provider_id)
        return connection.model_copy(deep=True) if connection is not None else None

    def is_connected(self, provider_id: str) -> bool:
        return provider_id in self._connections

    def list_connections(self) -> List[Connection]:
        return [c.model_copy(deep=True) for c in self._connections.values()]

    # Ingestion rules

    def list_rules(self, provider_id: str) -> Result[List[IngestionRule]]:
        current = self._connections.get(provider_id)
        if current is None:
            return self._fail(CoreError.NOT_CONNECTED, f"Provider {provider_id} is not connected.")
        rules = current.settings.rules if current.settings is not None else []
        return Result.success([r.model_copy() for r in rules])

    def active_rules_of(self, provider_id: str) -> List[IngestionRule]:
        current = self._connections.get(provider_id)
        if current is None or current.settings is None:
            return []
        return [r.model_copy() for r in active_rules(current.settings.rules)]

    def create_rule(self, provider_id: str, draft: DraftInput) -> Result[IngestionRule]:
        current = self._connections.get(provider_id)
        if current is None:
            return self._fail(CoreError.NOT_CONNECTED, f"Provider {provider_id} is not connected.")
        validated = validate_draft(draft)
        if not validated.ok:
            return Result.failure(validated.error, validated.message)

        settings = self._settings_of(current)
        existing_ids = {r.id for r in settings.rules}
        rule_id = new_rule_id()
        while rule_id in existing_ids:
            rule_id = new_rule_id()
        rule = build_rule(validated.value, rule_id)
        return self._store_rules(provider_id, settings, [*settings.rules, rule], rule)

    def update_rule(self, provider_id: str, rule_id: str, draft: DraftInput) -> Result[IngestionRule]:
        current = self._connections.get(provider_id)
        if current is None:
            return self._fail(CoreError.NOT_CONNECTED, f"Provider {provider_id} is not connected.")
        validated = validate_draft(draft)
        if not validated.ok:
            return Result.failure(validated.error, validated.message)
        return self._replace_rule(provider_id, current, rule_id, lambda rule: apply_edit(rule, validated.value))

    def toggle_rule(self, provider_id: str, rule_id: str) -> Result[IngestionRule]:
        current = self._connections.get(provider_id)
        if current is None:
            return self._fail(CoreError.NOT_CONNECTED, f"Provider {provider_id} is not connected.")
        return self._replace_rule(provider_id, current, rule_id, toggled)

    def delete_rule(self, provider_id: str, rule_id: str) -> Result[IngestionRule]:
        current = self._connections.get(provider_id)
        if current is None:
            return self._fail(CoreError.NOT_CONNECTED, f"Provider {provider_id} is not connected.")
        settings = self._settings_of(current)
        target = next((r for r in settings.rules if r.id == rule_id), None)
        if target is None:
            return self._fail(CoreError.RULE_NOT_FOUND, f"Rule {rule_id} not found for provider {provider_id}.")
        remaining = [r for r in settings.rules if r.id != rule_id]
        return self._store_rules(provider_id, settings, remaining, target)

    # Internals

    def _replace_rule(
        self,
        provider_id: str,
        current: Connection,
        rule_id: str,
        change: Callable[[IngestionRule], IngestionRule],
    ) -> Result[IngestionRule]:
        settings = self._settings_of(current)
        changed: Optional[IngestionRule] = None
        rules: List[IngestionRule] = []
        for rule in settings.rules:
            if rule.id == rule_id:
                changed = change(rule)
                rules.append(changed)
            else:
                rules.append(rule)
        if changed is None:
            return self._fail(CoreError.RULE_NOT_FOUND, f"Rule {rule_id} not found for provider {provider_id}.")
        return self._store_rules(provider_id, settings, rules, changed)

    def _store_rules(
        self,
        provider_id: str,
        settings: SettingsBase,
        rules: List[IngestionRule],
        subject: IngestionRule,
    ) -> Result[IngestionRule]:
        result = self.configure(provider_id, settings.model_copy(update={"rules": rules}))
        if not result.ok:
            return Result.failure(result.error, result.message)
        return Result.success(subject.model_copy())

    def _settings_of(self, connection: Connection) -> SettingsBase:
        if connection.settings is not None:
            return connection.settings
        provider = self._registry.get_provider(connection.provider_id)
        if provider is None:
            raise KeyError(connection.provider_id)
        return default_settings(provider.settings_kind)

    def _changed(self) -> None:
        if self._autosave:
            self.flush()

    def _fail(self, error: CoreError, message: str) -> Result:
        if error in _CALLER_BUG_ERRORS:
            logger.warning("%s: %s", error.value, message)
        return Result.failure(error, message)
