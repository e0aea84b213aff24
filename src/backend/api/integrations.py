from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter, Body, HTTPException, Query, Request
from pydantic import BaseModel

from common.connections.store import ConnectionStore
from common.ingestion_rules.models import CandidateRecord, RuleDraft
from common.results import CoreError, Result
from pipelines.admission import admit


router = APIRouter(prefix="/integrations", tags=["integrations"])

_STATUS_BY_ERROR = {
    CoreError.EMPTY_NAME: 422,
    CoreError.INVALID_SETTINGS: 422,
    CoreError.UNKNOWN_PROVIDER: 404,
    CoreError.RULE_NOT_FOUND: 404,
    CoreError.NOT_CONNECTED: 409,
}


class ConnectRequest(BaseModel):
    account_label: Optional[str] = None
    clear_settings: bool = False


def _store(request: Request) -> ConnectionStore:
    store = getattr(request.app.state, "connection_store", None)
    if store is None:
        raise HTTPException(status_code=500, detail="Connection store is not configured.")
    return store


def _unwrap(result: Result) -> Any:
    if not result.ok:
        raise HTTPException(
            status_code=_STATUS_BY_ERROR.get(result.error, 400),
            detail={"error": result.error.value, "message": result.message},
        )
    value = result.value
    if isinstance(value, list):
        return [v.model_dump(mode="json") for v in value]
    return value.model_dump(mode="json")


@router.get("/providers")
def list_providers(
    request: Request,
    category: Optional[str] = Query(None),
    q: Optional[str] = Query(None),
):
    registry = _store(request).registry
    try:
        providers = registry.search(q or "", category)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=f"Unknown category: {category}") from exc
    return [p.model_dump(mode="json") for p in providers]


@router.get("/connections")
def list_connections(request: Request):
    return [c.model_dump(mode="json") for c in _store(request).list_connections()]


@router.post("/{provider_id}/connect")
def connect(request: Request, provider_id: str, payload: Optional[ConnectRequest] = None):
    payload = payload or ConnectRequest()
    result = _store(request).connect(
        provider_id,
        payload.account_label,
        clear_settings=payload.clear_settings,
    )
    body = _unwrap(result)
    return {
        "connection": body,
        "notice": result.notice.value if result.notice else None,
    }


@router.delete("/{provider_id}")
def disconnect(request: Request, provider_id: str):
    return _unwrap(_store(request).disconnect(provider_id))


@router.put("/{provider_id}/settings")
def configure(request: Request, provider_id: str, settings: dict[str, Any] = Body(...)):
    return _unwrap(_store(request).configure(provider_id, settings))


@router.get("/{provider_id}/rules")
def list_rules(request: Request, provider_id: str):
    return _unwrap(_store(request).list_rules(provider_id))


@router.post("/{provider_id}/rules", status_code=201)
def create_rule(request: Request, provider_id: str, draft: RuleDraft):
    return _unwrap(_store(request).create_rule(provider_id, draft))


@router.put("/{provider_id}/rules/{rule_id}")
def update_rule(request: Request, provider_id: str, rule_id: str, draft: RuleDraft):
    return _unwrap(_store(request).update_rule(provider_id, rule_id, draft))


@router.post("/{provider_id}/rules/{rule_id}/toggle")
def toggle_rule(request: Request, provider_id: str, rule_id: str):
    return _unwrap(_store(request).toggle_rule(provider_id, rule_id))


@router.delete("/{provider_id}/rules/{rule_id}")
def delete_rule(request: Request, provider_id: str, rule_id: str):
    return _unwrap(_store(request).delete_rule(provider_id, rule_id))


@router.post("/{provider_id}/evaluate")
def evaluate_record(request: Request, provider_id: str, record: CandidateRecord):
    store = _store(request)
    if not store.is_connected(provider_id):
        raise HTTPException(
            status_code=409,
            detail={"error": CoreError.NOT_CONNECTED.value, "message": f"Provider {provider_id} is not connected."},
        )
    result = admit(store, provider_id, record)
    return result.model_dump(mode="json")
