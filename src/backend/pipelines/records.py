from __future__ import annotations

from typing import Any, Iterable, Mapping

from common.ingestion_rules.models import CandidateRecord, RecordKind


class RecordAdapterError(ValueError):
    pass


def call_record_from_payload(payload: Any) -> CandidateRecord:
    """
    Build a candidate record from a call-intelligence payload.

    Supports common call shapes:
    - {"isExternal": true, ...}                        (explicit flag)
    - {"scope": "External" | "Internal", ...}          (Gong-style scope)
    - {"direction": "external" | "internal", ...}
    Participants come from "parties" ([{"userId": ...}] or [{"id": ...}]) or
    "participantIds"; the deal stage from "dealStage" or {"deal": {"stage": ...}}.
    """
    if not isinstance(payload, Mapping):
        raise RecordAdapterError("Call payload must be a JSON object.")

    is_external = _direction_flag(payload)
    if is_external is None:
        raise RecordAdapterError("Call payload has no direction (isExternal, scope or direction).")

    participants = set(_strings(payload.get("participantIds")))
    for party in payload.get("parties") or []:
        if not isinstance(party, Mapping):
            continue
        party_id = party.get("userId") or party.get("id")
        if isinstance(party_id, str) and party_id.strip():
            participants.add(party_id.strip())

    return CandidateRecord(
        is_external=is_external,
        title=str(payload.get("title") or ""),
        deal_stage=_deal_stage(payload),
        participant_ids=participants,
        record_id=_optional_str(payload.get("id")),
        kind=RecordKind.CALL,
    )


def meeting_record_from_event(
    event: Any,
    *,
    internal_domains: Iterable[str],
    user_ids_by_email: Mapping[str, str] | None = None,
) -> CandidateRecord:
    """
    Build a candidate record from a calendar event.

    A meeting is external when any attendee's email domain is not one of
    `internal_domains`. Attendees are reported by user id when
    `user_ids_by_email` knows them, otherwise by lowercased email.
    """
    if not isinstance(event, Mapping):
        raise RecordAdapterError("Calendar event must be a JSON object.")

    domains = {d.strip().lower().lstrip("@") for d in internal_domains if d and d.strip()}
    if not domains:
        raise RecordAdapterError("At least one internal domain is required to classify meetings.")
    lookup = {k.lower(): v for k, v in (user_ids_by_email or {}).items()}

    emails: list[str] = []
    for attendee in event.get("attendees") or []:
        if isinstance(attendee, Mapping) and isinstance(attendee.get("email"), str):
            email = attendee["email"].strip().lower()
            if email:
                emails.append(email)

    is_external = any(email.rsplit("@", 1)[-1] not in domains for email in emails)

    return CandidateRecord(
        is_external=is_external,
        title=str(event.get("summary") or event.get("title") or ""),
        deal_stage=_deal_stage(event),
        participant_ids={lookup.get(email, email) for email in emails},
        record_id=_optional_str(event.get("id")),
        kind=RecordKind.MEETING,
    )


def document_record_from_item(item: Any) -> CandidateRecord:
    """Documents are internal unless flagged as shared externally; owners count as participants."""
    if not isinstance(item, Mapping):
        raise RecordAdapterError("Document item must be a JSON object.")

    return CandidateRecord(
        is_external=bool(item.get("sharedExternally", False)),
        title=str(item.get("name") or item.get("title") or ""),
        deal_stage=_deal_stage(item),
        participant_ids=set(_strings(item.get("owners"))),
        record_id=_optional_str(item.get("id")),
        kind=RecordKind.DOCUMENT,
    )


def _direction_flag(payload: Mapping[str, Any]) -> bool | None:
    flag = payload.get("isExternal")
    if isinstance(flag, bool):
        return flag
    for key in ("scope", "direction"):
        value = payload.get(key)
        if isinstance(value, str):
            v = value.strip().lower()
            if v == "external":
                return True
            if v == "internal":
                return False
    return None


def _deal_stage(payload: Mapping[str, Any]) -> str | None:
    stage = payload.get("dealStage")
    if stage is None and isinstance(payload.get("deal"), Mapping):
        stage = payload["deal"].get("stage")
    return _optional_str(stage)


def _optional_str(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _strings(values: Any) -> list[str]:
    if not isinstance(values, (list, tuple, set)):
        return []
    return [str(v).strip() for v in values if v is not None and str(v).strip()]
