from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path


def _ensure_backend_on_path() -> None:
    backend_dir = Path(__file__).resolve().parents[1]
    if str(backend_dir) not in sys.path:
        sys.path.insert(0, str(backend_dir))


_ensure_backend_on_path()

from common.connections.config import get_store_config  # noqa: E402
from common.connections.store import ConnectionStore  # noqa: E402
from common.ingestion_rules.models import CandidateRecord  # noqa: E402
from common.providers.registry import ProviderRegistry  # noqa: E402
from pipelines.admission import AdmissionReport, admit_many  # noqa: E402
from pipelines.records import (  # noqa: E402
    call_record_from_payload,
    document_record_from_item,
    meeting_record_from_event,
)


def _load_json(path: Path):
    with path.open() as handle:
        return json.load(handle)


def build_records(payloads: list, *, shape: str, internal_domains: list[str]) -> list[CandidateRecord]:
    if shape == "call":
        return [call_record_from_payload(p) for p in payloads]
    if shape == "meeting":
        return [meeting_record_from_event(p, internal_domains=internal_domains) for p in payloads]
    if shape == "document":
        return [document_record_from_item(p) for p in payloads]
    return [CandidateRecord.model_validate(p) for p in payloads]


def _write_markdown(report: AdmissionReport) -> str:
    lines = [
        f"# Admission check: {report.provider_id}",
        "",
        f"Admitted {len(report.admitted)} of {len(report.decisions)} record(s).",
        "",
        "| Record | Title | Included | Matched rules |",
        "| --- | --- | --- | --- |",
    ]
    for decision in report.decisions:
        rec = decision.record
        matched = ", ".join(decision.result.matched_rule_ids) or "-"
        lines.append(
            f"| {rec.record_id or '-'} | {rec.title} | {'yes' if decision.result.included else 'no'} | {matched} |"
        )
    return "\n".join(lines) + "\n"


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Evaluate candidate records against a provider's active ingestion rules from a store snapshot."
    )
    parser.add_argument("--provider", required=True, help="Provider id (e.g. gong).")
    parser.add_argument("--records", required=True, help="Path to a JSON list of record payloads.")
    parser.add_argument(
        "--shape",
        choices=("candidate", "call", "meeting", "document"),
        default="candidate",
        help="Payload shape of the records file (default: candidate).",
    )
    parser.add_argument(
        "--internal-domain",
        action="append",
        default=[],
        dest="internal_domains",
        help="Internal email domain for meeting classification (repeatable).",
    )
    parser.add_argument(
        "--store",
        default=None,
        help="Store snapshot path (defaults to INTEGRATIONS_STORE_PATH).",
    )
    parser.add_argument("--format", choices=("json", "md"), default="json", help="Output format.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = get_store_config()
    store = ConnectionStore(
        ProviderRegistry.default(),
        snapshot_path=args.store or config.snapshot_path,
    ).init()
    if not store.is_connected(args.provider):
        raise SystemExit(f"Provider {args.provider!r} is not connected in the store snapshot.")

    payloads = _load_json(Path(args.records))
    if not isinstance(payloads, list):
        raise SystemExit("Records file must contain a JSON list.")
    records = build_records(payloads, shape=args.shape, internal_domains=args.internal_domains)
    report = admit_many(store, args.provider, records)

    if args.format == "md":
        print(_write_markdown(report), end="")
    else:
        out = [
            {
                "record": d.record.model_dump(mode="json"),
                "included": d.result.included,
                "matched_rule_ids": d.result.matched_rule_ids,
            }
            for d in report.decisions
        ]
        print(json.dumps(out, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
