from __future__ import annotations

import argparse
import json
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from .registry import ProviderRegistry


class ProviderCatalogEntry(BaseModel):
    id: str
    name: str
    category: str
    capabilities: List[str] = Field(default_factory=list)
    settings_kind: str
    record_type_label: str = ""
    oauth: bool = True

    settings_schema: Dict[str, Any] = Field(default_factory=dict)


def build_catalog(registry: Optional[ProviderRegistry] = None, *, category: Optional[str] = None) -> List[ProviderCatalogEntry]:
    from common.connections.settings import settings_model_for

    registry = registry or ProviderRegistry.default()
    entries: List[ProviderCatalogEntry] = []
    for provider in registry.list_providers(category):
        entries.append(
            ProviderCatalogEntry(
                id=provider.id,
                name=provider.name,
                category=provider.category.value,
                capabilities=sorted(c.value for c in provider.capabilities),
                settings_kind=provider.settings_kind.value,
                record_type_label=provider.record_type_label,
                oauth=provider.oauth,
                settings_schema=settings_model_for(provider.settings_kind).model_json_schema(),
            )
        )

    entries.sort(key=lambda e: (e.category, e.id))
    return entries


def _dump_json(catalog: list[dict[str, Any]]) -> str:
    return json.dumps(catalog, indent=2, sort_keys=True)


def _dump_yaml(catalog: list[dict[str, Any]]) -> str:
    import yaml

    return yaml.safe_dump(catalog, sort_keys=True)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Generate the provider catalog from the registry.")
    parser.add_argument(
        "--format",
        choices=("yaml", "json"),
        default="yaml",
        help="Output format (default: yaml).",
    )
    parser.add_argument(
        "--category",
        default=None,
        help="Only include providers from this category (e.g. 'CRM').",
    )
    parser.add_argument(
        "--no-schema",
        action="store_true",
        help="Omit the settings JSON schema from each entry.",
    )
    args = parser.parse_args(argv)

    exclude = {"settings_schema"} if args.no_schema else None
    catalog = [e.model_dump(exclude=exclude) for e in build_catalog(category=args.category)]
    if args.format == "json":
        print(_dump_json(catalog))
    else:
        print(_dump_yaml(catalog))


if __name__ == "__main__":
    main()
