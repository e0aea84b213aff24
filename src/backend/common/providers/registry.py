from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Union

from .models import Provider, ProviderCategory


class ProviderRegistry:
    """Read-only (after startup) catalog of providers keyed by id."""

    def __init__(self, providers: Optional[Iterable[Provider]] = None):
        self._providers: Dict[str, Provider] = {}
        for provider in providers or ():
            self.register(provider)

    @classmethod
    def default(cls) -> "ProviderRegistry":
        from .builtin import BUILTIN_PROVIDERS

        return cls(Provider.model_validate(raw) for raw in BUILTIN_PROVIDERS)

    def register(self, provider: Provider) -> None:
        if not provider.id:
            raise ValueError("Provider missing id")
        if provider.id in self._providers:
            raise ValueError(f"Duplicate provider id registered: {provider.id}")
        self._providers[provider.id] = provider

    def get_provider(self, provider_id: str) -> Optional[Provider]:
        return self._providers.get(provider_id)

    def __contains__(self, provider_id: object) -> bool:
        return provider_id in self._providers

    def list_providers(self, category: Union[ProviderCategory, str, None] = None) -> List[Provider]:
        """
        Providers in registration order, optionally limited to one category.

        Category strings must name a `ProviderCategory` value; anything else
        raises ValueError.
        """
        if category is None:
            return list(self._providers.values())
        wanted = ProviderCategory(category)
        return [p for p in self._providers.values() if p.category == wanted]

    def search(self, query: str, category: Union[ProviderCategory, str, None] = None) -> List[Provider]:
        """
        Case-insensitive substring match over name, description and category.

        Raises ValueError for an unknown category, like `list_providers`.
        """
        providers = self.list_providers(category)
        q = (query or "").strip().lower()
        if not q:
            return providers
        return [
            p
            for p in providers
            if q in p.name.lower() or q in p.description.lower() or q in p.category.value.lower()
        ]

    def categories(self) -> List[ProviderCategory]:
        seen: List[ProviderCategory] = []
        for p in self._providers.values():
            if p.category not in seen:
                seen.append(p.category)
        return seen

    def ids(self) -> Iterable[str]:
        return self._providers.keys()
