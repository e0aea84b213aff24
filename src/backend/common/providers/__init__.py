"""Static catalog of connectable third-party providers."""

from .models import Capability, Provider, ProviderCategory, SettingsKind
from .registry import ProviderRegistry

__all__ = ["Capability", "Provider", "ProviderCategory", "ProviderRegistry", "SettingsKind"]
