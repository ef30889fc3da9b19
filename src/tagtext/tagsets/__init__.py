from __future__ import annotations

from ..classification import LanguageRegistry
from . import en

__all__ = ["build_default_registry", "en"]


def build_default_registry() -> LanguageRegistry:
    """Return a registry with every bundled tag set registered lazily."""
    registry = LanguageRegistry()
    en.register(registry)
    return registry
