"""
Provider Registry

Maps a playlist item's primary source to the provider class able to play it.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Dict, Iterable, List, Optional, Type

from core.provider import ProviderBase

if TYPE_CHECKING:
    from models.playlist import Source

logger = logging.getLogger(__name__)


class ProviderNotFoundError(RuntimeError):
    """No registered provider can play a source"""
    pass


class ProviderRegistry:
    """
    Provider Registry

    Holds provider classes keyed by their name tag and picks the first one
    whose ``supports()`` accepts a source.

    Usage Example:
        registry = ProviderRegistry(primary="html5")
        registry.register(Html5Provider)
        registry.register(HlsProvider)

        provider_cls = registry.choose(item.primary_source)
    """

    def __init__(
        self,
        primary: Optional[str] = None,
        providers: Optional[Iterable[Type[ProviderBase]]] = None,
    ):
        """
        Args:
            primary: Provider name to try before all others
            providers: Provider classes to register, in fallback order
        """
        self._primary = primary
        self._providers: Dict[str, Type[ProviderBase]] = {}
        for provider_cls in providers or ():
            self.register(provider_cls)

    def register(self, provider_cls: Type[ProviderBase]) -> None:
        """
        Register a provider class.

        Registering a second class under an existing name replaces it.
        """
        name = provider_cls.name
        if name in self._providers:
            logger.debug("Replacing provider registered as %s", name)
        self._providers[name] = provider_cls

    def unregister(self, name: str) -> bool:
        return self._providers.pop(name, None) is not None

    @property
    def priority_order(self) -> List[str]:
        """Provider names in lookup order: primary first, then registration order"""
        names = list(self._providers)
        if self._primary in self._providers:
            names.remove(self._primary)
            names.insert(0, self._primary)
        return names

    def choose(self, source: "Source") -> Optional[Type[ProviderBase]]:
        """
        Pick the provider class for a source.

        Args:
            source: The item's primary source

        Returns:
            The first matching provider class, or None when nothing fits
        """
        for name in self.priority_order:
            provider_cls = self._providers[name]
            try:
                if provider_cls.supports(source):
                    return provider_cls
            except Exception as e:
                logger.warning("Provider %s failed to check source: %s", name, e)
        return None

    def is_registered(self, name: str) -> bool:
        return name in self._providers

    def get_registered_providers(self) -> List[str]:
        """
        Get registered provider names.

        Returns:
            List[str]: Names sorted by lookup priority.
        """
        return self.priority_order
