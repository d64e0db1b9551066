# -*- coding: utf-8 -*-
"""
Ports Interfaces Package

Defines the interfaces between the playback model and its collaborators
(providers, provider registry, settings persistence).

Design Principles:
- Use Protocol to define interfaces, supporting structural subtyping.
- The playback model depends on these interfaces rather than concrete implementations.
- Facilitates replacing with fake/mock during testing.
"""

from core.ports.provider import IProvider, IProviderRegistry
from core.ports.settings import ISettingsStore

__all__ = [
    "IProvider",
    "IProviderRegistry",
    "ISettingsStore",
]
