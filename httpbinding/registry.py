# SPDX-License-Identifier: Apache-2.0
"""Set of mapping providers shared between lifecycle hooks and the dispatcher."""
from __future__ import annotations

import logging
import threading
from typing import Iterable, Iterator, Tuple

from .metrics import REGISTERED_PROVIDERS
from .providers.base import MappingProvider

log = logging.getLogger(__name__)


class ProviderRegistry:
    """Insertion-ordered provider set.

    Mutations swap in a new tuple under a lock; readers iterate whichever
    tuple was current when they started, so a concurrent add/remove never
    disturbs an in-progress scan.
    """

    def __init__(self, providers: Iterable[MappingProvider] = ()):
        self._lock = threading.Lock()
        self._providers: Tuple[MappingProvider, ...] = ()
        for provider in providers:
            self.add(provider)

    def add(self, provider: MappingProvider) -> bool:
        with self._lock:
            if provider in self._providers:
                return False
            self._providers = self._providers + (provider,)
            REGISTERED_PROVIDERS.set(len(self._providers))
        log.debug("registered provider %r", provider)
        return True

    def remove(self, provider: MappingProvider) -> bool:
        with self._lock:
            if provider not in self._providers:
                return False
            self._providers = tuple(p for p in self._providers if p != provider)
            REGISTERED_PROVIDERS.set(len(self._providers))
        log.debug("removed provider %r", provider)
        return True

    def snapshot(self) -> Tuple[MappingProvider, ...]:
        return self._providers

    def __iter__(self) -> Iterator[MappingProvider]:
        return iter(self._providers)

    def __len__(self) -> int:
        return len(self._providers)

    def __contains__(self, provider: object) -> bool:
        return provider in self._providers
