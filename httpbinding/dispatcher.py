# SPDX-License-Identifier: Apache-2.0
"""Resolves item commands to a single HTTP call and hands it to the executor."""
from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Any, Optional, Tuple

from .executors.base import HttpExecutor
from .messages import CommandEvent, command_repr
from .metrics import DISPATCH_OUTCOMES
from .providers.base import MappingProvider
from .registry import ProviderRegistry

log = logging.getLogger(__name__)

# socket timeout handed to every outbound request
SO_TIMEOUT_MS = 5000


class DispatchOutcome(str, enum.Enum):
    NO_BINDING = "no_binding"
    UNRESOLVED = "unresolved"
    INCOMPLETE = "incomplete"
    EXECUTED = "executed"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class ResolvedAction:
    method: str
    url: str


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


class Dispatcher:
    """Stateless command dispatcher over an injected provider registry.

    Each call to :meth:`dispatch` is independent and terminates in one of the
    :class:`DispatchOutcome` states. It never raises to the caller and never
    waits for the HTTP response.
    """

    def __init__(self, registry: ProviderRegistry, executor: HttpExecutor, *, timeout_ms: int = SO_TIMEOUT_MS):
        self.registry = registry
        self.executor = executor
        self.timeout_ms = timeout_ms

    def add_provider(self, provider: MappingProvider) -> None:
        self.registry.add(provider)

    def remove_provider(self, provider: MappingProvider) -> None:
        self.registry.remove(provider)

    def dispatch(self, entity_name: str, command: Any) -> DispatchOutcome:
        outcome = self._dispatch(entity_name, command)
        DISPATCH_OUTCOMES.labels(outcome.value).inc()
        return outcome

    def dispatch_event(self, event: CommandEvent) -> DispatchOutcome:
        return self.dispatch(event.entity_name, event.command)

    def _dispatch(self, entity_name: str, command: Any) -> DispatchOutcome:
        try:
            key = command_repr(command)
            claimed, provider = self._find_provider(entity_name, key)
            if not claimed:
                return DispatchOutcome.NO_BINDING
            if provider is None:
                log.warning("doesn't find matching binding provider [itemName=%s, command=%s]", entity_name, key)
                return DispatchOutcome.UNRESOLVED
            action = self._resolve(provider, entity_name, key)
        except Exception:
            log.exception("resolving command %s for %s failed", command, entity_name)
            return DispatchOutcome.FAILED
        if action is None:
            return DispatchOutcome.INCOMPLETE
        self.executor.execute(action.method, action.url, self.timeout_ms)
        return DispatchOutcome.EXECUTED

    def _find_provider(self, entity_name: str, command: str) -> Tuple[bool, Optional[MappingProvider]]:
        """Look up one registry snapshot.

        Returns whether any provider claims the item and the first provider
        (in registry order) that has a URL for the command. No URL is looked
        up unless some provider claims the item.
        """
        providers = self.registry.snapshot()
        if not any(provider.provides_binding_for(entity_name) for provider in providers):
            return False, None
        for provider in providers:
            if provider.get_url(entity_name, command) is not None:
                return True, provider
        return True, None

    @staticmethod
    def _resolve(provider: MappingProvider, entity_name: str, command: str) -> Optional[ResolvedAction]:
        method = provider.get_http_method(entity_name, command)
        url = provider.get_url(entity_name, command)
        if _is_blank(method) or _is_blank(url):
            return None
        return ResolvedAction(method=method.strip(), url=url.strip())
