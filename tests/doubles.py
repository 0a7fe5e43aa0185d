# SPDX-License-Identifier: Apache-2.0
"""Test doubles for the executor and provider interfaces."""
from __future__ import annotations

import threading
from typing import Dict, List, Optional, Tuple

from httpbinding.executors.base import HttpExecutor
from httpbinding.providers.base import MappingProvider


class RecordingExecutor(HttpExecutor):
    """Executor used in tests to capture outbound calls."""

    def __init__(self):
        self.calls: List[Tuple[str, str, int]] = []
        self._lock = threading.Lock()

    def execute(self, method: str, url: str, timeout_ms: int) -> None:
        with self._lock:
            self.calls.append((method, url, timeout_ms))


class StubProvider(MappingProvider):
    """Provider whose answers are set directly, including blank or partial ones."""

    def __init__(
        self,
        name: str,
        *,
        claims: Tuple[str, ...] = (),
        mappings: Dict[Tuple[str, str], Tuple[Optional[str], Optional[str]]] | None = None,
    ):
        super().__init__(name)
        self.claims = set(claims)
        self.mappings = dict(mappings or {})
        self.url_lookups: List[Tuple[str, str]] = []

    def provides_binding_for(self, entity_name: str) -> bool:
        return entity_name in self.claims

    def get_http_method(self, entity_name: str, command: str) -> Optional[str]:
        return self.mappings.get((entity_name, command), (None, None))[0]

    def get_url(self, entity_name: str, command: str) -> Optional[str]:
        self.url_lookups.append((entity_name, command))
        return self.mappings.get((entity_name, command), (None, None))[1]
