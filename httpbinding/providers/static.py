# SPDX-License-Identifier: Apache-2.0
"""Provider backed by an in-memory rule table."""
from __future__ import annotations

import threading
from typing import Any, Dict, Mapping, Optional, Tuple

from .base import MappingProvider

Binding = Tuple[Optional[str], Optional[str]]


def command_key(command: Any) -> str:
    # plain yaml.safe_load turns unquoted ON/OFF keys into booleans
    if isinstance(command, bool):
        return "ON" if command else "OFF"
    return str(command)


def parse_binding(entity_name: str, command: str, spec: Any) -> Binding:
    """Accept ``{"method": ..., "url": ...}`` or the ``"<METHOD> <URL>"`` shorthand.

    Parts the entry leaves out come back as ``None`` so they count as not configured.
    """
    if isinstance(spec, str):
        method, _, url = spec.strip().partition(" ")
        return method or None, url.strip() or None
    if isinstance(spec, dict):
        return spec.get("method"), spec.get("url")
    raise ValueError(f"binding for {entity_name}/{command} must be a mapping or string")


class StaticMappingProvider(MappingProvider):
    def __init__(self, name: str, bindings: Mapping[str, Mapping[str, Binding]] | None = None):
        super().__init__(name)
        self._lock = threading.Lock()
        self._table: Dict[str, Dict[str, Binding]] = {
            entity: dict(commands) for entity, commands in (bindings or {}).items()
        }

    @classmethod
    def from_options(cls, name: str, items: Mapping[str, Any] | None = None, **_: Any) -> "StaticMappingProvider":
        table: Dict[str, Dict[str, Binding]] = {}
        for entity_name, commands in (items or {}).items():
            if not isinstance(commands, dict):
                raise ValueError(f"item '{entity_name}' of provider '{name}' must be a mapping")
            table[entity_name] = {
                command_key(command): parse_binding(entity_name, command_key(command), spec)
                for command, spec in commands.items()
            }
        return cls(name, table)

    def set_binding(self, entity_name: str, command: str, method: Optional[str], url: Optional[str]) -> None:
        with self._lock:
            table = dict(self._table)
            table[entity_name] = {**table.get(entity_name, {}), command: (method, url)}
            self._table = table

    def remove_entity(self, entity_name: str) -> None:
        with self._lock:
            if entity_name in self._table:
                self._table = {k: v for k, v in self._table.items() if k != entity_name}

    def provides_binding_for(self, entity_name: str) -> bool:
        return bool(self._table.get(entity_name))

    def get_http_method(self, entity_name: str, command: str) -> Optional[str]:
        binding = self._lookup(entity_name, command)
        return binding[0] if binding else None

    def get_url(self, entity_name: str, command: str) -> Optional[str]:
        binding = self._lookup(entity_name, command)
        return binding[1] if binding else None

    def _lookup(self, entity_name: str, command: str) -> Optional[Binding]:
        return self._table.get(entity_name, {}).get(command)
