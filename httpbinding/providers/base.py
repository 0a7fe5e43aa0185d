# SPDX-License-Identifier: Apache-2.0
"""Mapping provider interface consulted by the dispatcher."""
from __future__ import annotations

import abc
from typing import Optional


class MappingProvider(abc.ABC):
    """Configuration view answering which HTTP call belongs to an item command."""

    def __init__(self, name: str):
        self.name = name

    @abc.abstractmethod
    def provides_binding_for(self, entity_name: str) -> bool:
        """Return True if any command of ``entity_name`` is mapped."""
        raise NotImplementedError

    @abc.abstractmethod
    def get_http_method(self, entity_name: str, command: str) -> Optional[str]:
        raise NotImplementedError

    @abc.abstractmethod
    def get_url(self, entity_name: str, command: str) -> Optional[str]:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"
