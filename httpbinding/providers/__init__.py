# SPDX-License-Identifier: Apache-2.0
"""Provider factory."""
from __future__ import annotations

from typing import Callable, List

from httpbinding.config import ProviderConfig

from .base import MappingProvider

PROVIDER_TYPES: dict[str, Callable[..., MappingProvider]] = {}


def register(provider_type: str, factory: Callable[..., MappingProvider]) -> None:
    PROVIDER_TYPES[provider_type] = factory


def build_providers(provider_configs: List[ProviderConfig]) -> List[MappingProvider]:
    providers: List[MappingProvider] = []
    for cfg in provider_configs:
        if cfg.type not in PROVIDER_TYPES:
            raise ValueError(f"unknown provider type '{cfg.type}'")
        providers.append(PROVIDER_TYPES[cfg.type](cfg.id, **cfg.options))
    return providers


from .static import StaticMappingProvider

register("static", lambda name, **opts: StaticMappingProvider.from_options(name, **opts))
