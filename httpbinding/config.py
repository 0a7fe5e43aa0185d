"""Configuration loader for the HTTP binding service."""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml


class ConfigLoader(yaml.SafeLoader):
    """SafeLoader that only treats true/false as booleans, so command keys like ON/OFF stay strings."""


ConfigLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != "tag:yaml.org,2002:bool"]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}
ConfigLoader.add_implicit_resolver(
    "tag:yaml.org,2002:bool",
    re.compile(r"^(?:true|True|TRUE|false|False|FALSE)$"),
    list("tTfF"),
)


@dataclass(slots=True)
class ProviderConfig:
    id: str
    type: str
    options: Dict[str, Any] = field(default_factory=dict)


@dataclass(slots=True)
class ConnectorConfig:
    id: str
    type: str
    options: Dict[str, Any] = field(default_factory=dict)


@dataclass(slots=True)
class BindingConfig:
    version: int
    providers: List[ProviderConfig]
    connectors: List[ConnectorConfig]
    metrics_port: Optional[int] = None


def _split_entry(kind: str, item: Any) -> tuple[str, str, Dict[str, Any]]:
    if not isinstance(item, dict):
        raise ValueError(f"{kind} entries must be mappings")
    if "id" not in item:
        raise ValueError(f"{kind} entry missing 'id'")
    entry_id = str(item["id"])
    entry_type = item.get("type", "static" if kind == "provider" else entry_id)
    options = {k: v for k, v in item.items() if k not in {"id", "type"}}
    return entry_id, entry_type, options


def _parse_providers(items: List[Dict[str, Any]]) -> List[ProviderConfig]:
    providers: List[ProviderConfig] = []
    seen: set[str] = set()
    for item in items:
        provider_id, provider_type, options = _split_entry("provider", item)
        if provider_id in seen:
            raise ValueError(f"duplicate provider id '{provider_id}'")
        seen.add(provider_id)
        providers.append(ProviderConfig(id=provider_id, type=provider_type, options=options))
    return providers


def _parse_connectors(items: List[Dict[str, Any]]) -> List[ConnectorConfig]:
    connectors: List[ConnectorConfig] = []
    for item in items:
        connector_id, connector_type, options = _split_entry("connector", item)
        connectors.append(ConnectorConfig(id=connector_id, type=connector_type, options=options))
    return connectors


def parse_config(raw: Dict[str, Any] | None) -> BindingConfig:
    raw = raw or {}
    metrics_port = raw.get("metrics_port")
    return BindingConfig(
        version=int(raw.get("version", 1)),
        providers=_parse_providers(raw.get("providers", []) or []),
        connectors=_parse_connectors(raw.get("connectors", []) or []),
        metrics_port=int(metrics_port) if metrics_port is not None else None,
    )


def load_config(path: str | Path) -> BindingConfig:
    return parse_config(yaml.load(Path(path).read_text(), Loader=ConfigLoader))
