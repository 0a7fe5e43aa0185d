"""Connector factory."""
from __future__ import annotations

from typing import Callable

from httpbinding.config import ConnectorConfig

from .base import BaseConnector


CONNECTOR_TYPES: dict[str, Callable[..., BaseConnector]] = {}


def register(conn_type: str, factory: Callable[..., BaseConnector]) -> None:
    CONNECTOR_TYPES[conn_type] = factory


def create_connector(cfg: ConnectorConfig, *, on_command) -> BaseConnector:
    if cfg.type not in CONNECTOR_TYPES:
        raise ValueError(f"unknown connector type '{cfg.type}'")
    return CONNECTOR_TYPES[cfg.type](cfg.id, cfg.options, on_command=on_command)


from .mqtt import MQTTCommandConnector

register("mqtt", lambda connector_id, options, on_command: MQTTCommandConnector(connector_id, options, on_command=on_command))
