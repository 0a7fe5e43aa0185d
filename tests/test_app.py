# SPDX-License-Identifier: Apache-2.0
"""Service wiring from configuration to dispatch."""
from __future__ import annotations

import pytest

from httpbinding.app import HttpBindingService
from httpbinding.config import parse_config
from httpbinding.messages import CommandEvent

from .doubles import RecordingExecutor, StubProvider


@pytest.fixture
def config():
    return parse_config(
        {
            "providers": [
                {"id": "lights", "items": {"Lamp1": {"ON": "GET http://bulb/on"}}},
                {"id": "radio", "type": "static", "items": {"Radio": {"OFF": {"method": "POST", "url": "http://radio/off"}}}},
            ]
        }
    )


@pytest.mark.asyncio
async def test_service_dispatches_configured_bindings(config):
    executor = RecordingExecutor()
    service = HttpBindingService(config, executor=executor)
    await service.start()
    try:
        assert [p.name for p in service.registry] == ["lights", "radio"]
        service.handle_command(CommandEvent("Lamp1", "ON"))
        service.handle_command(CommandEvent("Radio", "OFF"))
        service.handle_command(CommandEvent("Radio", "ON"))
    finally:
        await service.stop()

    assert executor.calls == [("GET", "http://bulb/on", 5000), ("POST", "http://radio/off", 5000)]
    assert len(service.registry) == 0


@pytest.mark.asyncio
async def test_runtime_provider_registration(config):
    executor = RecordingExecutor()
    service = HttpBindingService(config, executor=executor)
    await service.start()
    extra = StubProvider("extra", claims=("Blind",), mappings={("Blind", "UP"): ("PUT", "http://blind/up")})
    try:
        service.add_provider(extra)
        service.handle_command(CommandEvent("Blind", "UP"))
        service.remove_provider(extra)
        service.handle_command(CommandEvent("Blind", "UP"))
    finally:
        await service.stop()

    assert executor.calls == [("PUT", "http://blind/up", 5000)]
