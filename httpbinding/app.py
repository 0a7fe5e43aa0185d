"""Async runner hosting the HTTP binding."""
from __future__ import annotations

import argparse
import asyncio
import logging
import signal
from typing import List

from prometheus_client import start_http_server

from httpbinding.config import BindingConfig, load_config
from httpbinding.connectors import create_connector
from httpbinding.connectors.base import BaseConnector
from httpbinding.dispatcher import Dispatcher
from httpbinding.executors.base import HttpExecutor
from httpbinding.executors.http import AiohttpExecutor
from httpbinding.messages import CommandEvent
from httpbinding.providers import build_providers
from httpbinding.providers.base import MappingProvider
from httpbinding.registry import ProviderRegistry

log = logging.getLogger("httpbinding")


class HttpBindingService:
    def __init__(self, config: BindingConfig, executor: HttpExecutor | None = None):
        self.config = config
        self.registry = ProviderRegistry()
        self.executor = executor or AiohttpExecutor()
        self.dispatcher = Dispatcher(self.registry, self.executor)
        self.connectors: List[BaseConnector] = []

    async def start(self) -> None:
        await self.executor.start()
        for provider in build_providers(self.config.providers):
            self.add_provider(provider)
        for conn_cfg in self.config.connectors:
            connector = create_connector(conn_cfg, on_command=self.handle_command)
            self.connectors.append(connector)
            await connector.start()
        if self.config.metrics_port is not None:
            start_http_server(self.config.metrics_port)
        log.info("http binding started with %d providers, %d connectors", len(self.registry), len(self.connectors))

    async def stop(self) -> None:
        for connector in self.connectors:
            await connector.stop()
        self.connectors.clear()
        await self.executor.close()
        for provider in self.registry.snapshot():
            self.remove_provider(provider)

    def add_provider(self, provider: MappingProvider) -> None:
        self.dispatcher.add_provider(provider)

    def remove_provider(self, provider: MappingProvider) -> None:
        self.dispatcher.remove_provider(provider)

    def handle_command(self, event: CommandEvent) -> None:
        self.dispatcher.dispatch_event(event)


async def main_async(args) -> None:
    config = load_config(args.config)
    service = HttpBindingService(config)
    await service.start()
    loop = asyncio.get_running_loop()
    stop_event = asyncio.Event()

    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, stop_event.set)
        except NotImplementedError:
            # Windows fallback
            pass

    await stop_event.wait()
    log.info("shutdown requested")
    await service.stop()


def main() -> None:
    parser = argparse.ArgumentParser(description="Send HTTP requests for item commands")
    parser.add_argument("--config", default="config/binding.yaml")
    parser.add_argument("--log-level", default="INFO")
    args = parser.parse_args()
    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")
    try:
        asyncio.run(main_async(args))
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
