"""Connector primitives for ingesting item commands from an event bus."""
from __future__ import annotations

import abc
import asyncio
import contextlib
import logging
from typing import AsyncIterator, Callable, Optional

from httpbinding.messages import CommandEvent

log = logging.getLogger(__name__)


class BaseConnector(abc.ABC):
    def __init__(self, connector_id: str, *, on_command: Callable[[CommandEvent], object]):
        self.connector_id = connector_id
        self._on_command = on_command
        self._task: Optional[asyncio.Task] = None

    async def start(self) -> None:
        if self._task is not None:
            return
        self._task = asyncio.create_task(self._run(), name=f"connector-{self.connector_id}")

    async def stop(self) -> None:
        if self._task:
            self._task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._task
            self._task = None

    async def _run(self) -> None:
        async for event in self.iter_events():
            try:
                self._on_command(event)
            except Exception:
                log.exception("connector %s failed handling command for %s", self.connector_id, event.entity_name)

    @abc.abstractmethod
    def iter_events(self) -> AsyncIterator[CommandEvent]:  # pragma: no cover - interface
        raise NotImplementedError
