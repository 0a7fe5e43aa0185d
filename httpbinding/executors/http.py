"""aiohttp executor issuing bare HTTP requests in the background."""
from __future__ import annotations

import asyncio
import logging
import time
from typing import Set

import aiohttp

from httpbinding.metrics import HTTP_LATENCY, HTTP_REQUESTS

from .base import SUPPORTED_METHODS, HttpExecutor

log = logging.getLogger(__name__)


class AiohttpExecutor(HttpExecutor):
    """Schedules each request as a task on the loop it was started on.

    ``execute`` is safe to call from any thread; the request itself always
    runs on the bound loop.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None):
        self._loop = loop
        self._session: aiohttp.ClientSession | None = None
        self._lock = asyncio.Lock()
        self._tasks: Set[asyncio.Task] = set()
        self._closed = False

    async def start(self) -> None:
        self._loop = asyncio.get_running_loop()
        self._closed = False

    async def _ensure(self) -> aiohttp.ClientSession:
        async with self._lock:
            if self._session is not None:
                return self._session
            self._session = aiohttp.ClientSession()
            return self._session

    def execute(self, method: str, url: str, timeout_ms: int) -> None:
        method = method.strip().upper()
        if method not in SUPPORTED_METHODS:
            log.error("unsupported http method '%s' for %s", method, url)
            HTTP_REQUESTS.labels(method, "unsupported").inc()
            return
        if self._closed:
            log.error("http executor closed; dropping %s %s", method, url)
            HTTP_REQUESTS.labels(method, "dropped").inc()
            return
        loop = self._loop
        if loop is None or loop.is_closed():
            log.error("http executor not started; dropping %s %s", method, url)
            HTTP_REQUESTS.labels(method, "dropped").inc()
            return
        try:
            loop.call_soon_threadsafe(self._spawn, method, url.strip(), timeout_ms)
        except RuntimeError:
            log.error("event loop closed; dropping %s %s", method, url)
            HTTP_REQUESTS.labels(method, "dropped").inc()

    def _spawn(self, method: str, url: str, timeout_ms: int) -> None:
        if self._closed:
            log.error("http executor closed; dropping %s %s", method, url)
            HTTP_REQUESTS.labels(method, "dropped").inc()
            return
        task = asyncio.get_running_loop().create_task(self._request(method, url, timeout_ms), name=f"http-{method}")
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _request(self, method: str, url: str, timeout_ms: int) -> None:
        timeout = aiohttp.ClientTimeout(total=timeout_ms / 1000)
        start = time.perf_counter()
        try:
            session = await self._ensure()
            async with session.request(method, url, timeout=timeout) as resp:
                if resp.status >= 400:
                    body = await resp.text()
                    log.error("%s %s failed status=%s body=%s", method, url, resp.status, body[:200])
                    result = "http_error"
                else:
                    log.debug("%s %s -> %s", method, url, resp.status)
                    result = "ok"
        except asyncio.TimeoutError:
            log.warning("%s %s timed out after %sms", method, url, timeout_ms)
            result = "timeout"
        except aiohttp.ClientError as exc:
            log.error("%s %s failed: %s", method, url, exc)
            result = "client_error"
        except Exception:
            log.exception("%s %s failed unexpectedly", method, url)
            result = "error"
        HTTP_REQUESTS.labels(method, result).inc()
        HTTP_LATENCY.labels(method).observe((time.perf_counter() - start) * 1000)

    async def drain(self) -> None:
        """Wait for every request scheduled so far."""
        # Requests handed over via call_soon_threadsafe become tasks on the next loop iteration.
        await asyncio.sleep(0)
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def close(self) -> None:
        await self.drain()
        self._closed = True
        if self._session:
            await self._session.close()
            self._session = None
