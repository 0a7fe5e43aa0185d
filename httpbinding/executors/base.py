# SPDX-License-Identifier: Apache-2.0
"""Outbound HTTP executor interface."""
from __future__ import annotations

SUPPORTED_METHODS = frozenset({"GET", "PUT", "POST", "DELETE"})


class HttpExecutor:
    async def start(self) -> None:
        """Optional async initialisation."""

    async def close(self) -> None:
        """Optional async teardown."""

    def execute(self, method: str, url: str, timeout_ms: int) -> None:  # pragma: no cover - interface
        """Issue ``method url`` without waiting for the response."""
        raise NotImplementedError
