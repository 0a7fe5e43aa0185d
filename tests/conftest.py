# SPDX-License-Identifier: Apache-2.0
"""Shared fixtures for binding tests."""
from __future__ import annotations

import pytest

from httpbinding.dispatcher import Dispatcher
from httpbinding.registry import ProviderRegistry

from .doubles import RecordingExecutor


@pytest.fixture
def executor() -> RecordingExecutor:
    return RecordingExecutor()


@pytest.fixture
def registry() -> ProviderRegistry:
    return ProviderRegistry()


@pytest.fixture
def dispatcher(registry, executor) -> Dispatcher:
    return Dispatcher(registry, executor)
