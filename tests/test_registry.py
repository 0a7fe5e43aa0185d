# SPDX-License-Identifier: Apache-2.0
"""Provider registry set semantics and concurrent use."""
from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor

from httpbinding.dispatcher import DispatchOutcome, Dispatcher
from httpbinding.registry import ProviderRegistry

from .doubles import RecordingExecutor, StubProvider


def test_add_is_idempotent():
    registry = ProviderRegistry()
    provider = StubProvider("p")

    assert registry.add(provider) is True
    assert registry.add(provider) is False
    assert len(registry) == 1
    assert provider in registry


def test_remove_absent_is_noop():
    registry = ProviderRegistry()
    registry.add(StubProvider("kept"))

    assert registry.remove(StubProvider("other")) is False
    assert len(registry) == 1


def test_iteration_follows_insertion_order():
    a, b, c = StubProvider("a"), StubProvider("b"), StubProvider("c")
    registry = ProviderRegistry([a, b, c])
    registry.remove(b)
    registry.add(b)

    assert [p.name for p in registry] == ["a", "c", "b"]


def test_snapshot_unaffected_by_later_mutation():
    a, b = StubProvider("a"), StubProvider("b")
    registry = ProviderRegistry([a])
    snapshot = registry.snapshot()

    registry.add(b)
    registry.remove(a)

    assert snapshot == (a,)
    assert registry.snapshot() == (b,)


def test_concurrent_mutation_during_dispatch():
    executor = RecordingExecutor()
    registry = ProviderRegistry()
    anchor = StubProvider("anchor", claims=("Lamp1",), mappings={("Lamp1", "ON"): ("GET", "http://bulb/on")})
    registry.add(anchor)
    dispatcher = Dispatcher(registry, executor)
    stop = threading.Event()
    errors: list[BaseException] = []

    def churn(worker: int) -> None:
        extras = [StubProvider(f"extra-{worker}-{i}", claims=("Lamp1",)) for i in range(10)]
        try:
            while not stop.is_set():
                for provider in extras:
                    registry.add(provider)
                for provider in extras:
                    registry.remove(provider)
        except BaseException as exc:  # pragma: no cover - reported below
            errors.append(exc)

    def fire(_: int) -> DispatchOutcome:
        return dispatcher.dispatch("Lamp1", "ON")

    mutators = [threading.Thread(target=churn, args=(i,)) for i in range(4)]
    for thread in mutators:
        thread.start()
    try:
        with ThreadPoolExecutor(max_workers=8) as pool:
            outcomes = list(pool.map(fire, range(2000)))
    finally:
        stop.set()
        for thread in mutators:
            thread.join()

    assert errors == []
    assert set(outcomes) == {DispatchOutcome.EXECUTED}
    assert len(executor.calls) == 2000
    assert set(executor.calls) == {("GET", "http://bulb/on", 5000)}
    assert registry.snapshot() == (anchor,)
