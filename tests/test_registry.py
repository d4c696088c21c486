import threading
from datetime import datetime, timezone
from typing import Any, List

import pytest

from lazylog.formatters import stringify, to_iso_time, to_json
from lazylog.registry import FormatterRegistry


class Payload(dict):
    pass


class Clock:
    def isoformat(self) -> str:
        return "tick"


class Ticket:
    def to_log_string(self, hint: str) -> str:
        return "ticket"


def _upper(value: Any, hint: str) -> str:
    return str(value).upper()


def _lower(value: Any, hint: str) -> str:
    return str(value).lower()


def test_seeded_formatters_resolve() -> None:
    registry = FormatterRegistry()
    assert registry.resolve(datetime) == (to_iso_time, True)
    assert registry.resolve(dict) == (to_json, True)
    assert registry.resolve(str) == (None, False)
    assert registry.resolve(int) == (None, False)


def test_unseeded_registry_is_empty() -> None:
    registry = FormatterRegistry(seed=False)
    assert len(registry) == 0
    assert registry.resolve(datetime) == (None, False)


def test_subclasses_and_capabilities_resolve() -> None:
    registry = FormatterRegistry()
    assert registry.resolve(Payload) == (to_json, True)
    assert registry.resolve(Clock) == (to_iso_time, True)
    assert registry.resolve(Ticket) == (stringify, True)


def test_registration_overrides_builtin_and_last_wins() -> None:
    registry = FormatterRegistry()
    registry.register(datetime, _upper)
    assert registry.resolve(datetime) == (_upper, True)
    registry.register(datetime, _lower)
    assert registry.resolve(datetime) == (_lower, True)
    assert registry.snapshot()[datetime] is _lower


def test_registration_invalidates_cached_resolution() -> None:
    registry = FormatterRegistry()
    assert registry.resolve(Payload) == (to_json, True)
    registry.register(Payload, _upper)
    assert registry.resolve(Payload) == (_upper, True)


def test_register_validates_arguments() -> None:
    registry = FormatterRegistry()
    with pytest.raises(TypeError):
        registry.register("datetime", _upper)  # type: ignore[arg-type]
    with pytest.raises(TypeError):
        registry.register(int, "not callable")  # type: ignore[arg-type]


def test_format_applies_resolved_formatter() -> None:
    registry = FormatterRegistry()
    moment = datetime(2024, 5, 6, 7, 8, 9, tzinfo=timezone.utc)
    assert registry.format(moment) == "2024-05-06T07:08:09Z"
    assert registry.format("plain") is None


def test_concurrent_register_and_resolve_keep_every_update() -> None:
    registry = FormatterRegistry()
    workers, per_worker = 8, 50
    keys = [
        [type(f"Key{w}_{i}", (), {}) for i in range(per_worker)] for w in range(workers)
    ]
    failures: List[str] = []
    start = threading.Barrier(workers)

    def work(index: int) -> None:
        start.wait()
        for key in keys[index]:
            registry.register(key, _upper)
            formatter, found = registry.resolve(key)
            if not found or formatter is not _upper:
                failures.append(key.__name__)
            registry.resolve(datetime)

    threads = [threading.Thread(target=work, args=(w,)) for w in range(workers)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert failures == []
    snapshot = registry.snapshot()
    for group in keys:
        for key in group:
            assert snapshot[key] is _upper
    assert registry.resolve(datetime) == (to_iso_time, True)
