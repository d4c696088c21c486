import logging

import pytest

from lazylog.levels import DEFAULT_LEVEL, Level, parse_level, try_parse_level


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("trace", Level.TRACE),
        ("DEBUG", Level.DEBUG),
        (" Info ", Level.INFO),
        ("warn", Level.WARN),
        ("warning", Level.WARN),
        ("error", Level.ERROR),
        ("critical", Level.FATAL),
        ("panic", Level.PANIC),
        (30, Level.WARN),
        (Level.ERROR, Level.ERROR),
    ],
)
def test_parse_level_accepts_names_aliases_and_numbers(raw: object, expected: Level) -> None:
    assert parse_level(raw) is expected  # type: ignore[arg-type]


def test_unknown_levels_fall_back_to_default() -> None:
    assert parse_level("verbose") is DEFAULT_LEVEL
    assert parse_level("verbose", default=Level.INFO) is Level.INFO
    assert try_parse_level("verbose") is None
    assert try_parse_level(31) is None
    assert try_parse_level(True) is None


def test_levels_are_ordered_by_severity() -> None:
    ordered = [Level.TRACE, Level.DEBUG, Level.INFO, Level.WARN, Level.ERROR, Level.FATAL, Level.PANIC]
    assert sorted(ordered) == ordered
    assert DEFAULT_LEVEL is Level.TRACE


def test_engine_mapping_uses_stdlib_levels() -> None:
    assert Level.TRACE.engine_level == logging.NOTSET
    assert Level.WARN.engine_level == logging.WARNING
    assert Level.FATAL.method_name == "critical"
    assert Level.TRACE.method_name == "debug"
    assert Level.WARN.label == "warn"
