import io
import json
from typing import Any, Callable, Dict, Iterator, List

import pytest
import structlog

from lazylog import runtime
from lazylog.runtime import LoggingRuntime


@pytest.fixture(autouse=True)
def fresh_runtime(monkeypatch: pytest.MonkeyPatch) -> Iterator[LoggingRuntime]:
    """Give every test its own process-default runtime."""
    isolated = LoggingRuntime()
    monkeypatch.setattr(runtime, "_default_runtime", isolated)
    yield isolated
    structlog.reset_defaults()


@pytest.fixture
def sink() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def records(sink: io.StringIO) -> Callable[[], List[Dict[str, Any]]]:
    """Parse the JSON lines written to ``sink`` so far."""

    def _read() -> List[Dict[str, Any]]:
        return [json.loads(line) for line in sink.getvalue().splitlines() if line]

    return _read
