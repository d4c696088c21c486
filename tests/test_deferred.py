import json
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List

import pytest
from pydantic import BaseModel

from lazylog.deferred import Deferred, as_error, as_iso_time, as_json, defer, last
from lazylog.formatters import INVALID


@dataclass
class Order:
    id: int
    items: List[str]


class Customer(BaseModel):
    name: str
    tier: int


class AccessDenied(Exception):
    def __init__(self, message: str, code: int) -> None:
        super().__init__(message)
        self.code = code

    def to_dict(self) -> Dict[str, Any]:
        return {"code": self.code, "reason": "missing scope"}


class BrokenPayload(Exception):
    def to_dict(self) -> Dict[str, Any]:
        raise RuntimeError("cannot build payload")


def test_as_json_is_stable_and_valid() -> None:
    payload = {"b": [1, 2, 3], "a": {"nested": True}}
    value = as_json(payload)
    first, second = value(), value()
    assert first == second
    assert json.loads(first) == payload
    assert first.index('"a"') < first.index('"b"')
    assert "\n  " in first


def test_as_json_of_none_is_empty() -> None:
    assert as_json(None)() == ""


@pytest.mark.parametrize("bad", [{"handle": object()}, float("nan"), {(1, 2): "tuple key"}])
def test_as_json_unserializable_is_invalid(bad: Any) -> None:
    assert as_json(bad)() == INVALID


def test_as_json_handles_dataclasses_and_models() -> None:
    assert json.loads(as_json(Order(id=7, items=["a"]))()) == {"id": 7, "items": ["a"]}
    assert json.loads(as_json(Customer(name="ada", tier=2))()) == {"name": "ada", "tier": 2}


def test_as_iso_time_renders_rfc3339() -> None:
    utc = datetime(2024, 3, 1, 12, 30, 45, 123456, tzinfo=timezone.utc)
    assert as_iso_time(utc)() == "2024-03-01T12:30:45Z"
    plus_two = datetime(2024, 3, 1, 12, 30, 45, tzinfo=timezone(timedelta(hours=2)))
    assert as_iso_time(plus_two)() == "2024-03-01T12:30:45+02:00"


def test_as_iso_time_without_argument_captures_wrap_time() -> None:
    before = datetime.now(timezone.utc).replace(microsecond=0)
    value = as_iso_time()
    rendered = value()
    assert rendered == value()
    parsed = datetime.fromisoformat(rendered.replace("Z", "+00:00"))
    assert before <= parsed <= datetime.now(timezone.utc)


def test_as_error_plain_message() -> None:
    assert as_error(ValueError("boom"))() == "boom"
    assert as_error(ValueError())() == "ValueError"
    assert as_error(None)() == ""


def test_as_error_with_structured_payload() -> None:
    rendered = as_error(AccessDenied("denied", 403))()
    assert rendered == 'denied: {"code":403,"reason":"missing scope"}'


def test_as_error_payload_failure_falls_back_to_message() -> None:
    assert as_error(BrokenPayload("broken"))() == "broken"


def test_last_keeps_tail() -> None:
    assert last("abcdef", 3)() == "def"
    assert last("ab", 10)() == "ab"
    assert last("abc", 0)() == ""
    assert last(None, 4)() == ""


def test_defer_runs_only_when_materialized() -> None:
    calls: List[int] = []

    def expensive(x: int) -> int:
        calls.append(x)
        return x * 2

    value = defer(expensive, 21)
    assert calls == []
    assert value() == "42"
    assert str(value) == "42"
    assert calls == [21, 21]


def test_deferred_requires_callable() -> None:
    with pytest.raises(TypeError):
        Deferred("not callable")  # type: ignore[arg-type]
    assert "Deferred(" in repr(Deferred(lambda: "x"))
