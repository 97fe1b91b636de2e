from __future__ import annotations

import datetime

import pytest

from water_server import clock
from water_server.errors import ValidationError


def test_parse_and_format_date_key() -> None:
    day = clock.parse_date_key("2025-01-09")
    assert day == datetime.date(2025, 1, 9)
    assert clock.format_date_key(day) == "2025-01-09"


@pytest.mark.parametrize("bad", ["2025-1-9", "2025/01/09", "2025-02-30", "", None, 20250109, "2025-01-09T00:00"])
def test_parse_date_key_rejects_malformed(bad) -> None:
    with pytest.raises(ValidationError):
        clock.parse_date_key(bad)


def test_fixed_clock_steps_forward_on_each_read() -> None:
    c = clock.FixedClock.on("2025-06-14", step=datetime.timedelta(seconds=5))
    first = c.now()
    second = c.now()
    assert second - first == datetime.timedelta(seconds=5)
    assert c.date_key() == "2025-06-14"


def test_window_is_inclusive_and_ends_today() -> None:
    c = clock.FixedClock.on("2025-03-02")
    assert c.window(1) == ("2025-03-02", "2025-03-02")
    assert c.window(3) == ("2025-02-28", "2025-03-02")
    assert c.window(30) == ("2025-01-31", "2025-03-02")


@pytest.mark.parametrize("days", [0, -3, True, "7", 2.5])
def test_window_rejects_non_positive_or_non_integer(days) -> None:
    with pytest.raises(ValidationError):
        clock.FixedClock.on("2025-03-02").window(days)


def test_system_clock_returns_aware_local_time() -> None:
    c = clock.SystemClock()
    assert c.now().tzinfo is not None
    clock.parse_date_key(c.date_key())


def test_get_clock_prefers_explicit_clock(fixed_clock) -> None:
    other = clock.FixedClock.on("2020-01-01")
    assert clock.get_clock() is fixed_clock
    assert clock.get_clock(other) is other
