from __future__ import annotations

import pytest

from water_server import ledger, resolver, stats
from water_server.errors import ValidationError


def test_one_day_window_with_single_resolution() -> None:
    ledger.append("brielle", 24)
    resolver.resolve_winner()
    assert stats.stats_for_window(1) == {
        "safari": {"total": 0, "wins": 0},
        "brielle": {"total": 24, "wins": 1},
    }


def test_empty_window_is_all_zero() -> None:
    assert stats.stats_for_window() == {
        "safari": {"total": 0, "wins": 0},
        "brielle": {"total": 0, "wins": 0},
    }


def test_window_boundaries() -> None:
    # 7-day window ending 2025-06-14 starts on 2025-06-08
    ledger.append("safari", 50, "2025-06-07")
    ledger.append("safari", 5, "2025-06-08")
    ledger.append("brielle", 6, "2025-06-08")
    ledger.append("brielle", 1, "2025-06-14")
    for day in ("2025-06-07", "2025-06-08"):
        resolver.resolve_winner(day)
    assert stats.stats_for_window(7) == {
        "safari": {"total": 5, "wins": 0},
        "brielle": {"total": 7, "wins": 1},
    }


def test_wins_come_from_stored_records_not_recomputation() -> None:
    ledger.append("safari", 10, "2025-06-13")
    resolver.resolve_winner("2025-06-13")
    # Later entries for that day do not change history until it is resolved again
    ledger.append("brielle", 40, "2025-06-13")
    result = stats.stats_for_window(2)
    assert result["safari"]["wins"] == 1
    assert result["brielle"] == {"total": 40, "wins": 0}


def test_rejects_non_positive_window() -> None:
    with pytest.raises(ValidationError):
        stats.stats_for_window(0)
