from typing import Dict

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from water_server import aggregator, players
from water_server.clock import get_clock
from water_server.config import DEFAULT_WINDOW_DAYS
from water_server.db import session_scope
from water_server.entity.winner_record import WinnerRecord


def count_wins(date_from: str, date_to: str, *, db: Session = None) -> Dict[str, int]:
    """Stored wins per known player in the window. History is never recomputed here."""
    stmt = (
        select(WinnerRecord.winning_player, func.count(WinnerRecord.id))
        .where(WinnerRecord.date_key >= date_from, WinnerRecord.date_key <= date_to)
        .group_by(WinnerRecord.winning_player)
    )
    wins = players.zero_totals()
    with session_scope(db) as s:
        for player, count in s.execute(stmt).all():
            if player in wins:
                wins[player] = int(count)
    return wins


def stats_for_window(days: int = DEFAULT_WINDOW_DAYS, *, clock=None, db: Session = None) -> Dict[str, Dict[str, int]]:
    """
    Per-player {"total", "wins"} over the last `days` days including today.
    Totals come from the entry ledger, wins from stored winner records.
    """
    date_from, date_to = get_clock(clock).window(days)
    with session_scope(db) as s:
        totals = aggregator.totals_for_range(date_from, date_to, db=s)
        wins = count_wins(date_from, date_to, db=s)
    return {p: {"total": totals[p], "wins": wins[p]} for p in players.known_players()}
