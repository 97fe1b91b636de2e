"""
Winner resolution and the winner ledger.

resolve_winner() recomputes a day's totals from the entry ledger and stores
exactly one WinnerRecord per date key. The read-aggregate-write sequence runs
in one transaction and finishes with an INSERT ... ON CONFLICT (date_key)
DO UPDATE, so two concurrent resolutions for the same day still leave a
single row. An append that commits after the totals were read is picked up
the next time that same date key is resolved; recomputing is idempotent.
The scheduled job settles a day only after it has ended (days_ago=1).
"""
import logging
from dataclasses import dataclass
from typing import List, Union

from sqlalchemy import select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session

from water_server import aggregator, players
from water_server.clock import get_clock, parse_date_key
from water_server.config import DEFAULT_WINDOW_DAYS
from water_server.db import session_scope
from water_server.entity.winner_record import WinnerRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Resolution:
    date_key: str
    winner: str
    amount: int


@dataclass(frozen=True)
class NoEntries:
    """Nobody logged anything on date_key, so there is no winner and nothing is stored."""
    date_key: str


def _insert_for(session: Session):
    dialect = session.get_bind().dialect.name
    if dialect == "sqlite":
        return sqlite.insert
    # CockroachDB speaks the PostgreSQL dialect
    return postgresql.insert


def _upsert_winner(session: Session, date_key: str, winner: str, amount: int, computed_at):
    insert = _insert_for(session)
    stmt = insert(WinnerRecord).values(
        date_key=date_key,
        winning_player=winner,
        winning_total=amount,
        computed_at=computed_at,
    )
    stmt = stmt.on_conflict_do_update(
        index_elements=["date_key"],
        set_={
            "winning_player": stmt.excluded.winning_player,
            "winning_total": stmt.excluded.winning_total,
            "computed_at": stmt.excluded.computed_at,
        },
    )
    session.execute(stmt)


def resolve_winner(date_key: str = None, *, clock=None, db: Session = None) -> Union[Resolution, NoEntries]:
    """Decide and store the winner for `date_key` (default: today)."""
    clock = get_clock(clock)
    if date_key is None:
        date_key = clock.date_key()
    else:
        parse_date_key(date_key)

    with session_scope(db) as s:
        totals = aggregator.totals_for_day(date_key, db=s)
        winner = players.pick_winner(totals)
        if winner is None:
            logger.info("No entries on %s, no winner recorded", date_key)
            return NoEntries(date_key)
        _upsert_winner(s, date_key, winner, totals[winner], clock.now())

    logger.info("%s won %s with %d oz", winner, date_key, totals[winner])
    return Resolution(date_key=date_key, winner=winner, amount=totals[winner])


def get_winner(date_key: str, *, db: Session = None):
    parse_date_key(date_key)
    with session_scope(db) as s:
        return s.scalars(select(WinnerRecord).where(WinnerRecord.date_key == date_key)).first()


def list_winners_between(date_from: str, date_to: str, *, db: Session = None) -> List[WinnerRecord]:
    parse_date_key(date_from)
    parse_date_key(date_to)
    stmt = (
        select(WinnerRecord)
        .where(WinnerRecord.date_key >= date_from, WinnerRecord.date_key <= date_to)
        .order_by(WinnerRecord.date_key.desc())
    )
    with session_scope(db) as s:
        return list(s.scalars(stmt).all())


def list_winners(days: int = DEFAULT_WINDOW_DAYS, *, clock=None, db: Session = None) -> List[WinnerRecord]:
    """Winner records for the last `days` days including today, most recent first."""
    date_from, date_to = get_clock(clock).window(days)
    return list_winners_between(date_from, date_to, db=db)
