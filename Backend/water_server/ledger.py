"""
Entry ledger: append-only store of intake events.

Entries are never updated or deleted here. Every read goes straight to the
database so results always reflect the current ledger.
"""
import logging
from typing import Dict, List

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from water_server import players
from water_server.clock import get_clock, parse_date_key
from water_server.db import session_scope
from water_server.entity.intake_entry import IntakeEntry
from water_server.errors import ValidationError

logger = logging.getLogger(__name__)


def _validate_amount(amount) -> int:
    if isinstance(amount, bool) or not isinstance(amount, int) or amount <= 0:
        raise ValidationError(f"Amount must be a positive whole number of ounces, got {amount!r}")
    return amount


def append(player: str, amount: int, date_key: str = None, *, clock=None, db: Session = None) -> str:
    """
    Record `amount` ounces for `player` on `date_key` (default: today).
    Returns the new entry id.
    """
    players.validate_player(player)
    _validate_amount(amount)
    clock = get_clock(clock)
    if date_key is None:
        date_key = clock.date_key()
    else:
        parse_date_key(date_key)

    with session_scope(db) as s:
        entry = IntakeEntry(player=player, amount=amount, date_key=date_key, created_at=clock.now())
        s.add(entry)
        s.flush()  # Assigns id
        entry_id = entry.id
    logger.info("Recorded %d oz for %s on %s (%s)", amount, player, date_key, entry_id)
    return entry_id


def list_entries(date_from: str = None, date_to: str = None, player: str = None, *, db: Session = None) -> List[IntakeEntry]:
    """Entries matching every given filter, newest day first, then newest entry first."""
    stmt = select(IntakeEntry)
    if date_from is not None:
        parse_date_key(date_from)
        stmt = stmt.where(IntakeEntry.date_key >= date_from)
    if date_to is not None:
        parse_date_key(date_to)
        stmt = stmt.where(IntakeEntry.date_key <= date_to)
    if player is not None:
        stmt = stmt.where(IntakeEntry.player == player)
    stmt = stmt.order_by(IntakeEntry.date_key.desc(), IntakeEntry.created_at.desc())

    with session_scope(db) as s:
        return list(s.scalars(stmt).all())


def sum_by_player(date_from: str, date_to: str, *, db: Session = None) -> Dict[str, int]:
    """Total ounces per known player between the two keys, inclusive. Missing players get 0."""
    parse_date_key(date_from)
    parse_date_key(date_to)
    stmt = (
        select(IntakeEntry.player, func.sum(IntakeEntry.amount))
        .where(IntakeEntry.date_key >= date_from, IntakeEntry.date_key <= date_to)
        .group_by(IntakeEntry.player)
    )
    totals = players.zero_totals()
    with session_scope(db) as s:
        for player, total in s.execute(stmt).all():
            if player in totals:
                totals[player] = int(total or 0)
    return totals
