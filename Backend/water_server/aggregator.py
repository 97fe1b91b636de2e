from typing import Dict

from sqlalchemy.orm import Session

from water_server import ledger


def totals_for_day(date_key: str, *, db: Session = None) -> Dict[str, int]:
    return ledger.sum_by_player(date_key, date_key, db=db)


def totals_for_range(date_from: str, date_to: str, *, db: Session = None) -> Dict[str, int]:
    return ledger.sum_by_player(date_from, date_to, db=db)
