from water_server import aggregator, ledger
from water_server.clock import get_clock
from water_server.errors import ValidationError


def coerce_int(value, name: str) -> int:
    """Accept ints and digit strings from JSON bodies or query strings."""
    if isinstance(value, bool):
        raise ValidationError(f"{name} must be a whole number")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError as e:
            raise ValidationError(f"{name} must be a whole number") from e
    raise ValidationError(f"{name} must be a whole number")


def entry_to_dict(entry):
    return {
        "id": entry.id,
        "player": entry.player,
        "amount": entry.amount,
        "date": entry.date_key,
        "timestamp": entry.created_at.isoformat() if entry.created_at else None,
    }


def record_intake(player: str = None, amount=None):
    """Add `amount` oz for `player` to today's tally."""
    if not player or amount is None:
        raise ValidationError("Invalid player or amount")
    amount = coerce_int(amount, "amount")
    entry_id = ledger.append(player, amount)
    return {"success": True, "id": entry_id, "message": f"Added {amount} oz for {player}"}


def get_today():
    return aggregator.totals_for_day(get_clock().date_key())


def list_entries(start_date: str = None, end_date: str = None, player: str = None):
    entries = ledger.list_entries(date_from=start_date or None, date_to=end_date or None, player=player or None)
    return {"entries": [entry_to_dict(e) for e in entries]}
