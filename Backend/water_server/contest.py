from water_server import resolver, stats
from water_server.clock import get_clock, parse_date_key
from water_server.config import DEFAULT_WINDOW_DAYS
from water_server.intake import coerce_int
from water_server.resolver import NoEntries


def winner_to_dict(record):
    return {
        "id": record.id,
        "date": record.date_key,
        "player": record.winning_player,
        "total_amount": record.winning_total,
        "timestamp": record.computed_at.isoformat() if record.computed_at else None,
    }


def get_stats(days=DEFAULT_WINDOW_DAYS):
    return stats.stats_for_window(coerce_int(days, "days"))


def list_winners(days=DEFAULT_WINDOW_DAYS):
    records = resolver.list_winners(coerce_int(days, "days"))
    return {"winners": [winner_to_dict(r) for r in records]}


def calculate_winner(date: str = None, days_ago=0):
    """
    Decide the winner for `date`, or for the day `days_ago` days before today.
    The midnight scheduler passes days_ago=1 to settle the day that just ended.
    """
    clock = get_clock()
    if date is not None:
        parse_date_key(date)
        date_key = date
    else:
        date_key = clock.days_ago_key(coerce_int(days_ago, "days_ago"))
    day = "today" if date_key == clock.date_key() else date_key

    result = resolver.resolve_winner(date_key)
    if isinstance(result, NoEntries):
        return {"message": f"No entries for {day}", "date": result.date_key}
    return {
        "winner": result.winner,
        "amount": result.amount,
        "date": result.date_key,
        "message": f"{result.winner} won {day} with {result.amount} oz!",
    }
