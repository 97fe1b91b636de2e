from typing import Dict, Mapping, Optional, Tuple

from water_server import config
from water_server.errors import ValidationError


def known_players() -> Tuple[str, ...]:
    return config.PLAYERS


def is_known(player) -> bool:
    return isinstance(player, str) and player in config.PLAYERS


def validate_player(player) -> str:
    if not is_known(player):
        raise ValidationError(f"Unknown player: {player!r}")
    return player


def zero_totals() -> Dict[str, int]:
    """Every known player mapped to 0, in participant order."""
    return {p: 0 for p in config.PLAYERS}


def pick_winner(totals: Mapping[str, int]) -> Optional[str]:
    """
    Return the player with the strictly greatest total, or None if nobody drank anything.
    Equal totals go to whoever comes first in the participant ordering.
    """
    winner = None
    best = 0
    for player in config.PLAYERS:
        amount = totals.get(player, 0)
        if amount > best:
            winner, best = player, amount
    return winner
