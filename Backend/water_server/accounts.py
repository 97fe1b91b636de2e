import datetime
import hmac
import logging
from typing import Any, Dict, Optional

import jwt

from water_server import config, players

logger = logging.getLogger(__name__)


def login(username: str = None, password: str = None):
    """
    Check a username/password against the configured contestant credentials
    and issue a JWT session token naming the player.
    """
    if not isinstance(username, str) or not isinstance(password, str) or not username or not password:
        return {"error": "Missing username or password", "code": "BAD_REQUEST", "status": 400}
    username = username.strip().lower()
    expected = config.parse_credentials().get(username)
    matches = expected is not None and hmac.compare_digest(expected.encode("utf-8"), password.encode("utf-8"))
    if not matches or not players.is_known(username):
        logger.info("Rejected login for %r", username)
        return {"error": "Invalid credentials", "code": "UNAUTHORIZED", "status": 401}

    payload = {
        "player": username,
        "exp": datetime.datetime.now(datetime.timezone.utc) + datetime.timedelta(seconds=config.JWT_EXPIRY_SECONDS),
    }
    session_token = jwt.encode(payload, config.JWT_SECRET, algorithm=config.JWT_ALGORITHM)
    return {"message": "Login successful", "player": username, "session_token": session_token}


def verify_session_token(token: str) -> Optional[Dict[str, Any]]:
    """Return {"player": ...} for a valid, unexpired token, else None."""
    try:
        claims = jwt.decode(token, config.JWT_SECRET, algorithms=[config.JWT_ALGORITHM])
    except jwt.InvalidTokenError:
        return None
    player = claims.get("player")
    if not players.is_known(player):
        return None
    return {"player": player, "role": "player"}
