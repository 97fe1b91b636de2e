# dispatcher.py
import hmac
import inspect
import json
import logging
from typing import Any, Dict, Optional

from water_server import accounts, config, contest, health, intake
from water_server.errors import StorageError, ValidationError

logger = logging.getLogger(__name__)

# --- Registry ---------------------------------------------------------------

FUNCTIONS = {
    # Accounts
    "login": accounts.login,

    # Intake
    "recordIntake": intake.record_intake,
    "getToday": intake.get_today,
    "listEntries": intake.list_entries,

    # Contest
    "getStats": contest.get_stats,
    "listWinners": contest.list_winners,
    "calculateWinner": contest.calculate_winner,

    # Ops
    "health": health.health,
}

# --- Central policy (coarse-grained) ---------------------------------------

# Any signed-in contestant may log intake for either player.
REQUIRES_AUTH = {
    "recordIntake",
    "calculateWinner",
}

# --- Auth helpers -----------------------------------------------------------

def _unauthorized(msg="unauthorized", code="UNAUTHORIZED", status=401):
    return {"error": msg, "code": code, "status": status}

def _bad_request(msg="bad request", code="BAD_REQUEST", status=400):
    return {"error": msg, "code": code, "status": status}

def build_auth_context(headers: Dict[str, str], cookies: Dict[str, str]) -> Optional[Dict[str, Any]]:
    """
    Return a verified auth context dict or None.
    Accepts either:
      - Bearer JWT issued by `login`, or
      - Bearer ADMIN_SERVICE_TOKEN used by the midnight scheduler.
    A 'session' cookie carrying the same JWT is accepted as a fallback.
    """
    token = None
    authz = headers.get("authorization") or headers.get("Authorization")
    if authz and authz.lower().startswith("bearer "):
        token = authz.split(" ", 1)[1].strip()
    elif cookies.get("session"):
        token = cookies["session"]
    if not token:
        return None

    service_token = config.get_admin_token()
    if service_token and hmac.compare_digest(token.encode("utf-8"), service_token.encode("utf-8")):
        return {"player": None, "role": "service"}

    return accounts.verify_session_token(token)

def _enforce_policy(func_name: str, auth: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    """Return an error dict if policy fails, else None."""
    if func_name in REQUIRES_AUTH and not auth:
        return _unauthorized()
    return None

def _bind_args(fn, args: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    try:
        inspect.signature(fn).bind(**args)
    except TypeError as e:
        return _bad_request(f"Invalid arguments: {e}")
    return None

# --- Core dispatcher --------------------------------------------------------

def handle(event_body: str, *, headers: Optional[Dict[str, str]] = None, cookies: Optional[Dict[str, str]] = None):
    """
    Dispatcher entrypoint.
    - event_body: JSON string: {"func":"...", "args": {...}}
    - headers/cookies: pass raw request headers/cookies from AWS/GCP (used for auth)
    Returns a dict result or error dict (with optional status).
    """
    headers = headers or {}
    cookies = cookies or {}

    try:
        req = json.loads(event_body)
    except (TypeError, ValueError):
        return _bad_request("invalid JSON")
    if not isinstance(req, dict):
        return _bad_request("invalid JSON")

    func_name = req.get("func")
    args = req.get("args", {}) or {}
    if not func_name or func_name not in FUNCTIONS:
        return _bad_request(f"Unknown function: {func_name}")
    if not isinstance(args, dict):
        return _bad_request("args must be an object")

    auth_ctx = build_auth_context(headers, cookies)

    policy_err = _enforce_policy(func_name, auth_ctx)
    if policy_err:
        return policy_err

    fn = FUNCTIONS[func_name]
    arg_err = _bind_args(fn, args)
    if arg_err:
        return arg_err

    try:
        return fn(**args)
    except ValidationError as e:
        return {"error": str(e), "code": "VALIDATION", "status": 400}
    except StorageError:
        logger.exception("Database error in %s", func_name)
        return {"error": "Database error", "code": "DATABASE", "status": 500}
    except Exception:
        logger.exception("Unhandled error in %s", func_name)
        return {"error": "Internal server error", "code": "INTERNAL", "status": 500}
