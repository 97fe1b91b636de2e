from __future__ import annotations

import datetime

import jwt
import pytest

from water_server import accounts, config


def test_login_issues_token_for_known_contestant() -> None:
    result = accounts.login("Safari", "water123")
    assert result["player"] == "safari"
    assert accounts.verify_session_token(result["session_token"]) == {"player": "safari", "role": "player"}


@pytest.mark.parametrize(
    "username,password,status",
    [
        ("safari", "wrong", 401),
        ("mallory", "water123", 401),
        ("", "water123", 400),
        ("brielle", None, 400),
    ],
)
def test_login_rejections(username, password, status) -> None:
    result = accounts.login(username, password)
    assert result["status"] == status
    assert "session_token" not in result


def test_credentials_for_non_player_are_refused(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(config, "CREDENTIALS", "safari:water123,ghost:boo")
    assert accounts.login("ghost", "boo")["status"] == 401


def test_parse_credentials_skips_malformed_pairs() -> None:
    assert config.parse_credentials("a:1, b:2:3,broken") == {"a": "1", "b": "2:3"}


def test_verify_rejects_expired_and_foreign_tokens() -> None:
    expired = jwt.encode(
        {"player": "safari", "exp": datetime.datetime.now(datetime.timezone.utc) - datetime.timedelta(seconds=5)},
        config.JWT_SECRET,
        algorithm=config.JWT_ALGORITHM,
    )
    forged = jwt.encode({"player": "safari"}, "not-the-secret", algorithm=config.JWT_ALGORITHM)
    stranger = jwt.encode({"player": "mallory"}, config.JWT_SECRET, algorithm=config.JWT_ALGORITHM)
    assert accounts.verify_session_token(expired) is None
    assert accounts.verify_session_token(forged) is None
    assert accounts.verify_session_token(stranger) is None
    assert accounts.verify_session_token("garbage") is None


@pytest.mark.parametrize("password", ["päss", "water123é", "水"])
def test_non_ascii_password_is_rejected_not_crashing(password) -> None:
    result = accounts.login("safari", password)
    assert (result["status"], result["code"]) == (401, "UNAUTHORIZED")


@pytest.mark.parametrize("username,password", [(42, "water123"), (["safari"], "water123"), ("safari", 123)])
def test_non_string_credentials_are_bad_request(username, password) -> None:
    assert accounts.login(username, password)["status"] == 400
