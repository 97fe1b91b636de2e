from __future__ import annotations

import datetime

import pytest

from water_server import clock, db


@pytest.fixture(autouse=True)
def database():
    engine = db.configure_engine("sqlite://")
    db.init_db()
    yield engine
    db.SessionLocal.remove()
    db.drop_db()


@pytest.fixture(autouse=True)
def fixed_clock():
    previous = clock.get_clock()
    c = clock.FixedClock.on("2025-06-14", step=datetime.timedelta(seconds=1))
    clock.set_clock(c)
    yield c
    clock.set_clock(previous)
