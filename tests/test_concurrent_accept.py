import threading
import time as clock
from datetime import time

import pytest

from app import create_app
from config import TestConfig
from models import db
from models.booking import Booking, ACCEPTED
from services import booking_engine, conflicts
from services.errors import ServiceError
from tests.factories import make_booking, make_dog, make_user, make_walker


@pytest.fixture
def file_app(tmp_path):
    # separate connections per thread need a real database file
    class FileConfig(TestConfig):
        SQLALCHEMY_DATABASE_URI = "sqlite:///" + str(tmp_path / "walks.db")

    app = create_app(FileConfig)
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()
        db.engine.dispose()


def test_overlapping_accepts_race_for_one_walker(file_app, monkeypatch):
    with file_app.app_context():
        owner = make_user()
        walker = make_walker()
        dog = make_dog(owner)
        ids = [
            make_booking(owner, walker, [dog], start=time(10, 0), end=time(11, 0)).id,
            make_booking(owner, walker, [dog], start=time(10, 30), end=time(11, 30)).id,
        ]
        db.session.remove()

    # widen the gap between the conflict check and the write
    real_find_conflict = conflicts.find_conflict

    def slow_find_conflict(*args, **kwargs):
        found = real_find_conflict(*args, **kwargs)
        clock.sleep(0.3)
        return found

    monkeypatch.setattr(conflicts, "find_conflict", slow_find_conflict)

    barrier = threading.Barrier(len(ids))
    outcomes = {}

    def accept(booking_id):
        with file_app.app_context():
            barrier.wait()
            try:
                booking_engine.accept_booking(booking_id)
                outcomes[booking_id] = "accepted"
            except ServiceError as exc:
                outcomes[booking_id] = type(exc).__name__
            finally:
                db.session.remove()

    threads = [threading.Thread(target=accept, args=(i,)) for i in ids]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=30)

    assert sorted(outcomes.values()) == ["Conflict", "accepted"]
    with file_app.app_context():
        assert Booking.query.filter_by(status=ACCEPTED).count() == 1
        db.session.remove()
