import itertools
from datetime import datetime, timezone

import pytest
from pymongo.errors import PyMongoError

from app import create_app
from config import TestingConfig
from models.attendance import AttendanceStore
from models.leave import LeaveStore
from models.users import UserStore
from utils.errors import StoreError
from utils.notifier import NotificationError
from utils.photo_store import LocalPhotoStore
from utils.services import Services
from utils.timefmt import resolve_timezone


def _matches(doc, query):
    for key, expected in query.items():
        if key == "$or":
            if not any(_matches(doc, sub) for sub in expected):
                return False
        elif doc.get(key) != expected:
            return False
    return True


class FakeCursor:

    def __init__(self, docs):
        self.docs = docs

    def sort(self, keys, direction=None):
        if isinstance(keys, str):
            keys = [(keys, direction or 1)]
        for key, order in reversed(keys):
            self.docs.sort(key=lambda d: d.get(key), reverse=order < 0)
        return self

    def __iter__(self):
        return iter(list(self.docs))


class FakeCollection:
    """Just enough of a pymongo Collection for the stores."""

    def __init__(self):
        self.docs = []
        self.fail_writes = False
        self._ids = itertools.count(1)

    def insert_one(self, doc):
        if self.fail_writes:
            raise PyMongoError("write refused")
        doc.setdefault("_id", next(self._ids))
        self.docs.append(dict(doc))

    def find(self, query=None):
        return FakeCursor([dict(d) for d in self.docs if _matches(d, query or {})])

    def find_one(self, query):
        for doc in self.docs:
            if _matches(doc, query):
                return dict(doc)
        return None


class FakeClock:

    def __init__(self, now):
        self.now = now

    def __call__(self):
        return self.now


class FailingPhotoStore:

    def store(self, buffer, suggested_name):
        raise StoreError("Photo upload failed: quota exceeded")

    def delete(self, handle):
        raise AssertionError("nothing was stored")


class RecordingNotifier:

    def __init__(self, fail=False):
        self.sent = []
        self.fail = fail

    def send(self, subject, html):
        if self.fail:
            raise NotificationError("smtp down")
        self.sent.append((subject, html))


@pytest.fixture
def clock():
    return FakeClock(datetime(2024, 3, 1, 10, 15, 0, tzinfo=timezone.utc))


@pytest.fixture
def collections():
    return {"attendances": FakeCollection(), "users": FakeCollection(), "leaves": FakeCollection()}


@pytest.fixture
def upload_dir(tmp_path):
    return tmp_path / "uploads"


@pytest.fixture
def photo_store(upload_dir):
    return LocalPhotoStore(str(upload_dir), lambda filename: f"http://localhost/uploads/{filename}")


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def services(collections, clock, photo_store, notifier):
    return Services(
        attendance=AttendanceStore(collections["attendances"], resolve_timezone("UTC+4"), clock=clock),
        users=UserStore(collections["users"]),
        leaves=LeaveStore(collections["leaves"]),
        photo_store=photo_store,
        notifier=notifier,
    )


@pytest.fixture
def app(services, upload_dir):
    config = type("Config", (TestingConfig,), {"UPLOAD_FOLDER": str(upload_dir)})
    return create_app(config, services=services)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def failing_photo_store():
    return FailingPhotoStore()


@pytest.fixture
def failing_notifier():
    return RecordingNotifier(fail=True)
