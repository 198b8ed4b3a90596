from datetime import date

try:
    from PyQt5 import QtCore
except Exception:  # pragma: no cover - fallback path
    try:
        from PySide2 import QtCore
    except Exception:  # pragma: no cover - fallback path
        from PySide6 import QtCore

import pytest

from notifications import NotificationChannel
from state_store import StateStore
from user_state import UserState

TODAY = date(2024, 2, 25)


@pytest.fixture(scope="session")
def qt_app():
    app = QtCore.QCoreApplication.instance()
    if app is None:
        app = QtCore.QCoreApplication([])
    yield app


@pytest.fixture
def store(tmp_path):
    return StateStore(tmp_path / "state.json")


@pytest.fixture
def state():
    return UserState.default(TODAY)


@pytest.fixture
def channel(qt_app):
    return NotificationChannel()


@pytest.fixture
def events(channel):
    received = []
    channel.subscribe(received.append)
    return received
