import os
import time

import pytest

from noughts.session import MatchConfig, PlayerConfig


class ManualCall:
    def __init__(self, delay_ms, callback):
        self.delay_ms = delay_ms
        self.callback = callback
        self.cancelled = False
        self.fired = False

    def cancel(self):
        self.cancelled = True


class ManualScheduler:
    """Stands in for QtScheduler; tests decide when timers fire."""

    def __init__(self):
        self.calls = []

    def schedule(self, delay_ms, callback):
        call = ManualCall(delay_ms, callback)
        self.calls.append(call)
        return call

    @property
    def pending(self):
        return [c for c in self.calls if not c.cancelled and not c.fired]

    def run_pending(self):
        fired = 0
        while self.pending:
            call = self.pending[0]
            call.fired = True
            call.callback()
            fired += 1
        return fired


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def two_player_config():
    return MatchConfig(
        player_count=2,
        player1=PlayerConfig("Ann", "X"),
        player2=PlayerConfig("Bob", "O"),
    )


@pytest.fixture
def vs_computer_config():
    return MatchConfig(player_count=1, player1=PlayerConfig("Ann", "X"))


@pytest.fixture(scope="session")
def qt_app():
    # widgets need a QApplication; no display under test
    os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
    from PySide6.QtWidgets import QApplication
    return QApplication.instance() or QApplication([])


def spin(app, until, timeout=2.0):
    """Process qt events until until() is true or timeout seconds pass."""
    deadline = time.monotonic() + timeout
    while not until() and time.monotonic() < deadline:
        app.processEvents()
        time.sleep(0.005)
