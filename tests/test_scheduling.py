from conftest import spin
from noughts.scheduling import QtScheduler


def test_callback_runs_on_event_loop(qt_app):
    sched = QtScheduler()
    calls = []
    sched.schedule(10, lambda: calls.append("fired"))
    assert calls == []
    assert sched.pending() == 1
    spin(qt_app, lambda: calls)
    assert calls == ["fired"]
    assert sched.pending() == 0


def test_cancelled_callback_never_runs(qt_app):
    sched = QtScheduler()
    calls = []
    handle = sched.schedule(10, lambda: calls.append("fired"))
    handle.cancel()
    assert handle.cancelled
    assert sched.pending() == 0
    spin(qt_app, lambda: False, timeout=0.1)
    assert calls == []
    handle.cancel()  # second cancel is a no-op
