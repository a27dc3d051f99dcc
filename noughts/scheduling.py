"""
deferred callbacks for the computer's "thinking" delay

the engine only needs schedule(delay_ms, callback) -> handle with
handle.cancel(); QtScheduler backs it with single-shot QTimers so the
event loop stays responsive while the computer waits.
"""
import logging

from PySide6.QtCore import QObject, QTimer

logger = logging.getLogger(__name__)


class ScheduledCall:
    """
    handle for one pending QTimer callback
    """
    def __init__(self, scheduler, timer):
        self._scheduler = scheduler
        self._timer = timer
        self.cancelled = False

    def cancel(self):
        if self._timer is None:
            return
        self.cancelled = True
        self._timer.stop()
        self._scheduler._forget(self._timer)
        self._timer = None

    def _fired(self):
        self._timer = None


class QtScheduler(QObject):
    """
    schedules callbacks on the running qt event loop
    """
    def __init__(self, parent=None):
        super().__init__(parent)
        self._timers = set()  # keep timers alive until they fire

    def schedule(self, delay_ms, callback):
        timer = QTimer(self)
        timer.setSingleShot(True)
        call = ScheduledCall(self, timer)

        def fire():
            call._fired()
            self._forget(timer)
            callback()

        timer.timeout.connect(fire)
        self._timers.add(timer)
        timer.start(max(0, int(delay_ms)))
        logger.debug("scheduled callback in %d ms", delay_ms)
        return call

    def pending(self):
        return len(self._timers)

    def _forget(self, timer):
        if timer in self._timers:
            self._timers.discard(timer)
            timer.deleteLater()
