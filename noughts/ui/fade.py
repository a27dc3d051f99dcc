"""
opacity fades for widgets; knows nothing about the game
"""
from PySide6.QtWidgets import QGraphicsOpacityEffect
from PySide6.QtCore import QPropertyAnimation

FADE_MS = 100


def _effect(widget):
    effect = widget.graphicsEffect()
    if not isinstance(effect, QGraphicsOpacityEffect):
        effect = QGraphicsOpacityEffect(widget)
        widget.setGraphicsEffect(effect)
    return effect


def _animate(widget, start, end, duration, done):
    effect = _effect(widget)
    # one fade per widget; a stopped animation never emits finished
    previous = getattr(widget, "_fade_animation", None)
    if previous is not None:
        previous.stop()
        previous.deleteLater()
    anim = QPropertyAnimation(effect, b"opacity", widget)
    anim.setDuration(duration)
    anim.setStartValue(start)
    anim.setEndValue(end)
    if done:
        anim.finished.connect(done)
    widget._fade_animation = anim
    anim.start()
    return anim


def fade_in(widget, done=None, duration=FADE_MS):
    """
    show widget and raise opacity 0 -> 1, then call done()
    """
    widget.show()
    return _animate(widget, 0.0, 1.0, duration, done)


def fade_out(widget, done=None, duration=FADE_MS):
    """
    lower opacity to 0, hide widget, then call done()
    """
    def finish():
        widget.hide()
        if done:
            done()
    return _animate(widget, _effect(widget).opacity(), 0.0, duration, finish)
