from conftest import ManualScheduler, spin
from noughts.engine import GameEngine
from noughts.ui.fade import fade_in, fade_out
from noughts.ui.main_window import NoughtsWindow

from PySide6.QtWidgets import QGraphicsOpacityEffect, QLabel


def test_fade_out_hides_then_calls_back(qt_app):
    label = QLabel("hello")
    done = []
    fade_in(label, duration=10)
    assert not label.isHidden()
    fade_out(label, lambda: done.append(True), duration=10)
    spin(qt_app, lambda: done)
    assert done == [True]
    assert label.isHidden()
    assert isinstance(label.graphicsEffect(), QGraphicsOpacityEffect)
    assert label.graphicsEffect().opacity() == 0.0


def test_new_fade_replaces_running_one(qt_app):
    label = QLabel("hello")
    hidden = []
    fade_out(label, lambda: hidden.append(True), duration=50)
    fade_in(label, duration=10)
    spin(qt_app, lambda: False, timeout=0.2)
    assert hidden == []
    assert not label.isHidden()


def test_banner_fades_in_then_out(qt_app):
    window = NoughtsWindow(engine=GameEngine(ManualScheduler()))
    label = window.message_label
    window._update_message("Draw!", timeout_ms=10)
    assert label.text() == "Draw!"
    assert not label.isHidden()
    assert isinstance(label.graphicsEffect(), QGraphicsOpacityEffect)
    spin(qt_app, lambda: label.isHidden() and label.text() == "")
    assert label.isHidden()
    assert label.text() == ""
    # next banner brings the label back
    window._update_message("Winner! Congratulations Ann!")
    assert not label.isHidden()
    assert label.text() == "Winner! Congratulations Ann!"
    window.close()
