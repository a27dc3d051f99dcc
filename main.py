import argparse
import logging
import sys

from PySide6.QtWidgets import QApplication
from PySide6.QtCore import Qt
from PySide6.QtGui import QPalette, QColor

from noughts.errors import ConfigurationError
from noughts.settings import load_settings
from noughts.ui.main_window import NoughtsWindow

# -----------------------------------------------------------------------------
# COLOR CONSTANTS
# -----------------------------------------------------------------------------

WINDOW_COLOR = QColor(53, 53, 53)
WINDOW_TEXT_COLOR = Qt.white
BASE_COLOR = QColor(35, 35, 35)
ALT_BASE_COLOR = QColor(53, 53, 53)
TEXT_COLOR = Qt.white
BUTTON_COLOR = QColor(66, 66, 66)
BUTTON_TEXT_COLOR = Qt.white
HIGHLIGHT_COLOR = QColor(42, 130, 218)
HIGHLIGHTED_TEXT_COLOR = Qt.white
PLACEHOLDER_TEXT_COLOR = QColor(160, 160, 160)
DISABLED_TEXT_COLOR = QColor(127, 127, 127)

# -----------------------------------------------------------------------------
# PALETTE SETUP
# -----------------------------------------------------------------------------

def apply_default_palette(app: QApplication):
    """
    Dark palette for the setup form and the board page.
    """
    palette = QPalette()
    palette.setColor(QPalette.Window, WINDOW_COLOR)
    palette.setColor(QPalette.WindowText, WINDOW_TEXT_COLOR)
    palette.setColor(QPalette.Base, BASE_COLOR)
    palette.setColor(QPalette.AlternateBase, ALT_BASE_COLOR)
    palette.setColor(QPalette.Text, TEXT_COLOR)
    palette.setColor(QPalette.Button, BUTTON_COLOR)
    palette.setColor(QPalette.ButtonText, BUTTON_TEXT_COLOR)
    palette.setColor(QPalette.Highlight, HIGHLIGHT_COLOR)
    palette.setColor(QPalette.HighlightedText, HIGHLIGHTED_TEXT_COLOR)
    palette.setColor(QPalette.PlaceholderText, PLACEHOLDER_TEXT_COLOR)
    # greyed out buttons/labels (restart, menu before a match starts)
    for role in (QPalette.Text, QPalette.ButtonText, QPalette.WindowText):
        palette.setColor(QPalette.Disabled, role, DISABLED_TEXT_COLOR)
    app.setPalette(palette)

# -----------------------------------------------------------------------------
# COMMAND LINE
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="noughts", description="3x3 noughts and crosses")
    p.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    p.add_argument("--think-delay", type=int, default=None, metavar="MS",
                   help="Computer thinking delay in milliseconds (default: 1000)")
    p.add_argument("--seed", type=int, default=None,
                   help="Seed for the computer's random moves")
    return p

# -----------------------------------------------------------------------------
# ENTRY POINT
# -----------------------------------------------------------------------------

def main(argv=None) -> int:
    ns = build_parser().parse_args(argv)
    try:
        settings = load_settings()
    except ConfigurationError as exc:
        logging.basicConfig(format="[%(levelname)s] %(message)s")
        logging.error("%s", exc)
        return 2
    if ns.think_delay is not None and ns.think_delay < 0:
        logging.basicConfig(format="[%(levelname)s] %(message)s")
        logging.error("--think-delay must not be negative")
        return 2
    settings = settings.with_overrides(
        think_delay_ms=ns.think_delay,
        seed=ns.seed,
        log_level="DEBUG" if ns.verbose else None,
    )
    logging.basicConfig(level=settings.log_level, format="[%(levelname)s] %(message)s")

    app = QApplication(sys.argv[:1])
    app.setStyle('Fusion')
    apply_default_palette(app)

    window = NoughtsWindow(settings)
    window.resize(420, 560)
    window.show()
    return app.exec()


if __name__ == '__main__':
    sys.exit(main())
