from PySide6.QtWidgets import QWidget, QSizePolicy
from PySide6.QtCore import Qt, QSize, Signal, QRectF
from PySide6.QtGui import QPainter, QColor, QPen, QFont, QFontMetricsF

from ..board import BOARD_SIZE, Mark

MARK_COLORS = {Mark.A: "#8acaff", Mark.B: "#ff8a8a"}
SYMBOL_FILL = 0.7       # share of a cell the widest symbol may take


def fit_font_size(font, symbols, box):
    """
    largest point size at which every symbol fits inside box x box px
    """
    probe = QFont(font)
    probe.setPointSizeF(100.0)
    metrics = QFontMetricsF(probe)
    widest = max((metrics.horizontalAdvance(s) for s in symbols if s), default=0.0)
    tallest = metrics.height()
    if widest <= 0 or tallest <= 0:
        return 1.0
    scale = min(box / widest, box / tallest)
    return max(1.0, 100.0 * scale)


class BoardWidget(QWidget):
    """
    draws a GameView and reports clicked cells
    """
    cell_clicked = Signal(int)  # emits row-major index on click

    def __init__(self, parent=None):
        super().__init__(parent)
        self._view = None               # last GameView from the engine
        self.setSizePolicy(QSizePolicy.Ignored, QSizePolicy.Ignored)
        self.setMinimumSize(QSize(150, 150))
        self._accept_clicks = True      # toggle click handling

    def set_view(self, view):
        self._view = view
        self.update()

    def set_accept_clicks(self, accept):
        # enable/disable user input
        self._accept_clicks = accept

    def heightForWidth(self, width):
        # keep square shape
        return width

    def hasHeightForWidth(self):
        return True

    def _geometry(self):
        w, h = self.width(), self.height()
        side = min(w, h)
        return (w - side) / 2, (h - side) / 2, side

    def paintEvent(self, event):
        """
        draw grid, player symbols, and highlight the winning line
        """
        painter = QPainter(self)
        try:
            painter.setRenderHint(QPainter.Antialiasing, True)
            ox, oy, side = self._geometry()
            cell = side / BOARD_SIZE
            # background
            painter.fillRect(self.rect(), QColor("#333"))
            view = self._view
            if view is not None and view.winning_line:
                for i in view.winning_line:
                    r, c = divmod(i, BOARD_SIZE)
                    painter.fillRect(QRectF(ox + c*cell, oy + r*cell, cell, cell),
                                     QColor("#3d5a40"))
            # grid lines
            painter.setPen(QPen(QColor("#555"), 2))
            for i in range(1, BOARD_SIZE):
                x = ox + i*cell
                painter.drawLine(int(x), int(oy), int(x), int(oy+side))
                y = oy + i*cell
                painter.drawLine(int(ox), int(y), int(ox+side), int(y))
            if view is None:
                return
            # marks, sized so the widest symbol still fits a cell
            font = QFont("Arial")
            font.setBold(True)
            symbols = [p.symbol for p in view.players]
            font.setPointSizeF(fit_font_size(font, symbols, cell * SYMBOL_FILL))
            painter.setFont(font)
            for i, mark in enumerate(view.cells):
                if mark is Mark.EMPTY:
                    continue
                r, c = divmod(i, BOARD_SIZE)
                painter.setPen(QPen(QColor(MARK_COLORS[mark]), 4))
                rect = QRectF(ox + c*cell, oy + r*cell, cell, cell)
                painter.drawText(rect, Qt.AlignCenter, view.symbols[i])
        finally:
            painter.end()

    def mouseReleaseEvent(self, event):
        """
        handle clicks: map coords to board cell and emit
        """
        if not self._accept_clicks:
            return
        if self._view is not None and self._view.is_terminal:
            return
        ox, oy, side = self._geometry()
        x, y = event.position().x(), event.position().y()
        # only inside grid
        if not (ox <= x < ox+side and oy <= y < oy+side):
            return
        cell = side / BOARD_SIZE
        if cell <= 0: return
        col = int((x-ox)//cell); row = int((y-oy)//cell)
        # clamp to valid range
        row = max(0, min(row, BOARD_SIZE-1)); col = max(0, min(col, BOARD_SIZE-1))
        self.cell_clicked.emit(row*BOARD_SIZE + col)  # notify main window
