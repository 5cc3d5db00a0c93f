from __future__ import annotations

import sys

from PySide6.QtCore import Qt
from PySide6.QtGui import QAction
from PySide6.QtWidgets import (
    QApplication,
    QFrame,
    QLabel,
    QMainWindow,
    QScrollArea,
    QWidget,
)

from app.cardlayout.engine import LayoutEngine
from app.cardlayout.layout.config import LayoutConfig
from app.cardlayout.layout.models import CardDescriptor, ViewportSize
from app.cardlayout.main import demo_cards


class CardBoard(QScrollArea):
    """Scroll area that places one label per card using LayoutEngine."""

    def __init__(self, engine: LayoutEngine, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.engine = engine
        self.setWidgetResizable(False)
        self.setHorizontalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAsNeeded)
        self.setVerticalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAsNeeded)

        self.canvas = QWidget()
        self.setWidget(self.canvas)
        self._labels: dict[str, QLabel] = {}

    def set_cards(self, cards: list[CardDescriptor]) -> None:
        for label in self._labels.values():
            label.deleteLater()
        self._labels = {}
        for card in cards:
            label = QLabel(card.id, self.canvas)
            label.setFrameShape(QFrame.Shape.StyledPanel)
            label.setAlignment(Qt.AlignmentFlag.AlignCenter)
            self._labels[card.id] = label

        self.engine.reset_positions()
        self.engine.compute_layout(cards, self._viewport_size())
        self.apply_positions()

    def apply_positions(self) -> None:
        size = self.engine.content_size()
        self.canvas.resize(int(size.width), int(size.height))
        for card_id, label in self._labels.items():
            pos = self.engine.get_position(card_id)
            if pos is None:
                # Viewport too small for a single column.
                label.hide()
                continue
            label.setGeometry(int(pos.x), int(pos.y), int(pos.width), int(pos.height))
            label.show()

    def _viewport_size(self) -> ViewportSize:
        vp = self.viewport()
        return ViewportSize(max(0, vp.width()), max(0, vp.height()))

    def resizeEvent(self, event) -> None:  # type: ignore[override]
        super().resizeEvent(event)
        self.engine.resize(self._viewport_size())
        self.apply_positions()


class MainWindow(QMainWindow):
    def __init__(self, config: LayoutConfig | None = None, card_count: int = 40) -> None:
        super().__init__()
        self.setWindowTitle("Card Layout Preview")
        self.resize(1000, 700)

        self.board = CardBoard(LayoutEngine(config, strict=False))
        self.setCentralWidget(self.board)
        self.board.set_cards(demo_cards(card_count))
        self._build_menu()

    def _build_menu(self) -> None:
        view_menu = self.menuBar().addMenu("&View")
        for strategy in ("auto", "grid", "masonry"):
            action = QAction(f"Strategy: {strategy}", self)
            action.triggered.connect(lambda _=False, s=strategy: self._set_option(strategy=s))
            view_menu.addAction(action)

        view_menu.addSeparator()

        for direction in ("auto", "vertical", "horizontal"):
            action = QAction(f"Direction: {direction}", self)
            action.triggered.connect(lambda _=False, d=direction: self._set_option(direction=d))
            view_menu.addAction(action)

    def _set_option(self, **changes) -> None:
        self.board.engine.update_config(**changes)
        self.board.apply_positions()


def main() -> None:
    app = QApplication(sys.argv)
    app.setApplicationName("CardLayoutPreview")

    win = MainWindow()
    win.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
