import sys

from PySide6.QtWidgets import QApplication, QMainWindow

from lib.config import DEFAULT_KLINE_CONFIG, DEFAULT_THEME
from ui.layout import MainLayout


class MainWindow(QMainWindow):
    def __init__(self):
        super().__init__()
        self.setWindowTitle(f"{DEFAULT_KLINE_CONFIG.symbol} {DEFAULT_KLINE_CONFIG.interval}m (Bybit {DEFAULT_KLINE_CONFIG.category})")
        self.resize(DEFAULT_THEME.width, DEFAULT_THEME.height)

        self.main_layout = MainLayout()
        self.setCentralWidget(self.main_layout)

    def closeEvent(self, event):
        self.main_layout.shutdown()
        super().closeEvent(event)


def main() -> None:
    app = QApplication(sys.argv)
    window = MainWindow()
    window.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
