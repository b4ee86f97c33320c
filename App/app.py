"""Pixel Pattern Maker - Main entry point."""

import sys

from PyQt6.QtWidgets import QApplication

from ui.main_window import PatternMakerWindow


def main():
    """Launch the pattern maker application."""
    app = QApplication(sys.argv)

    app.setApplicationDisplayName("Pixel Pattern Maker")
    app.setApplicationName("PixelPatternMaker")

    window = PatternMakerWindow()
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
