"""Pattern output preview and export panel."""

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QScrollArea,
    QVBoxLayout,
)

from models import PatternResult, PipelineState
from ui.styles import FONTS, SIZES, status_stylesheet
from ui.widgets import pil_to_pixmap


class OutputPanel(QGroupBox):
    """Shows the rendered pattern and holds the run/save buttons."""

    def __init__(self, parent=None):
        super().__init__("Pattern", parent)
        self._setup_ui()

    def _setup_ui(self):
        """Initialize the UI components."""
        layout = QVBoxLayout()

        self.scroll_area = QScrollArea()
        self.scroll_area.setMinimumSize(*SIZES.OUTPUT_MIN_SIZE)
        self.scroll_area.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.output_label = QLabel("Generated pattern will appear here")
        self.output_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.scroll_area.setWidget(self.output_label)
        self.scroll_area.setWidgetResizable(True)
        layout.addWidget(self.scroll_area, stretch=1)

        btn_layout = QHBoxLayout()
        self.run_btn = QPushButton("Generate Pattern")
        self.run_btn.setEnabled(False)
        self.run_btn.setToolTip("Quantize the image and render the pattern")
        btn_layout.addWidget(self.run_btn)

        self.save_btn = QPushButton("Save PNG...")
        self.save_btn.setEnabled(False)
        self.save_btn.setToolTip("Save the pattern as pixel_art.png")
        btn_layout.addWidget(self.save_btn)
        layout.addLayout(btn_layout)

        self.status_label = QLabel("")
        self.status_label.setFont(FONTS.STATUS)
        self.status_label.setWordWrap(True)
        layout.addWidget(self.status_label)

        self.setLayout(layout)

    def set_status(self, state: PipelineState, message: str):
        self.status_label.setStyleSheet(status_stylesheet(state))
        self.status_label.setText(message)

    def show_result(self, result: PatternResult):
        """Display a finished pattern at 1:1 scale."""
        self.output_label.setPixmap(pil_to_pixmap(result.image))
        self.save_btn.setEnabled(True)
