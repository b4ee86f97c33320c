"""Input image selection and preview panel."""

from __future__ import annotations

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtWidgets import (
    QFileDialog,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from image_processing.utils import describe_image, preview_size
from models import PatternError
from pattern_controller import PatternSession
from ui.styles import SIZES, panel_stylesheet
from ui.widgets import pil_to_pixmap


class ImagePanel(QGroupBox):
    """Panel for choosing the input image."""

    # Emitted with the image name once a new input is in the session
    image_loaded = pyqtSignal(str)
    # Emitted with an error message when an image fails to load
    load_failed = pyqtSignal(str)

    def __init__(self, session: PatternSession, parent: QWidget | None = None):
        super().__init__("Input Image", parent)
        self.session = session
        self._setup_ui()
        self._connect_signals()

    def _setup_ui(self):
        """Initialize the UI components."""
        layout = QVBoxLayout()

        # --- File selection ---
        file_layout = QHBoxLayout()
        self.file_path_label = QLabel("No image selected")
        self.file_path_label.setWordWrap(True)
        file_layout.addWidget(self.file_path_label, stretch=1)

        self.browse_btn = QPushButton("Browse...")
        self.browse_btn.setToolTip("Select an image file (PNG, JPG, etc.)")
        file_layout.addWidget(self.browse_btn)

        self.demo_btn = QPushButton("Load Demo")
        self.demo_btn.setToolTip("Use a built-in gradient picture")
        file_layout.addWidget(self.demo_btn)
        layout.addLayout(file_layout)

        # --- Preview ---
        self.preview_label = QLabel()
        self.preview_label.setMinimumSize(*SIZES.PREVIEW_MIN_SIZE)
        self.preview_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.preview_label.setStyleSheet(panel_stylesheet())
        self.preview_label.setText("Image preview will appear here")
        layout.addWidget(self.preview_label)

        self.info_label = QLabel("")
        layout.addWidget(self.info_label)

        self.setLayout(layout)

    def _connect_signals(self):
        self.browse_btn.clicked.connect(self._on_browse_clicked)
        self.demo_btn.clicked.connect(self._on_demo_clicked)

    # === Event Handlers ===

    def _on_browse_clicked(self):
        """Handle browse button click."""
        file_path, _ = QFileDialog.getOpenFileName(
            self,
            "Select Image",
            "",
            "Images (*.png *.jpg *.jpeg *.bmp *.gif *.tiff *.webp);;All Files (*)",
        )
        if file_path:
            self.load_file(file_path)

    def _on_demo_clicked(self):
        self.session.load_demo_image()
        self._show_current("Demo image")

    # === Public Methods ===

    def load_file(self, file_path: str):
        """Decode an image file into the session and show it."""
        try:
            self.session.load_image_file(file_path)
        except PatternError as e:
            self.info_label.setText(str(e))
            self.load_failed.emit(str(e))
            return
        self._show_current(f"Selected: {self.session.image_name}")

    def _show_current(self, caption: str):
        image = self.session.image
        if image is None:
            return
        self.file_path_label.setText(caption)

        width, height = preview_size(*image.size)
        pixmap = pil_to_pixmap(image).scaled(
            width,
            height,
            Qt.AspectRatioMode.KeepAspectRatio,
            Qt.TransformationMode.SmoothTransformation,
        )
        self.preview_label.setPixmap(pixmap)
        self.info_label.setText(describe_image(image))
        self.image_loaded.emit(self.session.image_name)
