"""Main application window for the pattern maker."""

from PyQt6.QtGui import QAction
from PyQt6.QtWidgets import (
    QApplication,
    QFileDialog,
    QHBoxLayout,
    QMainWindow,
    QMessageBox,
    QVBoxLayout,
    QWidget,
)

from config_manager import ConfigManager
from models import OUTPUT_FILENAME, PatternError, PipelineState
from pattern_controller import PatternController, PatternSession
from ui.config_panel import ConfigPanel
from ui.image_panel import ImagePanel
from ui.output_panel import OutputPanel
from ui.styles import SIZES


class PatternMakerWindow(QMainWindow):
    """Main application window: input and settings on the left, output on the right."""

    def __init__(self):
        super().__init__()
        self.setWindowTitle("Pixel Pattern Maker v0.1.0")
        self.setMinimumSize(1000, 700)

        # Application state
        self.config_manager = ConfigManager()
        self.pattern_config = self.config_manager.load()
        self.session = PatternSession()
        self.controller = PatternController(self.session, self._on_status)

        # UI component references (created in _setup_ui)
        self.image_panel: ImagePanel
        self.config_panel: ConfigPanel
        self.output_panel: OutputPanel

        self._setup_ui()
        self._connect_signals()

    def _setup_ui(self):
        """Initialize the user interface."""
        self._create_menu_bar()

        central = QWidget()
        layout = QHBoxLayout()

        left_column = QVBoxLayout()
        self.image_panel = ImagePanel(self.session)
        left_column.addWidget(self.image_panel)
        self.config_panel = ConfigPanel(self.pattern_config)
        left_column.addWidget(self.config_panel, stretch=1)

        left_widget = QWidget()
        left_widget.setLayout(left_column)
        left_widget.setMinimumWidth(SIZES.CONTROLS_MIN_WIDTH)
        layout.addWidget(left_widget)

        self.output_panel = OutputPanel()
        layout.addWidget(self.output_panel, stretch=1)

        central.setLayout(layout)
        self.setCentralWidget(central)

    def _create_menu_bar(self):
        """Create the File menu."""
        menubar = self.menuBar()
        if menubar is None:
            return

        file_menu = menubar.addMenu("&File")
        if file_menu is None:
            return

        open_action = QAction("&Open Image...", self)
        open_action.triggered.connect(lambda: self.image_panel.browse_btn.click())
        file_menu.addAction(open_action)

        self.save_action = QAction("&Save Pattern...", self)
        self.save_action.setEnabled(False)
        self.save_action.triggered.connect(self._on_save_clicked)
        file_menu.addAction(self.save_action)

    def _connect_signals(self):
        """Connect all UI signals to handlers."""
        self.image_panel.image_loaded.connect(self._on_image_loaded)
        self.image_panel.load_failed.connect(
            lambda msg: QMessageBox.warning(self, "Image Error", msg)
        )
        self.output_panel.run_btn.clicked.connect(self._on_run_clicked)
        self.output_panel.save_btn.clicked.connect(self._on_save_clicked)

    # === Event Handlers ===

    def _on_image_loaded(self, name: str):
        self.output_panel.run_btn.setEnabled(True)
        self.output_panel.set_status(PipelineState.IDLE, f"Loaded {name}. Ready to generate.")

    def _on_status(self, state: PipelineState, message: str):
        """Mirror pipeline progress in the status label."""
        self.output_panel.set_status(state, message)
        # Runs are synchronous; let the label repaint between stages
        QApplication.processEvents()

    def _on_run_clicked(self):
        """Run the pipeline with the current settings."""
        if self.controller.is_busy:
            return

        self.pattern_config = self.config_panel.get_values()
        success, error = self.config_manager.save(self.pattern_config)
        if not success:
            print(f"Warning: Could not save configuration: {error}")

        self.output_panel.run_btn.setEnabled(False)
        self.image_panel.setEnabled(False)
        try:
            result = self.controller.run(self.pattern_config)
        except PatternError as e:
            QMessageBox.warning(self, "Pattern Error", str(e))
            return
        finally:
            self.output_panel.run_btn.setEnabled(True)
            self.image_panel.setEnabled(True)

        if result is not None:
            self.output_panel.show_result(result)
            self.save_action.setEnabled(True)

    def _on_save_clicked(self):
        """Save the last pattern as pixel_art.png in a chosen folder."""
        directory = QFileDialog.getExistingDirectory(
            self, f"Choose folder for {OUTPUT_FILENAME}"
        )
        if not directory:
            return
        try:
            path = self.controller.export(directory)
        except OSError as e:
            QMessageBox.warning(self, "Save Error", f"Could not save pattern:\n{e}")
            return
        if path is not None:
            self.output_panel.status_label.setText(f"Saved {path}")
