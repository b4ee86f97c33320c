"""Pattern settings panel."""

from PyQt6.QtWidgets import (
    QCheckBox,
    QComboBox,
    QFileDialog,
    QFormLayout,
    QGroupBox,
    QHBoxLayout,
    QInputDialog,
    QPushButton,
    QVBoxLayout,
)

from image_processing import bundled_palettes
from models import LegendPosition, PatternConfig
from ui.styles import SIZES
from ui.widgets import CollapsibleGroupBox, WidgetFactory

CUSTOM_PALETTE_LABEL = "Custom file..."


class ConfigPanel(QGroupBox):
    """Panel for grid, label, legend and palette settings."""

    def __init__(self, config: PatternConfig, parent=None):
        super().__init__("Pattern Settings", parent)
        self.config = config
        self.custom_palette_source = ""
        self._setup_ui()
        self.set_values(config)

    def _setup_ui(self):
        """Initialize the UI components."""
        main_layout = QVBoxLayout()

        # --- Palette ---
        palette_group = QGroupBox("Palette")
        palette_layout = QHBoxLayout()
        self.palette_combo = QComboBox()
        self.palette_combo.setMinimumWidth(SIZES.PALETTE_COMBO_MIN_WIDTH)
        self.palette_combo.addItems(bundled_palettes())
        self.palette_combo.addItem(CUSTOM_PALETTE_LABEL)
        self.palette_combo.activated.connect(self._on_palette_activated)
        palette_layout.addWidget(self.palette_combo, stretch=1)
        self.palette_url_btn = QPushButton("URL...")
        self.palette_url_btn.setToolTip("Fetch the palette from a web address")
        self.palette_url_btn.clicked.connect(self._on_palette_url_clicked)
        palette_layout.addWidget(self.palette_url_btn)
        palette_group.setLayout(palette_layout)
        main_layout.addWidget(palette_group)

        # --- Grid ---
        grid_group = QGroupBox("Grid")
        grid_layout = QFormLayout()
        self.grid_size_input = WidgetFactory.create_int_spinbox(
            1, 300, self.config.grid_size, " cells",
            tooltip="Number of cells per side",
        )
        grid_layout.addRow("Grid size:", self.grid_size_input)

        self.max_colors_input = WidgetFactory.create_int_spinbox(
            1, 256, self.config.max_colors,
            tooltip="Keep at most this many of the most used palette colors",
        )
        grid_layout.addRow("Max colors:", self.max_colors_input)

        self.cell_size_input = WidgetFactory.create_int_spinbox(
            4, 200, self.config.cell_size, " px"
        )
        grid_layout.addRow("Cell size:", self.cell_size_input)
        grid_group.setLayout(grid_layout)
        main_layout.addWidget(grid_group)

        # --- Labels ---
        label_group = QGroupBox("Labels")
        label_layout = QFormLayout()
        self.show_names_check = QCheckBox("Show color names")
        label_layout.addRow(self.show_names_check)
        self.font_size_input = WidgetFactory.create_int_spinbox(
            4, 72, self.config.font_size, " px"
        )
        label_layout.addRow("Font size:", self.font_size_input)
        label_group.setLayout(label_layout)
        main_layout.addWidget(label_group)

        # --- Legend ---
        legend_group = CollapsibleGroupBox("Legend")
        legend_layout = QFormLayout()
        self.legend_position_combo = QComboBox()
        self.legend_position_combo.addItems([p.value.title() for p in LegendPosition])
        legend_layout.addRow("Position:", self.legend_position_combo)

        self.swatch_width_input = WidgetFactory.create_double_spinbox(
            0.5, 10.0, self.config.swatch_width_ratio, " ×", decimals=2, step=0.1
        )
        legend_layout.addRow("Swatch width:", self.swatch_width_input)
        self.swatch_height_input = WidgetFactory.create_double_spinbox(
            0.5, 10.0, self.config.swatch_height_ratio, " ×", decimals=2, step=0.1
        )
        legend_layout.addRow("Swatch height:", self.swatch_height_input)
        self.gap_x_input = WidgetFactory.create_double_spinbox(
            0.0, 5.0, self.config.gap_x_ratio, " ×", decimals=2, step=0.1
        )
        legend_layout.addRow("Column gap:", self.gap_x_input)
        self.gap_y_input = WidgetFactory.create_double_spinbox(
            0.0, 5.0, self.config.gap_y_ratio, " ×", decimals=2, step=0.1
        )
        legend_layout.addRow("Row gap:", self.gap_y_input)
        legend_group.setLayout(legend_layout)
        main_layout.addWidget(legend_group)

        # --- Reset Button ---
        self.reset_btn = QPushButton("↺ Reset to Defaults")
        self.reset_btn.clicked.connect(lambda: self.set_values(PatternConfig()))
        main_layout.addWidget(self.reset_btn)

        main_layout.addStretch()
        self.setLayout(main_layout)

    def _on_palette_activated(self, index: int):
        """Ask for a palette file when the custom entry is chosen."""
        if index != self.palette_combo.count() - 1:
            return
        file_path, _ = QFileDialog.getOpenFileName(
            self, "Select Palette", "", "Palette JSON (*.json);;All Files (*)"
        )
        if file_path:
            self._set_custom_palette(file_path)
        elif not self.custom_palette_source:
            self.palette_combo.setCurrentIndex(0)

    def _on_palette_url_clicked(self):
        url, ok = QInputDialog.getText(
            self, "Palette URL", "Palette JSON URL:", text=self.custom_palette_source
        )
        if ok and url.strip():
            self._set_custom_palette(url.strip())

    def _set_custom_palette(self, source: str):
        self.custom_palette_source = source
        self.palette_combo.setItemText(
            self.palette_combo.count() - 1, f"Custom: {source}"
        )
        self.palette_combo.setCurrentIndex(self.palette_combo.count() - 1)

    def _palette_source(self) -> str:
        if self.palette_combo.currentIndex() == self.palette_combo.count() - 1:
            return self.custom_palette_source
        return self.palette_combo.currentText()

    def get_values(self) -> PatternConfig:
        """Get input values as PatternConfig."""
        return PatternConfig(
            grid_size=self.grid_size_input.value(),
            max_colors=self.max_colors_input.value(),
            show_names=self.show_names_check.isChecked(),
            font_size=self.font_size_input.value(),
            cell_size=self.cell_size_input.value(),
            legend_position=list(LegendPosition)[self.legend_position_combo.currentIndex()],
            swatch_width_ratio=self.swatch_width_input.value(),
            swatch_height_ratio=self.swatch_height_input.value(),
            gap_x_ratio=self.gap_x_input.value(),
            gap_y_ratio=self.gap_y_input.value(),
            palette_source=self._palette_source(),
        )

    def set_values(self, config: PatternConfig):
        """Set input values."""
        self.grid_size_input.setValue(config.grid_size)
        self.max_colors_input.setValue(config.max_colors)
        self.show_names_check.setChecked(config.show_names)
        self.font_size_input.setValue(config.font_size)
        self.cell_size_input.setValue(config.cell_size)
        self.legend_position_combo.setCurrentIndex(
            list(LegendPosition).index(config.legend_position)
        )
        self.swatch_width_input.setValue(config.swatch_width_ratio)
        self.swatch_height_input.setValue(config.swatch_height_ratio)
        self.gap_x_input.setValue(config.gap_x_ratio)
        self.gap_y_input.setValue(config.gap_y_ratio)

        bundled_index = self.palette_combo.findText(config.palette_source)
        if not config.palette_source:
            self.palette_combo.setCurrentIndex(0)
        elif bundled_index >= 0:
            self.palette_combo.setCurrentIndex(bundled_index)
        else:
            self._set_custom_palette(config.palette_source)
