"""UI components for the pixel pattern maker.

This package contains modular UI panels that can be easily rearranged
in the application layout.
"""

from ui.config_panel import ConfigPanel
from ui.image_panel import ImagePanel
from ui.main_window import PatternMakerWindow
from ui.output_panel import OutputPanel

__all__ = [
    "PatternMakerWindow",
    "ConfigPanel",
    "ImagePanel",
    "OutputPanel",
]
