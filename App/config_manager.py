"""Configuration persistence manager for the pixel pattern maker.

This module handles loading and saving of pattern settings to/from JSON files.
"""

import json
from dataclasses import asdict
from pathlib import Path
from typing import Optional, Tuple

from models import CONFIG_FILE, LegendPosition, PatternConfig


class ConfigManager:
    """Handles loading and saving of pattern configuration."""

    def __init__(self, config_path: Path = CONFIG_FILE):
        """Initialize config manager.

        Args:
            config_path: Path to configuration file (defaults to ~/.pixel_pattern_config.json)
        """
        self.config_path = config_path

    def load(self) -> PatternConfig:
        """Load configuration from file, returning defaults if not found.

        Returns:
            PatternConfig with loaded or default values
        """
        config = PatternConfig()

        try:
            if self.config_path.exists():
                with open(self.config_path, "r") as f:
                    data = json.load(f)
                    # Update config with loaded values (fallback to defaults)
                    config.grid_size = int(data.get("grid_size", config.grid_size))
                    config.max_colors = int(data.get("max_colors", config.max_colors))
                    config.show_names = bool(data.get("show_names", config.show_names))
                    config.font_size = int(data.get("font_size", config.font_size))
                    config.cell_size = int(data.get("cell_size", config.cell_size))
                    config.legend_position = LegendPosition(
                        data.get("legend_position", config.legend_position.value)
                    )
                    config.swatch_width_ratio = float(
                        data.get("swatch_width_ratio", config.swatch_width_ratio)
                    )
                    config.swatch_height_ratio = float(
                        data.get("swatch_height_ratio", config.swatch_height_ratio)
                    )
                    config.gap_x_ratio = float(data.get("gap_x_ratio", config.gap_x_ratio))
                    config.gap_y_ratio = float(data.get("gap_y_ratio", config.gap_y_ratio))
                    config.palette_source = str(
                        data.get("palette_source", config.palette_source)
                    )
                print(f"✓ Loaded configuration from {self.config_path}")
        except (OSError, ValueError, TypeError, AttributeError) as e:
            print(f"Warning: Could not load config file: {e}")
            return PatternConfig()

        return config

    def save(self, config: PatternConfig) -> Tuple[bool, Optional[str]]:
        """Save configuration to file.

        Args:
            config: PatternConfig to save

        Returns:
            Tuple of (success: bool, error_message: Optional[str])
        """
        data = asdict(config)
        data["legend_position"] = config.legend_position.value
        try:
            with open(self.config_path, "w") as f:
                json.dump(data, f, indent=2)
            return True, None
        except OSError as e:
            return False, str(e)
