"""Centralized styling constants for the pattern maker UI.

This module consolidates colors, fonts, and sizes used throughout the application
to ensure consistency and easier maintenance.
"""

from PyQt6.QtGui import QFont

from models import PipelineState


class StatusColors:
    """Pipeline status text colors."""

    IDLE = "gray"
    RUNNING = "orange"
    DONE = "green"
    ERROR = "red"


class ThemeColors:
    """Application theme colors."""

    BACKGROUND_PANEL = "#2a2a2a"
    BORDER_DEFAULT = "gray"


class Fonts:
    """Standard application fonts."""

    STATUS = QFont("Arial", 11)


class Sizes:
    """Standard widget sizes and constraints."""

    # Input preview
    PREVIEW_MIN_SIZE = (260, 180)

    # Output preview
    OUTPUT_MIN_SIZE = (480, 480)

    # Side column
    CONTROLS_MIN_WIDTH = 320
    PALETTE_COMBO_MIN_WIDTH = 180


COLORS = ThemeColors
FONTS = Fonts
SIZES = Sizes


def status_stylesheet(state: PipelineState) -> str:
    """Generate status label stylesheet for a pipeline state.

    Args:
        state: Current pipeline state

    Returns:
        CSS stylesheet string with appropriate color
    """
    if state == PipelineState.DONE:
        color = StatusColors.DONE
    elif state == PipelineState.ERROR:
        color = StatusColors.ERROR
    elif state == PipelineState.IDLE:
        color = StatusColors.IDLE
    else:
        color = StatusColors.RUNNING
    return f"color: {color};"


def panel_stylesheet() -> str:
    """Generate standard panel stylesheet with border and background.

    Returns:
        CSS stylesheet string for panel styling
    """
    return (
        f"border: 1px solid {ThemeColors.BORDER_DEFAULT}; "
        f"background-color: {ThemeColors.BACKGROUND_PANEL};"
    )
