"""Run control for the pattern pipeline.

AIDEV-NOTE: PatternController owns the pipeline state machine and the busy
flag. Only one run may be active; a trigger during a run is rejected, not
queued. Session data (input image, last result) lives on PatternSession
instead of module globals.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

from PIL import Image

from image_processing import PatternProcessor, load_image, load_palette, make_demo_image
from models import (
    OUTPUT_FILENAME,
    InputMissingError,
    PatternConfig,
    PatternError,
    PatternResult,
    PipelineState,
)

StatusCallback = Callable[[PipelineState, str], None]


@dataclass
class PatternSession:
    """Per-window data threaded through pattern runs."""

    image: Optional[Image.Image] = None
    image_name: str = ""
    last_result: Optional[PatternResult] = None
    last_error: Optional[str] = None

    def set_image(self, image: Image.Image, name: str = ""):
        """Use an already decoded image as the run input."""
        self.image = image if image.mode == "RGBA" else image.convert("RGBA")
        self.image_name = name

    def load_image_file(self, file_path: "str | Path") -> Image.Image:
        """Decode an image file and make it the run input.

        Raises:
            ImageLoadError: If the file cannot be decoded
        """
        image = load_image(file_path)
        self.set_image(image, Path(file_path).name)
        return image

    def load_demo_image(self) -> Image.Image:
        image = make_demo_image()
        self.set_image(image, "demo")
        return image


class PatternController:
    """Serializes pattern runs and tracks pipeline state."""

    def __init__(
        self,
        session: Optional[PatternSession] = None,
        status_callback: Optional[StatusCallback] = None,
    ):
        self.session = session or PatternSession()
        self.status_callback = status_callback
        self.state = PipelineState.IDLE

    @property
    def is_busy(self) -> bool:
        return self.state not in (
            PipelineState.IDLE,
            PipelineState.DONE,
            PipelineState.ERROR,
        )

    def _set_state(self, state: PipelineState, message: str | None = None):
        self.state = state
        if self.status_callback is not None:
            self.status_callback(state, message or state.value)

    def run(self, config: PatternConfig) -> Optional[PatternResult]:
        """Run the pipeline once with the session's current image.

        Args:
            config: Pattern configuration for this run

        Returns:
            The new PatternResult, or None if a run is already in progress

        Raises:
            PatternError: Any pipeline failure, with unexpected exceptions
                wrapped; the controller is left in ERROR and the previous
                result is kept
        """
        if self.is_busy:
            print("Pattern run already in progress; ignoring trigger.")
            return None

        self.state = PipelineState.IDLE
        self.session.last_error = None
        try:
            self._set_state(PipelineState.LOADING)
            if self.session.image is None:
                raise InputMissingError("Please load an image first.")
            palette = load_palette(config.palette_source)
            print(f"Loaded palette with {len(palette)} colors.")

            processor = PatternProcessor(config, on_stage=self._set_state)
            result = processor.process(
                self.session.image, palette, source_name=self.session.image_name
            )
        except PatternError as e:
            self.session.last_error = str(e)
            self._set_state(PipelineState.ERROR, f"Error: {e}")
            raise
        except Exception as e:
            self.session.last_error = f"Unexpected failure: {e}"
            self._set_state(PipelineState.ERROR, f"Error: {self.session.last_error}")
            raise PatternError(self.session.last_error) from e
        else:
            self.session.last_result = result
            self._set_state(
                PipelineState.DONE,
                f"Done: {result.grid_size}x{result.grid_size} grid, "
                f"{len(result.palette)} colors",
            )
        finally:
            if self.is_busy:
                # Interrupted; never leave the controller stuck busy
                self._set_state(PipelineState.ERROR)

        return result

    def export(self, directory: "str | Path") -> Optional[Path]:
        """Save the last successful result as pixel_art.png in directory.

        Returns:
            Path written, or None if nothing has been produced yet
        """
        result = self.session.last_result
        if result is None:
            return None
        return result.save(Path(directory) / OUTPUT_FILENAME)
