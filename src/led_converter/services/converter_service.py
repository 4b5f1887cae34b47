"""
Converter service - the workflow behind the converter UI

Coordinates ingestion, output resolution, playback and export. UI layers
call these methods and render the returned OperationResult (message,
success flag, payload) however they like; nothing here talks to a display.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Iterable, Optional, Tuple, Union

from led_converter.controllers.interval_timer import IntervalTimer
from led_converter.controllers.playback_controller import PlaybackController
from led_converter.engine.resampler import parse_resize_mode
from led_converter.exporters.artifact_emitter import ArtifactEmitter
from led_converter.exporters.base import ExportResult
from led_converter.models.config import ConverterConfig
from led_converter.models.enums import ArtifactType, LogCategory, LoopMode, ResizeMode
from led_converter.models.errors import ConverterError
from led_converter.models.frame_sequence import FrameSequence
from led_converter.models.grid import Grid
from led_converter.models.output_spec import OutputSpec
from led_converter.services.sequence_loader import SequenceLoader
from led_converter.utils.logger import get_category_logger
from led_converter.utils.naming import default_animation_name, default_image_name, sanitize_name

log = get_category_logger(LogCategory.SYSTEM)


@dataclass(frozen=True)
class OperationResult:
    """Outcome of a service call, for the presentation layer to surface"""
    success: bool
    message: str
    payload: Any = None

    @classmethod
    def ok(cls, message: str, payload: Any = None) -> 'OperationResult':
        return cls(True, message, payload)

    @classmethod
    def failed(cls, message: str) -> 'OperationResult':
        return cls(False, message)


@dataclass(frozen=True)
class OutputResolution:
    """Custom output size and placement"""
    width: int
    height: int
    mode: ResizeMode = ResizeMode.CROP_TOP
    offset_x: int = 0
    offset_y: int = 0


class ConverterService:
    """
    Sequence conversion workflow

    Example:
        service = ConverterService(ConfigManager("converter.yaml").load())
        result = service.load_frames([("fire_01.png", g1), ("fire_02.png", g2)])
        if not result.success:
            show_error(result.message)

        service.set_output_resolution(64, 1, ResizeMode.CROP_BOTTOM)
        service.playback.play()
        export = service.export(ArtifactType.TC_GVL).payload
        Path(export.filename).write_text(export.content)
    """

    def __init__(
        self,
        config: Optional[ConverterConfig] = None,
        timer: Optional[IntervalTimer] = None,
        emitter: Optional[ArtifactEmitter] = None,
        loader: Optional[SequenceLoader] = None,
    ):
        self.config = config or ConverterConfig()
        export = self.config.export

        self.loader = loader or SequenceLoader()
        self.emitter = emitter or ArtifactEmitter(memory_warning_bytes=export.memory_warning_bytes)
        self.playback = PlaybackController(
            fps=export.fps,
            loop_mode=self.config.playback.loop_mode,
            timer=timer,
        )

        self.sequence: FrameSequence = FrameSequence.empty()
        self.name: str = export.default_animation_name
        self.brightness: int = export.brightness
        self.fps: int = export.fps
        self.resolution: Optional[OutputResolution] = None

    # ============================================================
    # Sequence ingestion
    # ============================================================

    def load_frames(self, named_grids: Iterable[Tuple[str, Grid]]) -> OperationResult:
        """
        Replace the current sequence with a new batch

        On failure the previous sequence stays untouched.
        """
        try:
            sequence = self.loader.load(named_grids)
        except ConverterError as e:
            log.error("Error loading frames", error=e.message)
            return OperationResult.failed(f"Error: {e.message}")

        self.resolution = None
        self._replace_sequence(sequence, keep_position=False)
        self.name = default_animation_name(sequence[0].filename, self.config.export.default_animation_name)
        self.playback.go_to_frame(0)
        return OperationResult.ok(f"Loaded {len(sequence)} frames successfully", sequence)

    # ============================================================
    # Output resolution
    # ============================================================

    def set_output_resolution(
        self,
        width: int,
        height: int,
        mode: Optional[Union[ResizeMode, str]] = None,
        offset_x: int = 0,
        offset_y: int = 0,
    ) -> OperationResult:
        """Resample every frame from its source grid to width x height"""
        try:
            resize_mode = parse_resize_mode(mode) if mode is not None else self.config.resize.mode
            sequence = self.loader.resample(self.sequence, width, height, resize_mode, offset_x, offset_y)
        except ConverterError as e:
            log.error("Error reprocessing frames", error=e.message)
            return OperationResult.failed(f"Error: {e.message}")

        self.resolution = OutputResolution(width, height, resize_mode, offset_x, offset_y)
        self._replace_sequence(sequence, keep_position=True)
        return OperationResult.ok(f"Frames reprocessed to {width}x{height}", sequence)

    def clear_output_resolution(self) -> OperationResult:
        """Go back to the decoded source size"""
        if len(self.sequence) == 0:
            return OperationResult.failed("Error: No frames loaded")
        self.resolution = None
        self._replace_sequence(self.loader.restore(self.sequence), keep_position=True)
        return OperationResult.ok("Using source resolution", self.sequence)

    @property
    def output_dimensions(self) -> Tuple[int, int]:
        if self.resolution is not None:
            return (self.resolution.width, self.resolution.height)
        return (self.sequence.width, self.sequence.height)

    # ============================================================
    # Output parameters
    # ============================================================

    def set_name(self, name: str) -> str:
        self.name = sanitize_name(name)
        return self.name

    def set_brightness(self, brightness: int) -> None:
        self.brightness = brightness

    def set_fps(self, fps: int) -> None:
        self.playback.set_frame_rate(fps)
        self.fps = fps

    def set_loop_mode(self, mode: Union[LoopMode, str]) -> None:
        self.playback.set_loop_mode(mode)

    def duration_info(self) -> str:
        return self.sequence.duration_info(self.fps)

    def output_spec(
        self,
        name: Optional[str] = None,
        brightness: Optional[int] = None,
        fps: Optional[int] = None,
    ) -> OutputSpec:
        width, height = self.output_dimensions
        return OutputSpec(
            name=sanitize_name(name) if name else (self.name or self.config.export.default_animation_name),
            brightness=self.brightness if brightness is None else brightness,
            fps=self.fps if fps is None else fps,
            width=width,
            height=height,
        )

    # ============================================================
    # Export
    # ============================================================

    def export(
        self,
        artifact: ArtifactType,
        name: Optional[str] = None,
        brightness: Optional[int] = None,
        fps: Optional[int] = None,
        generated_at: Optional[datetime] = None,
    ) -> OperationResult:
        """
        Generate an artifact for the current sequence

        Returns:
            OperationResult with an ExportResult payload on success
        """
        spec = self.output_spec(name, brightness, fps)
        try:
            result = self.emitter.emit(artifact, self.sequence, spec, generated_at)
        except ConverterError as e:
            log.error("Export failed", artifact=artifact.name, error=e.message)
            return OperationResult.failed(f"Error: {e.message}")

        usage = self.emitter.memory_usage(self.sequence, spec)
        if usage.exceeds(self.emitter.memory_warning_bytes):
            log.warn("Large export", total_mb=usage.total_mb, frames=usage.total_frames)

        return OperationResult.ok(f"{result.filename} exported successfully", result)

    def export_image(
        self,
        filename: str,
        grid: Optional[Grid],
        name: Optional[str] = None,
        brightness: Optional[int] = None,
        generated_at: Optional[datetime] = None,
    ) -> OperationResult:
        """Structured text for a single decoded image"""
        export = self.config.export
        spec = OutputSpec(
            name=sanitize_name(name) if name else default_image_name(filename, export.default_image_name),
            brightness=export.brightness if brightness is None else brightness,
        )
        try:
            result: ExportResult = self.emitter.structured_text_image(grid, spec, generated_at)
        except ConverterError as e:
            log.error("Image export failed", error=e.message)
            return OperationResult.failed(f"Error: {e.message}")
        return OperationResult.ok("TwinCAT code exported successfully", result)

    def memory_report(self) -> str:
        return self.emitter.memory_report(self.sequence, self.output_spec())

    # ============================================================
    # Internals
    # ============================================================

    def _replace_sequence(self, sequence: FrameSequence, keep_position: bool) -> None:
        position = self.playback.current_index
        self.sequence = sequence
        self.playback.set_frames(sequence)
        if keep_position:
            self.playback.go_to_frame(position)
