"""
ArtifactEmitter - one entry point for every textual artifact

Dispatches to the per-format exporters, all of which share one PixelCodec,
and exposes the memory usage estimate for a sequence.
"""

from datetime import datetime
from typing import Callable, Optional

from led_converter.engine.pixel_codec import PixelCodec
from led_converter.exporters.base import ExportResult
from led_converter.exporters.json_export import JsonExporter
from led_converter.exporters.memory_report import (
    MEMORY_WARNING_BYTES,
    MemoryUsage,
    calculate_memory_usage,
    generate_memory_report,
)
from led_converter.exporters.structured_text import StructuredTextExporter
from led_converter.exporters.tc_gvl import TcGvlExporter
from led_converter.models.enums import ArtifactType
from led_converter.models.frame_sequence import FrameSequence
from led_converter.models.grid import Grid
from led_converter.models.output_spec import OutputSpec
from led_converter.utils.identifiers import generate_guid


class ArtifactEmitter:
    """
    Artifact facade

    Example:
        emitter = ArtifactEmitter()
        spec = OutputSpec.for_sequence(sequence, "FIRE", brightness=80, fps=24)

        txt = emitter.emit(ArtifactType.STRUCTURED_TEXT, sequence, spec)
        gvl = emitter.emit(ArtifactType.TC_GVL, sequence, spec)
        report = emitter.memory_report(sequence, spec)
    """

    def __init__(
        self,
        codec: Optional[PixelCodec] = None,
        guid_factory: Callable[[], str] = generate_guid,
        memory_warning_bytes: int = MEMORY_WARNING_BYTES,
    ):
        self.codec = codec or PixelCodec()
        self.memory_warning_bytes = memory_warning_bytes
        self._structured_text = StructuredTextExporter(self.codec)
        self._tc_gvl = TcGvlExporter(self.codec, guid_factory=guid_factory)
        self._json = JsonExporter(self.codec)
        self._exporters = {
            ArtifactType.STRUCTURED_TEXT: self._structured_text,
            ArtifactType.TC_GVL: self._tc_gvl,
            ArtifactType.JSON: self._json,
        }

    def emit(
        self,
        artifact: ArtifactType,
        sequence: FrameSequence,
        spec: OutputSpec,
        generated_at: Optional[datetime] = None,
    ) -> ExportResult:
        return self._exporters[artifact].export(sequence, spec, generated_at)

    def structured_text(self, sequence: FrameSequence, spec: OutputSpec, generated_at: Optional[datetime] = None) -> ExportResult:
        return self._structured_text.export(sequence, spec, generated_at)

    def structured_text_image(self, grid: Optional[Grid], spec: OutputSpec, generated_at: Optional[datetime] = None) -> ExportResult:
        return self._structured_text.export_image(grid, spec, generated_at)

    def tc_gvl(self, sequence: FrameSequence, spec: OutputSpec) -> ExportResult:
        return self._tc_gvl.export(sequence, spec)

    def json(self, sequence: FrameSequence, spec: OutputSpec, generated_at: Optional[datetime] = None) -> ExportResult:
        return self._json.export(sequence, spec, generated_at)

    def memory_usage(self, sequence: FrameSequence, spec: Optional[OutputSpec] = None) -> MemoryUsage:
        width = spec.width if spec and spec.width else sequence.width
        height = spec.height if spec and spec.height else sequence.height
        return calculate_memory_usage(len(sequence), width, height)

    def memory_report(self, sequence: FrameSequence, spec: OutputSpec) -> str:
        usage = self.memory_usage(sequence, spec)
        return generate_memory_report(spec.name, usage, self.memory_warning_bytes)
