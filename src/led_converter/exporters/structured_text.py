"""
TwinCAT structured text exporter (.txt)

Produces constants, one DWORD array per frame (one source row per line),
a pointer array over the frames, and a commented usage example that can be
pasted into a function block.
"""

from datetime import datetime
from typing import List, Optional

from led_converter.exporters.base import BaseExporter, ExportResult, COMMENT_RULE, dword_array_body, resolve_size
from led_converter.models.enums import ArtifactType, LogCategory
from led_converter.models.errors import MissingSourceDataError
from led_converter.models.frame_sequence import FrameSequence
from led_converter.models.grid import Grid
from led_converter.models.output_spec import OutputSpec
from led_converter.utils.logger import get_category_logger
from led_converter.utils.numbers import format_fixed

log = get_category_logger(LogCategory.EXPORT)


class StructuredTextExporter(BaseExporter):
    """
    Structured text generator

    Example:
        exporter = StructuredTextExporter()
        result = exporter.export(sequence, OutputSpec.for_sequence(sequence, "FIRE", fps=24))
        Path(result.filename).write_text(result.content)
    """

    def export(self, sequence: FrameSequence, spec: OutputSpec, generated_at: Optional[datetime] = None) -> ExportResult:
        self.require_frames(sequence)
        spec = self.resolve_spec(sequence, spec)
        name, width, height, fps = spec.name, spec.width, spec.height, spec.fps
        frame_count = len(sequence)
        date = self.now(generated_at).strftime("%Y-%m-%d")

        lines: List[str] = [
            COMMENT_RULE,
            f"(* Animation: {name} *)",
            f"(* Frames: {frame_count} *)",
            f"(* Resolution: {width}x{height} *)",
            f"(* FPS: {fps} *)",
            f"(* Duration: {format_fixed(frame_count / fps)}s *)",
            f"(* Generated: {date} *)",
            COMMENT_RULE,
            "",
            "(* Animation constants *)",
            f"nFrameCount_{name} : INT := {frame_count};",
            f"nWidth_{name} : INT := {width};",
            f"nHeight_{name} : INT := {height};",
            f"nFPS_{name} : INT := {fps};",
            f"nPixelsPerFrame_{name} : INT := {width * height};",
            "",
            "(* Frame pixel data *)",
        ]
        out = "\n".join(lines) + "\n"

        for frame in sequence:
            pixels = self.frame_pixels(frame, spec)
            out += f"{self.frame_array_name(name, frame.index)} : ARRAY[0..{len(pixels) - 1}] OF DWORD := [\n"
            out += dword_array_body(pixels, "    ", width, break_after_last=True)
            out += "];\n\n"

        out += "(* Frame pointer array for easy access *)\n"
        out += (
            f"(* Usage: MEMCPY(ADR(aLEDBuffer), ADR(aFrames_{name}[currentFrame]^), "
            f"nPixelsPerFrame_{name} * SIZEOF(DWORD)); *)\n"
        )
        out += f"aFrames_{name} : ARRAY[0..{frame_count - 1}] OF POINTER TO DWORD := [\n"
        out += ",\n".join(f"    ADR({self.frame_array_name(name, f.index)})" for f in sequence) + "\n"
        out += "];\n\n"
        out += self._usage_example(name, width * height)

        log.info("Structured text generated", name=name, frames=frame_count, size=f"{width}x{height}")
        return ExportResult(ArtifactType.STRUCTURED_TEXT, f"{name}.txt", out)

    def export_image(self, grid: Optional[Grid], spec: OutputSpec, generated_at: Optional[datetime] = None) -> ExportResult:
        """
        Single image variant: width/height constants and one aArray_ literal,
        no frame wrapper. The result has no trailing newline.
        """
        if grid is None:
            raise MissingSourceDataError("No image to export")

        name = spec.name
        width, height = resolve_size(spec, grid.width, grid.height)
        date = self.now(generated_at).strftime("%Y-%m-%d")
        pixels = self.codec.encode_pixels(grid, spec.brightness)

        out = (
            f"(* Image: {name} *)\n"
            f"(* Resolution: {width}x{height} *)\n"
            f"(* Generated: {date} *)\n\n"
            f"nWidth_{name} : INT := {width};\n"
            f"nHeight_{name} : INT := {height};\n\n"
            f"aArray_{name} : ARRAY[0..{len(pixels) - 1}] OF DWORD := [\n"
        )
        out += dword_array_body(pixels, "    ", width, break_after_last=True)
        out += "];"

        log.info("Image structured text generated", name=name, size=f"{width}x{height}")
        return ExportResult(ArtifactType.STRUCTURED_TEXT, f"{name}.txt", out)

    @staticmethod
    def _usage_example(name: str, pixels_per_frame: int) -> str:
        return "\n".join([
            COMMENT_RULE,
            "(* USAGE EXAMPLE:",
            "(*",
            "(* Declare in your FB: *)",
            "VAR",
            "    nCurrentFrame : INT := 0;",
            "    fFrameTimer : TON;",
            f"    nFrameInterval : TIME := INT_TO_TIME(1000 / nFPS_{name}); // ms per frame",
            f"    aLEDBuffer : ARRAY[0..{pixels_per_frame - 1}] OF DWORD;",
            "END_VAR",
            "",
            "(* In your FB code: *)",
            "fFrameTimer(IN := TRUE, PT := nFrameInterval);",
            "",
            "IF fFrameTimer.Q THEN",
            "    fFrameTimer(IN := FALSE);",
            "    ",
            "    // Copy frame to LED buffer",
            "    MEMCPY(",
            "        ADR(aLEDBuffer),",
            f"        aFrames_{name}[nCurrentFrame],",
            f"        nPixelsPerFrame_{name} * SIZEOF(DWORD)",
            "    );",
            "    ",
            "    // Advance frame (loop)",
            f"    nCurrentFrame := (nCurrentFrame + 1) MOD nFrameCount_{name};",
            "    ",
            "    // Send buffer to LED strip",
            "    fbLEDStrip.UpdatePixels(aLEDBuffer);",
            "END_IF",
            "*)",
            COMMENT_RULE,
        ]) + "\n"
