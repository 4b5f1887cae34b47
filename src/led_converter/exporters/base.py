"""
Shared exporter plumbing

ExportResult pairs the generated content with a suggested file name; the
presentation layer decides where (and whether) to write it. Artifacts are
assembled completely in memory before being returned.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import List, Optional, Sequence, Tuple

from led_converter.engine.pixel_codec import EncodedPixel, PixelCodec, format_dword
from led_converter.models.enums import ArtifactType
from led_converter.models.errors import MissingSourceDataError, OutputSizeMismatchError
from led_converter.models.frame_sequence import FrameSequence
from led_converter.models.grid import Frame
from led_converter.models.output_spec import OutputSpec
from led_converter.utils.naming import frame_suffix

COMMENT_RULE = "(* ===================================================== *)"


@dataclass(frozen=True)
class ExportResult:
    """Generated artifact plus the file name the UI should offer"""
    artifact: ArtifactType
    filename: str
    content: str

    @property
    def size_bytes(self) -> int:
        return len(self.content.encode("utf-8"))


class BaseExporter:
    """Common helpers for all artifact exporters"""

    def __init__(self, codec: Optional[PixelCodec] = None):
        self.codec = codec or PixelCodec()

    @staticmethod
    def require_frames(sequence: FrameSequence) -> None:
        if len(sequence) == 0:
            raise MissingSourceDataError("No frames to export")

    @staticmethod
    def resolve_spec(sequence: FrameSequence, spec: OutputSpec) -> OutputSpec:
        """
        Fill in width/height from the sequence when the output spec leaves them at 0

        Raises:
            OutputSizeMismatchError: explicit width/height differ from the frames
        """
        width, height = resolve_size(spec, sequence.width, sequence.height)
        return replace(spec, width=width, height=height)

    def frame_pixels(self, frame: Frame, spec: OutputSpec) -> List[EncodedPixel]:
        return self.codec.encode_pixels(frame.grid, spec.brightness)

    @staticmethod
    def now(generated_at: Optional[datetime]) -> datetime:
        if generated_at is None:
            return datetime.now(timezone.utc)
        if generated_at.tzinfo is None:
            return generated_at.replace(tzinfo=timezone.utc)
        return generated_at.astimezone(timezone.utc)

    @staticmethod
    def frame_array_name(name: str, index: int) -> str:
        return f"aFrame_{name}_{frame_suffix(index)}"


def resolve_size(spec: OutputSpec, frame_width: int, frame_height: int) -> Tuple[int, int]:
    """Output size for frames of frame_width x frame_height (0 in the spec means "use the frames")"""
    width = spec.width or frame_width
    height = spec.height or frame_height
    if (width, height) != (frame_width, frame_height):
        raise OutputSizeMismatchError(width, height, frame_width, frame_height)
    return width, height


def dword_array_body(
    pixels: Sequence[EncodedPixel],
    indent: str,
    wrap_every: int,
    break_after_last: bool,
) -> str:
    """
    Comma separated 16#XXXXXXXX tokens, each prefixed with indent.

    A newline follows every wrap_every-th token; after the very last token
    only when break_after_last is set.
    """
    parts: List[str] = []
    last = len(pixels) - 1
    for j, px in enumerate(pixels):
        parts.append(f"{indent}16#{format_dword(px.dword)}")
        if j < last:
            parts.append(",")
        if wrap_every > 0 and (j + 1) % wrap_every == 0 and (break_after_last or j < last):
            parts.append("\n")
    return "".join(parts)
