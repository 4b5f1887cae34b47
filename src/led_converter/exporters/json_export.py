"""
JSON interchange exporter

Schema:
    {
      "metadata": {name, frameCount, width, height, fps, duration,
                   brightness, pixelsPerFrame, generated},
      "frames": [{index, filename, pixels: [{dword: "0x00BBGGRR", rgb: {r, g, b}}]}],
      "usage": {...static documentation...}
    }

rgb carries the brightness-scaled channels before the 8-bit packing mask.
"""

import json
from datetime import datetime
from typing import Any, Dict, Optional

from led_converter.engine.pixel_codec import EncodedPixel, format_dword
from led_converter.exporters.base import BaseExporter, ExportResult
from led_converter.models.enums import ArtifactType, LogCategory
from led_converter.models.frame_sequence import FrameSequence
from led_converter.models.output_spec import OutputSpec
from led_converter.utils.logger import get_category_logger

log = get_category_logger(LogCategory.EXPORT)

USAGE_INFO: Dict[str, Any] = {
    "description": "Animation data in portable JSON format",
    "formats": {
        "dword": "32-bit DWORD in 0x00BBGGRR format",
        "rgb": "Individual red, green, blue components (0-255)",
    },
    "examples": {
        "twincat": "Use DWORD values directly in TwinCAT arrays",
        "javascript": "Use RGB values for HTML5 canvas rendering",
        "python": "Parse JSON for LED controller scripts",
    },
}


def _number(value):
    """Whole floats are written as integers (2.0 -> 2)"""
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def _iso_millis(moment: datetime) -> str:
    """UTC ISO-8601 with millisecond precision and Z suffix"""
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


class JsonExporter(BaseExporter):
    """
    JSON interchange generator

    Example:
        data = JsonExporter().build(sequence, spec)
        data["metadata"]["duration"]
    """

    def build(self, sequence: FrameSequence, spec: OutputSpec, generated_at: Optional[datetime] = None) -> Dict[str, Any]:
        """Interchange document as plain dicts/lists"""
        self.require_frames(sequence)
        spec = self.resolve_spec(sequence, spec)
        frame_count = len(sequence)

        return {
            "metadata": {
                "name": spec.name,
                "frameCount": frame_count,
                "width": spec.width,
                "height": spec.height,
                "fps": _number(spec.fps),
                "duration": _number(frame_count / spec.fps),
                "brightness": _number(spec.brightness),
                "pixelsPerFrame": spec.width * spec.height,
                "generated": _iso_millis(self.now(generated_at)),
            },
            "frames": [
                {
                    "index": frame.index,
                    "filename": frame.filename,
                    "pixels": [self._pixel_to_dict(p) for p in self.frame_pixels(frame, spec)],
                }
                for frame in sequence
            ],
            "usage": USAGE_INFO,
        }

    def export(self, sequence: FrameSequence, spec: OutputSpec, generated_at: Optional[datetime] = None) -> ExportResult:
        data = self.build(sequence, spec, generated_at)
        content = json.dumps(data, indent=2, ensure_ascii=False)
        log.info("JSON generated", name=spec.name, frames=len(sequence), bytes=len(content))
        return ExportResult(ArtifactType.JSON, f"{spec.name}.json", content)

    @staticmethod
    def _pixel_to_dict(pixel: EncodedPixel) -> Dict[str, Any]:
        return {
            "dword": "0x" + format_dword(pixel.dword),
            "rgb": {"r": pixel.r, "g": pixel.g, "b": pixel.b},
        }
