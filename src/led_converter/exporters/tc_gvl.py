"""
TwinCAT Global Variable List exporter (.TcGVL)

Wraps the animation constants and frame arrays in the TcPlcObject XML
scaffold so the file can be added to a TwinCAT 3 project directly. Array
literals wrap every 4 elements.
"""

from typing import Callable, Optional
from datetime import datetime

from led_converter.exporters.base import BaseExporter, ExportResult, dword_array_body
from led_converter.engine.pixel_codec import PixelCodec
from led_converter.models.enums import ArtifactType, LogCategory
from led_converter.models.frame_sequence import FrameSequence
from led_converter.models.output_spec import OutputSpec
from led_converter.utils.identifiers import generate_guid
from led_converter.utils.logger import get_category_logger

log = get_category_logger(LogCategory.EXPORT)

TC_PLC_OBJECT_VERSION = "1.1.0.1"
TC_PRODUCT_VERSION = "3.1.4024.12"
ELEMENTS_PER_LINE = 4


class TcGvlExporter(BaseExporter):
    """
    GVL generator

    Example:
        result = TcGvlExporter().export(sequence, spec)
        result.filename  # "GVL_Anim_FIRE.TcGVL"
    """

    def __init__(self, codec: Optional[PixelCodec] = None, guid_factory: Callable[[], str] = generate_guid):
        super().__init__(codec)
        self.guid_factory = guid_factory

    def export(self, sequence: FrameSequence, spec: OutputSpec, generated_at: Optional[datetime] = None) -> ExportResult:
        # generated_at accepted for a uniform exporter signature; the GVL carries no date
        self.require_frames(sequence)
        spec = self.resolve_spec(sequence, spec)
        name, width, height = spec.name, spec.width, spec.height
        frame_count = len(sequence)
        gvl_name = f"GVL_Anim_{name}"
        guid = self.guid_factory()

        out = (
            '<?xml version="1.0" encoding="utf-8"?>\n'
            f'<TcPlcObject Version="{TC_PLC_OBJECT_VERSION}" ProductVersion="{TC_PRODUCT_VERSION}">\n'
            f'  <GVL Name="{gvl_name}" Id="{{{guid}}}">\n'
            "    <Declaration><![CDATA[{attribute 'qualified_only'}\n"
            "VAR_GLOBAL CONSTANT\n"
            "    // Animation metadata\n"
            f"    nFrameCount_{name} : INT := {frame_count};\n"
            f"    nWidth_{name} : INT := {width};\n"
            f"    nHeight_{name} : INT := {height};\n"
            f"    nFPS_{name} : INT := {spec.fps};\n"
            f"    nPixelsPerFrame_{name} : INT := {width * height};\n\n"
        )

        for frame in sequence:
            pixels = self.frame_pixels(frame, spec)
            out += f"    {self.frame_array_name(name, frame.index)} : ARRAY[0..{len(pixels) - 1}] OF DWORD := [\n"
            out += dword_array_body(pixels, "        ", ELEMENTS_PER_LINE, break_after_last=False)
            out += "\n    ];\n\n"

        out += "    // Frame pointer array for playback\n"
        out += (
            f"    aFramePointers_{name} : ARRAY[0..{frame_count - 1}] OF POINTER TO "
            f"ARRAY[0..{width * height - 1}] OF DWORD := [\n"
        )
        out += ",\n".join(f"        ADR({self.frame_array_name(name, f.index)})" for f in sequence) + "\n"
        out += (
            "    ];\n"
            "END_VAR]]></Declaration>\n"
            "  </GVL>\n"
            "</TcPlcObject>\n"
        )

        log.info("TcGVL generated", name=gvl_name, frames=frame_count, id=guid)
        return ExportResult(ArtifactType.TC_GVL, f"{gvl_name}.TcGVL", out)
