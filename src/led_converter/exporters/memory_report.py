"""
Memory usage estimate for exported frame data

Each pixel is one DWORD (4 bytes) in PLC memory. Totals above the warning
threshold (10 MiB by default) get advisory text; the report never blocks an
export.
"""

from dataclasses import dataclass

from led_converter.exporters.base import COMMENT_RULE
from led_converter.models.enums import LogCategory
from led_converter.utils.logger import get_category_logger
from led_converter.utils.numbers import format_fixed

log = get_category_logger(LogCategory.EXPORT)

BYTES_PER_PIXEL = 4
MEMORY_WARNING_BYTES = 10 * 1024 * 1024


@dataclass(frozen=True)
class MemoryUsage:
    pixels_per_frame: int
    bytes_per_frame: int
    total_frames: int
    total_bytes: int

    @property
    def total_kb(self) -> str:
        return format_fixed(self.total_bytes / 1024)

    @property
    def total_mb(self) -> str:
        return format_fixed(self.total_bytes / (1024 * 1024))

    def exceeds(self, threshold: int = MEMORY_WARNING_BYTES) -> bool:
        return self.total_bytes > threshold


def calculate_memory_usage(frame_count: int, width: int, height: int) -> MemoryUsage:
    pixels_per_frame = width * height
    bytes_per_frame = pixels_per_frame * BYTES_PER_PIXEL
    return MemoryUsage(
        pixels_per_frame=pixels_per_frame,
        bytes_per_frame=bytes_per_frame,
        total_frames=frame_count,
        total_bytes=bytes_per_frame * frame_count,
    )


def generate_memory_report(name: str, usage: MemoryUsage, threshold: int = MEMORY_WARNING_BYTES) -> str:
    """Commented text block describing usage, with advisory lines over threshold"""
    lines = [
        COMMENT_RULE,
        f"(* MEMORY USAGE REPORT: {name} *)",
        COMMENT_RULE,
        f"(* Pixels per frame: {usage.pixels_per_frame} *)",
        f"(* Bytes per frame: {usage.bytes_per_frame} bytes *)",
        f"(* Total frames: {usage.total_frames} *)",
        f"(* Total memory: {usage.total_bytes} bytes ({usage.total_kb} KB / {usage.total_mb} MB) *)",
        COMMENT_RULE,
    ]

    if usage.exceeds(threshold):
        log.warn("Animation exceeds memory advisory threshold", name=name, total_mb=usage.total_mb)
        lines += [
            f"(* WARNING: Animation exceeds {threshold / (1024 * 1024):g}MB! Consider: *)",
            "(* - Reducing frame count *)",
            "(* - Decreasing resolution *)",
            "(* - Loading frames from file instead *)",
            COMMENT_RULE,
        ]

    return "\n".join(lines) + "\n"
