"""
Resampler - maps a source grid onto a target grid of caller-chosen size

Every mode resolves a source rectangle and a destination rectangle on a
target canvas pre-filled with opaque black, then copies pixels with
nearest-neighbour sampling (no smoothing). When the two rectangles have the
same size the copy is verbatim.

Modes:
    crop-top     window from the top-left, shifted by the offset
    crop-bottom  window anchored to the bottom rows, shifted by the offset
    crop-center  window centered on the source, shifted by the offset
    stretch      whole source onto the whole target
    fit          whole source, uniform scale, centered (letterboxed)
"""

import math
from dataclasses import dataclass
from typing import List, Optional, Union

from led_converter.models.enums import ResizeMode, LogCategory
from led_converter.models.errors import InvalidModeError
from led_converter.models.grid import Grid
from led_converter.models.sample import Sample
from led_converter.utils.logger import get_category_logger

log = get_category_logger(LogCategory.RESAMPLE)


@dataclass(frozen=True)
class Rect:
    x: int
    y: int
    width: int
    height: int


@dataclass(frozen=True)
class Placement:
    """Source and destination rectangles for one resample call"""
    source: Rect
    dest: Rect


def parse_resize_mode(mode: Union[ResizeMode, str]) -> ResizeMode:
    if isinstance(mode, ResizeMode):
        return mode
    try:
        return ResizeMode(mode)
    except ValueError:
        raise InvalidModeError("Resize mode", mode, [m.value for m in ResizeMode])


class Resampler:
    """
    Stateless resampling engine

    Example:
        resampler = Resampler()
        strip = resampler.resample(grid, 64, 1, ResizeMode.CROP_BOTTOM)
        fitted = resampler.resample(grid, 16, 16, "fit")
    """

    BACKGROUND = Sample.black()

    # ============================================================
    # Geometry
    # ============================================================

    def crop_window(
        self,
        source_width: int,
        source_height: int,
        target_width: int,
        target_height: int,
        mode: Union[ResizeMode, str],
        offset_x: int = 0,
        offset_y: int = 0,
    ) -> Optional[Rect]:
        """
        Source window used by the crop modes, clamped inside the source

        Returns:
            Rect of the exported area, or None for stretch/fit (no window)
        """
        mode = parse_resize_mode(mode)
        if not mode.is_crop:
            return None

        sw = min(target_width, source_width)
        sh = min(target_height, source_height)

        if mode == ResizeMode.CROP_TOP:
            sx = offset_x
            sy = offset_y
        elif mode == ResizeMode.CROP_BOTTOM:
            sx = offset_x
            sy = max(0, source_height - sh) + offset_y
        else:
            sx = (source_width - sw) // 2 + offset_x
            sy = (source_height - sh) // 2 + offset_y

        # Offsets never push the window outside the source
        sx = max(0, min(sx, source_width - sw))
        sy = max(0, min(sy, source_height - sh))
        return Rect(sx, sy, sw, sh)

    def placement(
        self,
        source_width: int,
        source_height: int,
        target_width: int,
        target_height: int,
        mode: Union[ResizeMode, str],
        offset_x: int = 0,
        offset_y: int = 0,
    ) -> Placement:
        """Resolve source and destination rectangles for a mode"""
        mode = parse_resize_mode(mode)
        full_target = Rect(0, 0, target_width, target_height)

        if mode.is_crop:
            window = self.crop_window(
                source_width, source_height, target_width, target_height,
                mode, offset_x, offset_y
            )
            return Placement(source=window, dest=full_target)

        full_source = Rect(0, 0, source_width, source_height)

        if mode == ResizeMode.STRETCH:
            return Placement(source=full_source, dest=full_target)

        # FIT: uniform scale, centered
        factor = min(target_width / source_width, target_height / source_height)
        dw = math.floor(source_width * factor)
        dh = math.floor(source_height * factor)
        dx = (target_width - dw) // 2
        dy = (target_height - dh) // 2
        return Placement(source=full_source, dest=Rect(dx, dy, dw, dh))

    # ============================================================
    # Pixel remap
    # ============================================================

    def resample(
        self,
        source: Grid,
        target_width: int,
        target_height: int,
        mode: Union[ResizeMode, str] = ResizeMode.CROP_TOP,
        offset_x: int = 0,
        offset_y: int = 0,
    ) -> Grid:
        """
        Produce a target_width x target_height grid from source

        Args:
            source: Decoded source grid
            target_width, target_height: Output size (positive ints)
            mode: Placement mode (enum or its string value)
            offset_x, offset_y: Crop window shift (ignored by stretch/fit)

        Returns:
            New Grid; area not covered by the destination rect is opaque black
        """
        place = self.placement(
            source.width, source.height, target_width, target_height,
            mode, offset_x, offset_y
        )
        src, dst = place.source, place.dest

        canvas: List[Sample] = [self.BACKGROUND] * (target_width * target_height)

        if dst.width > 0 and dst.height > 0:
            col_map = self._axis_map(src.x, src.width, dst.width)
            row_map = self._axis_map(src.y, src.height, dst.height)
            samples = source.samples

            for j, sy in enumerate(row_map):
                src_row = sy * source.width
                out_row = (dst.y + j) * target_width + dst.x
                for i, sx in enumerate(col_map):
                    canvas[out_row + i] = samples[src_row + sx]

        log.debug(
            "Resampled grid",
            source=f"{source.width}x{source.height}",
            target=f"{target_width}x{target_height}",
            mode=parse_resize_mode(mode).value,
            window=f"{src.x},{src.y} {src.width}x{src.height}",
        )
        return Grid(target_width, target_height, canvas)

    @staticmethod
    def _axis_map(start: int, src_len: int, dst_len: int) -> List[int]:
        """
        Nearest-neighbour source coordinate for each destination coordinate,
        sampled at pixel centers
        """
        last = start + src_len - 1
        return [
            min(last, start + math.floor((d + 0.5) * src_len / dst_len))
            for d in range(dst_len)
        ]
