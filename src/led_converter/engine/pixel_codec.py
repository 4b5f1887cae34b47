"""
Pixel codec - packs samples into TwinCAT DWORDs

Word layout (0x00BBGGRR):
    bits  0-7   red
    bits  8-15  green
    bits 16-23  blue
    bits 24-31  always zero (alpha is dropped by the transport format)

Brightness is applied before packing. Scaled channels are NOT clamped to
255; when a channel overflows, the 8-bit packing mask drops its high bits.
"""

import math
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from led_converter.models.sample import Sample

CHANNEL_MASK = 0xFF


def pack_rgb(r: int, g: int, b: int) -> int:
    """Pack three channels into a 0x00BBGGRR word"""
    return ((b & CHANNEL_MASK) << 16) | ((g & CHANNEL_MASK) << 8) | (r & CHANNEL_MASK)


def encode(sample: Sample) -> int:
    """
    Encode a sample as a packed word

    Example:
        encode(Sample(0x11, 0x22, 0x33))  # 0x00332211
    """
    return pack_rgb(sample.r, sample.g, sample.b)


def scale_channel(value: int, scale: float) -> int:
    """Round half up, clamp at 0 only"""
    return max(0, math.floor(value * scale + 0.5))


def scale(sample: Sample, percent: float) -> Sample:
    """
    Apply brightness to r/g/b, alpha passes through unchanged

    Args:
        sample: Source sample
        percent: Brightness percentage (100 = unchanged, >100 may exceed 255)

    Returns:
        New Sample with scaled channels
    """
    if percent == 100:
        return sample
    factor = percent / 100
    return Sample(
        scale_channel(sample.r, factor),
        scale_channel(sample.g, factor),
        scale_channel(sample.b, factor),
        sample.a,
    )


def format_dword(word: int) -> str:
    """8 uppercase hex digits, zero padded"""
    return f"{word:08X}"


@dataclass(frozen=True)
class EncodedPixel:
    """
    A (brightness-adjusted) sample with its packed word

    The word is derived from the channels on access, so the two can never
    drift apart.
    """
    sample: Sample

    @property
    def dword(self) -> int:
        return encode(self.sample)

    @property
    def hex(self) -> str:
        return format_dword(self.dword)

    @property
    def r(self) -> int:
        return self.sample.r

    @property
    def g(self) -> int:
        return self.sample.g

    @property
    def b(self) -> int:
        return self.sample.b


class PixelCodec:
    """
    Brightness + packing pipeline used by every exporter

    Example:
        codec = PixelCodec()
        pixels = codec.encode_pixels(frame.grid, brightness=80)
        words = [p.dword for p in pixels]
    """

    def encode_pixel(self, sample: Sample, brightness: Optional[float] = None) -> EncodedPixel:
        if brightness is None:
            return EncodedPixel(sample)
        return EncodedPixel(scale(sample, brightness))

    def encode_pixels(self, samples: Iterable[Sample], brightness: Optional[float] = None) -> List[EncodedPixel]:
        return [self.encode_pixel(s, brightness) for s in samples]

    def encode_words(self, samples: Iterable[Sample], brightness: Optional[float] = None) -> List[int]:
        return [p.dword for p in self.encode_pixels(samples, brightness)]

    @staticmethod
    def decode(word: int) -> Tuple[int, int, int]:
        """Unpack a word back into (r, g, b)"""
        return (word & CHANNEL_MASK, (word >> 8) & CHANNEL_MASK, (word >> 16) & CHANNEL_MASK)
