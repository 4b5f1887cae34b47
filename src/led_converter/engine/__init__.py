"""
Pixel pipeline: brightness/packing codec and resampling
"""

from .pixel_codec import PixelCodec, EncodedPixel, encode, scale, pack_rgb, format_dword
from .resampler import Resampler, Rect, Placement, parse_resize_mode

__all__ = [
    'PixelCodec',
    'EncodedPixel',
    'encode',
    'scale',
    'pack_rgb',
    'format_dword',
    'Resampler',
    'Rect',
    'Placement',
    'parse_resize_mode',
]
