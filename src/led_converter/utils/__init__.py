"""
Utility functions for the LED animation converter
"""

from .naming import (
    sanitize_name,
    file_stem,
    default_image_name,
    default_animation_name,
    natural_sort_key,
    frame_suffix,
)
from .identifiers import generate_guid, is_guid
from .numbers import format_fixed

__all__ = [
    'sanitize_name',
    'file_stem',
    'default_image_name',
    'default_animation_name',
    'natural_sort_key',
    'frame_suffix',
    'generate_guid',
    'is_guid',
    'format_fixed',
]
