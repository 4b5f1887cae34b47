"""
Naming helpers for TwinCAT identifiers

TwinCAT variable names in the generated code are built as
<prefix>_<NAME>[_<index>], so NAME must be restricted to [A-Z0-9_].
"""

import re
from pathlib import PurePath
from typing import List, Union

_INVALID_CHARS = re.compile(r'[^A-Z0-9_]')
_TRAILING_DIGITS = re.compile(r'\d+$')
_DIGIT_RUNS = re.compile(r'(\d+)')


def sanitize_name(name: str) -> str:
    """
    Upper-case and replace every character outside [A-Z0-9_] with '_'

    Example:
        sanitize_name("fire-loop 2")  # "FIRE_LOOP_2"
    """
    return _INVALID_CHARS.sub('_', name.upper())


def file_stem(filename: str) -> str:
    """File name without directory and last extension ("a.b.png" -> "a.b")"""
    name = PurePath(filename).name
    dot = name.rfind('.')
    return name[:dot] if dot > 0 else name


def default_image_name(filename: str, fallback: str = "MY_IMAGE") -> str:
    """Identifier for a single image, derived from its file name"""
    return sanitize_name(file_stem(filename) or fallback)


def default_animation_name(filename: str, fallback: str = "MY_ANIMATION") -> str:
    """
    Identifier for a sequence, derived from its first frame's file name
    with the frame number stripped

    Example:
        default_animation_name("fire_0001.png")  # "FIRE_"
    """
    stem = file_stem(filename) or fallback
    return sanitize_name(_TRAILING_DIGITS.sub('', stem) or fallback)


def natural_sort_key(name: str) -> List[Union[int, str]]:
    """Sort key that orders embedded numbers numerically (frame2 < frame10)"""
    return [
        int(part) if part.isdigit() else part.lower()
        for part in _DIGIT_RUNS.split(name)
    ]


def frame_suffix(index: int) -> str:
    """Three-digit zero padded frame index used in array names"""
    return f"{index:03d}"
