"""
Domain models for the LED animation converter
"""

from .enums import ArtifactType, LoopMode, PlayState, ResizeMode, LogCategory, LogLevel
from .errors import (
    ConverterError,
    DimensionMismatchError,
    MissingSourceDataError,
    InvalidModeError,
    OutputSizeMismatchError,
)
from .sample import Sample
from .grid import Grid, Frame
from .frame_sequence import FrameSequence
from .output_spec import OutputSpec
from .playback import PlaybackState
from .events import EventType, Event, FrameChangeEvent, PlayStateChangeEvent

__all__ = [
    'ArtifactType',
    'LoopMode',
    'PlayState',
    'ResizeMode',
    'LogCategory',
    'LogLevel',
    'ConverterError',
    'DimensionMismatchError',
    'MissingSourceDataError',
    'InvalidModeError',
    'OutputSizeMismatchError',
    'Sample',
    'Grid',
    'Frame',
    'FrameSequence',
    'OutputSpec',
    'PlaybackState',
    'EventType',
    'Event',
    'FrameChangeEvent',
    'PlayStateChangeEvent',
]
