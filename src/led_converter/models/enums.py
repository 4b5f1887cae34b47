"""
Enums for the LED animation converter
"""

from enum import Enum, auto


class ResizeMode(Enum):
    """
    Placement strategies used when resampling a source raster

    CROP_TOP: Window anchored top-left (After Effects 4px height -> 1px strip)
    CROP_BOTTOM: Window anchored to the bottom rows
    CROP_CENTER: Window centered on the source
    STRETCH: Whole source scaled to the target, aspect ratio ignored
    FIT: Whole source scaled uniformly and centered, black letterbox
    """
    CROP_TOP = "crop-top"
    CROP_BOTTOM = "crop-bottom"
    CROP_CENTER = "crop-center"
    STRETCH = "stretch"
    FIT = "fit"

    @property
    def is_crop(self) -> bool:
        return self in (ResizeMode.CROP_TOP, ResizeMode.CROP_BOTTOM, ResizeMode.CROP_CENTER)


class LoopMode(Enum):
    """Loop disciplines for frame playback"""
    LOOP = "loop"      # Wrap to first frame after the last
    ONCE = "once"      # Stop on the last frame
    BOUNCE = "bounce"  # Ping-pong between first and last frame


class PlayState(Enum):
    """Playback controller states"""
    STOPPED = auto()
    PLAYING = auto()


class ArtifactType(Enum):
    """Textual artifacts produced by the emitter"""
    STRUCTURED_TEXT = auto()  # TwinCAT structured text (.txt)
    TC_GVL = auto()           # TwinCAT global variable list (.TcGVL)
    JSON = auto()             # JSON interchange


class LogLevel(Enum):
    """Log severity levels"""
    DEBUG = auto()
    INFO = auto()
    WARN = auto()
    ERROR = auto()


class LogCategory(Enum):
    """Log categories for grouping related events"""
    CONFIG = auto()      # Configuration loading, validation
    RESAMPLE = auto()    # Resize / crop operations
    SEQUENCE = auto()    # Frame ingestion
    PLAYBACK = auto()    # Play/stop/frame advance
    EXPORT = auto()      # Artifact generation
    EVENT = auto()       # Event bus subscriptions and dispatch
    SYSTEM = auto()      # Startup, shutdown, errors
