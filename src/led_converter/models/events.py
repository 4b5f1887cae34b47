"""
Playback events

Two independent streams: frame changes and play-state changes. Each event
carries a timestamp so display collaborators can measure tick jitter.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Dict


class EventType(Enum):
    FRAME_CHANGE = auto()
    PLAY_STATE_CHANGE = auto()


@dataclass
class Event:
    """
    Base event class.

    - type: EventType
    - timestamp: auto
    """
    type: EventType
    timestamp: float = field(default_factory=time.time, kw_only=True)

    def to_data(self) -> Dict[str, Any]:
        """Event payload without metadata"""
        return {
            k: v for k, v in self.__dict__.items()
            if k not in ("type", "timestamp")
        }


@dataclass
class FrameChangeEvent(Event):
    """Current frame index changed (tick, scrub or step)"""
    type: EventType = field(default=EventType.FRAME_CHANGE, init=False)
    index: int = 0


@dataclass
class PlayStateChangeEvent(Event):
    """Controller switched between playing and stopped"""
    type: EventType = field(default=EventType.PLAY_STATE_CHANGE, init=False)
    playing: bool = False
