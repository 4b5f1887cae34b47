"""
Playback state model

Owned by PlaybackController; callers only ever see copies.
"""

from dataclasses import dataclass

from led_converter.models.enums import LoopMode, PlayState


@dataclass
class PlaybackState:
    """Mutable playback state (current frame, discipline, direction, playing flag)"""
    index: int = 0
    loop_mode: LoopMode = LoopMode.LOOP
    direction: int = 1
    playing: bool = False

    @property
    def play_state(self) -> PlayState:
        return PlayState.PLAYING if self.playing else PlayState.STOPPED
