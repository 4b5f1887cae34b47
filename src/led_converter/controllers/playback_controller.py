"""
Animation playback controller.

Advances a current-frame index over a frame sequence on a fixed-period
clock, under one of three loop disciplines, and publishes two separate
notification streams (frame change, play-state change).

States:
- STOPPED --play()--> PLAYING
- PLAYING --stop()--> STOPPED
- PLAYING --advance() reaching the last frame under ONCE--> STOPPED

Navigation (go_to_frame, next_frame, previous_frame) works in both states
and never changes the play state.
"""

from typing import Callable, Optional, Sized, Union

from led_converter.controllers.interval_timer import IntervalTimer, AsyncioIntervalTimer
from led_converter.models.enums import LogCategory, LoopMode
from led_converter.models.errors import InvalidModeError
from led_converter.models.events import EventType, Event, FrameChangeEvent, PlayStateChangeEvent
from led_converter.models.playback import PlaybackState
from led_converter.services.event_bus import EventBus
from led_converter.utils.logger import get_category_logger

log = get_category_logger(LogCategory.PLAYBACK)


def parse_loop_mode(mode: Union[LoopMode, str]) -> LoopMode:
    if isinstance(mode, LoopMode):
        return mode
    if mode == "pingpong":
        return LoopMode.BOUNCE
    try:
        return LoopMode(mode)
    except ValueError:
        raise InvalidModeError("Loop mode", mode, [m.value for m in LoopMode])


class PlaybackController:
    """
    Frame playback state machine.

    Only the frame count of the sequence is read. The controller never keeps
    a sequence after set_frames() replaces it.

    Usage:
        controller = PlaybackController(fps=24)
        controller.on_frame_change(lambda e: display.show(sequence[e.index]))
        controller.on_play_state_change(lambda e: button.set_playing(e.playing))

        controller.set_frames(sequence)
        controller.set_loop_mode(LoopMode.BOUNCE)
        controller.play()          # ticks every 1000/24 ms
        controller.go_to_frame(5)  # scrub while playing
        controller.stop()
    """

    def __init__(
        self,
        fps: float = 30,
        loop_mode: Union[LoopMode, str] = LoopMode.LOOP,
        timer: Optional[IntervalTimer] = None,
        event_bus: Optional[EventBus] = None,
    ) -> None:
        """
        Args:
            fps: Playback frames per second
            loop_mode: LOOP, ONCE or BOUNCE
            timer: Interval timer (defaults to an asyncio-backed timer)
            event_bus: Bus for notifications (a private one by default)
        """
        if fps <= 0:
            raise ValueError(f"fps must be positive, got {fps}")

        self._frames: Optional[Sized] = None
        self._fps = fps
        self._state = PlaybackState(loop_mode=parse_loop_mode(loop_mode))
        self._timer = timer or AsyncioIntervalTimer()
        self._bus = event_bus or EventBus()

    # ============================================================
    # Subscriptions
    # ============================================================

    def subscribe(self, event_type: EventType, handler: Callable[[Event], None], priority: int = 0) -> Callable[[], None]:
        return self._bus.subscribe(event_type, handler, priority)

    def unsubscribe(self, event_type: EventType, handler: Callable[[Event], None]) -> bool:
        return self._bus.unsubscribe(event_type, handler)

    def on_frame_change(self, handler: Callable[[FrameChangeEvent], None]) -> Callable[[], None]:
        return self._bus.subscribe(EventType.FRAME_CHANGE, handler)

    def on_play_state_change(self, handler: Callable[[PlayStateChangeEvent], None]) -> Callable[[], None]:
        return self._bus.subscribe(EventType.PLAY_STATE_CHANGE, handler)

    # ============================================================
    # State access
    # ============================================================

    @property
    def state(self) -> PlaybackState:
        """Snapshot copy of the internal state"""
        s = self._state
        return PlaybackState(index=s.index, loop_mode=s.loop_mode, direction=s.direction, playing=s.playing)

    @property
    def current_index(self) -> int:
        return self._state.index

    @property
    def frame_count(self) -> int:
        return len(self._frames) if self._frames is not None else 0

    @property
    def fps(self) -> float:
        return self._fps

    @property
    def interval_ms(self) -> float:
        return 1000 / self._fps

    @property
    def loop_mode(self) -> LoopMode:
        return self._state.loop_mode

    @property
    def is_playing(self) -> bool:
        return self._state.playing

    # ============================================================
    # Configuration
    # ============================================================

    def set_frames(self, frames: Optional[Sized]) -> None:
        """Replace the sequence, rewind to frame 0 and stop"""
        self._frames = frames
        self._state.index = 0
        self.stop()
        log.debug("Frames set", count=self.frame_count)

    def set_frame_rate(self, fps: float) -> None:
        """
        Change the tick period to 1000/fps ms.

        A running controller is restarted (stop + play) so the new period
        applies immediately; subscribers see a stopped/playing pair.
        """
        if fps <= 0:
            raise ValueError(f"fps must be positive, got {fps}")
        self._fps = fps
        if self._state.playing:
            self.stop()
            self.play()

    def set_loop_mode(self, mode: Union[LoopMode, str]) -> None:
        self._state.loop_mode = parse_loop_mode(mode)
        self._state.direction = 1
        log.debug("Loop mode set", mode=self._state.loop_mode.value)

    # ============================================================
    # Playback Control
    # ============================================================

    def play(self) -> bool:
        """
        Start ticking.

        No-op when already playing, when no frames are loaded, or when a ONCE
        run is parked on its last frame.

        Returns:
            True if playback started

        Raises:
            RuntimeError: the default asyncio timer was started outside a
                running event loop; the controller stays stopped
        """
        count = self.frame_count
        if count == 0 or self._state.playing:
            return False
        if self._state.loop_mode == LoopMode.ONCE and self._state.index >= count - 1:
            log.debug("Play ignored: ONCE playback already at last frame")
            return False

        # Flag only once the timer is running
        self._timer.start(self.interval_ms, self.advance)
        self._state.playing = True
        log.info(f"Starting playback: {self._fps} FPS", mode=self._state.loop_mode.value, frames=count)
        self._bus.publish(PlayStateChangeEvent(playing=True))
        return True

    def stop(self) -> bool:
        """
        Cancel the tick and switch to STOPPED.

        Returns:
            True if playback was running
        """
        if not self._state.playing:
            return False

        self._state.playing = False
        self._timer.cancel()
        log.debug("Playback stopped", frame=self._state.index)
        self._bus.publish(PlayStateChangeEvent(playing=False))
        return True

    def toggle(self) -> bool:
        """Play when stopped, stop when playing. Returns the new playing flag."""
        if self._state.playing:
            self.stop()
        else:
            self.play()
        return self._state.playing

    def advance(self) -> None:
        """Single clock tick: move the index according to the loop discipline"""
        count = self.frame_count
        if count == 0:
            return

        state = self._state

        if state.loop_mode == LoopMode.LOOP:
            state.index = (state.index + 1) % count

        elif state.loop_mode == LoopMode.ONCE:
            if state.index >= count - 1:
                self.stop()
                return
            state.index += 1
            self._publish_frame()
            if state.index == count - 1:
                self.stop()
            return

        else:
            state.index += state.direction
            if state.index >= count - 1:
                state.index = count - 1
                state.direction = -1
            elif state.index <= 0:
                state.index = 0
                state.direction = 1

        self._publish_frame()

    # ============================================================
    # Frame Navigation
    # ============================================================

    def go_to_frame(self, index: int) -> bool:
        """
        Jump to a frame; out-of-range indices are ignored.

        Returns:
            True if the index was applied
        """
        if index < 0 or index >= self.frame_count:
            return False
        self._state.index = index
        self._publish_frame()
        return True

    def next_frame(self) -> bool:
        """Step forward, wrapping to the first frame"""
        count = self.frame_count
        if count == 0:
            return False
        return self.go_to_frame((self._state.index + 1) % count)

    def previous_frame(self) -> bool:
        """Step backward, wrapping to the last frame"""
        count = self.frame_count
        if count == 0:
            return False
        prev_index = self._state.index - 1
        return self.go_to_frame(count - 1 if prev_index < 0 else prev_index)

    def close(self) -> None:
        """Stop, drop the sequence and all subscribers"""
        self.stop()
        self._frames = None
        self._state.index = 0
        self._bus.clear()

    def _publish_frame(self) -> None:
        self._bus.publish(FrameChangeEvent(index=self._state.index))
