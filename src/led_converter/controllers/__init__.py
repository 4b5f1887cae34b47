from .interval_timer import IntervalTimer, AsyncioIntervalTimer, ManualIntervalTimer
from .playback_controller import PlaybackController, parse_loop_mode

__all__ = [
    'IntervalTimer',
    'AsyncioIntervalTimer',
    'ManualIntervalTimer',
    'PlaybackController',
    'parse_loop_mode',
]
