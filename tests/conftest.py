import pytest
from datetime import datetime, timezone

from led_converter.controllers.interval_timer import ManualIntervalTimer
from led_converter.controllers.playback_controller import PlaybackController
from led_converter.models.frame_sequence import FrameSequence
from led_converter.models.grid import Grid
from led_converter.models.sample import Sample
from led_converter.utils.logger import configure_logger
from led_converter.models.enums import LogLevel


@pytest.fixture(autouse=True)
def quiet_logger():
    """Keep test output readable; restore defaults afterwards."""
    configure_logger(min_level=LogLevel.ERROR, use_colors=False)
    yield
    configure_logger(min_level=LogLevel.INFO, use_colors=True)


def coordinate_grid(width: int, height: int) -> Grid:
    """Every pixel unique: r = x, g = y, b = 7, a = 255"""
    return Grid(width, height, [Sample(x, y, 7) for y in range(height) for x in range(width)])


@pytest.fixture
def make_grid():
    return coordinate_grid


@pytest.fixture
def fixed_time():
    return datetime(2024, 5, 17, 8, 30, 15, 123456, tzinfo=timezone.utc)


@pytest.fixture
def two_frame_sequence():
    """Two 2x1 frames with packed words 1,2 and 3,4"""
    f0 = Grid(2, 1, [Sample(1, 0, 0), Sample(2, 0, 0)])
    f1 = Grid(2, 1, [Sample(3, 0, 0), Sample(4, 0, 0)])
    return FrameSequence.from_grids([("anim_0.png", f0), ("anim_1.png", f1)])


@pytest.fixture
def timer():
    return ManualIntervalTimer()


@pytest.fixture
def controller(timer):
    return PlaybackController(fps=10, timer=timer)


@pytest.fixture
def recorder(controller):
    """Records both notification streams of the controller fixture."""
    class Recorder:
        def __init__(self):
            self.frames = []
            self.play_states = []

    rec = Recorder()
    controller.on_frame_change(lambda e: rec.frames.append(e.index))
    controller.on_play_state_change(lambda e: rec.play_states.append(e.playing))
    return rec


