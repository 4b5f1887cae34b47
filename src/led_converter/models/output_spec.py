"""
Output parameters for one emission call
"""

from dataclasses import dataclass

from led_converter.models.frame_sequence import FrameSequence


@dataclass(frozen=True)
class OutputSpec:
    """
    Resolved emission parameters

    brightness is a percentage with no upper clamp (150 overdrives channels).
    width drives the per-row line wrap of the structured text artifact.
    """
    name: str
    brightness: int = 100
    fps: int = 30
    width: int = 0
    height: int = 0

    def __post_init__(self):
        if self.fps <= 0:
            raise ValueError(f"fps must be positive, got {self.fps}")

    @classmethod
    def for_sequence(cls, sequence: FrameSequence, name: str, brightness: int = 100, fps: int = 30) -> 'OutputSpec':
        """OutputSpec sized to the sequence's current frame dimensions"""
        return cls(name=name, brightness=brightness, fps=fps, width=sequence.width, height=sequence.height)

    @property
    def pixels_per_frame(self) -> int:
        return self.width * self.height
