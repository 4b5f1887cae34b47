"""
FrameSequence model

Ordered frames sharing one width/height. The dimension invariant is checked
once, when the sequence is assembled; a sequence is never patched in place,
resampling always yields a new instance.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Sequence, Tuple

from led_converter.models.errors import DimensionMismatchError
from led_converter.models.grid import Frame, Grid
from led_converter.utils.numbers import format_fixed


@dataclass(frozen=True, init=False)
class FrameSequence:
    """
    Immutable batch of equally sized frames

    Example:
        seq = FrameSequence.from_grids([("f0.png", g0), ("f1.png", g1)])
        seq.width, seq.height, len(seq)
    """

    frames: Tuple[Frame, ...]
    width: int
    height: int

    def __init__(self, frames: Iterable[Frame]):
        frames = tuple(frames)
        width = frames[0].width if frames else 0
        height = frames[0].height if frames else 0

        for frame in frames[1:]:
            if frame.grid.size != (width, height):
                raise DimensionMismatchError(
                    frame.index + 1, frame.width, frame.height, width, height
                )

        object.__setattr__(self, "frames", frames)
        object.__setattr__(self, "width", width)
        object.__setattr__(self, "height", height)

    @classmethod
    def from_grids(cls, named_grids: Sequence[Tuple[str, Grid]]) -> FrameSequence:
        """
        Assemble a sequence from (label, grid) pairs in the given order

        Raises:
            DimensionMismatchError: a grid differs in size from the first one;
                nothing of the batch is kept
        """
        return cls(
            Frame(index=i, filename=name, grid=grid, source_grid=grid)
            for i, (name, grid) in enumerate(named_grids)
        )

    @classmethod
    def empty(cls) -> FrameSequence:
        return cls(())

    @property
    def pixels_per_frame(self) -> int:
        return self.width * self.height

    @property
    def source_size(self) -> Tuple[int, int]:
        """Size of the decoded input grids (before any resampling)"""
        if not self.frames:
            return (0, 0)
        return self.frames[0].original.size

    def duration(self, fps: float) -> float:
        """Playback length in seconds at the given frame rate"""
        return len(self.frames) / fps

    def duration_info(self, fps: float) -> str:
        return f"{format_fixed(self.duration(fps))}s @ {fps} fps"

    def with_grids(self, grids: Sequence[Grid]) -> FrameSequence:
        """
        New sequence with each frame's grid replaced, labels, indices and
        source grids kept
        """
        return FrameSequence(
            Frame(index=f.index, filename=f.filename, grid=g, source_grid=f.original)
            for f, g in zip(self.frames, grids)
        )

    def __len__(self) -> int:
        return len(self.frames)

    def __iter__(self) -> Iterator[Frame]:
        return iter(self.frames)

    def __getitem__(self, index: int) -> Frame:
        return self.frames[index]
