"""
Grid and Frame models

Grid is a row-major raster of Samples. Frame attaches a source label and an
ordinal index to a Grid, plus the original (pre-resampling) grid so the frame
can be rebuilt whenever the output parameters change.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

from led_converter.models.sample import Sample


@dataclass(frozen=True, init=False)
class Grid:
    """
    Immutable raster: width x height samples in row-major order

    Invariant: len(samples) == width * height

    Example:
        grid = Grid.from_rows([
            [(255, 0, 0), (0, 255, 0)],
            [(0, 0, 255), (255, 255, 255)],
        ])
        grid.pixel(1, 0)  # Sample(0, 255, 0, 255)
    """

    width: int
    height: int
    samples: Tuple[Sample, ...] = field(repr=False)

    def __init__(self, width: int, height: int, samples: Iterable[Sample]):
        samples = tuple(samples)
        if width <= 0 or height <= 0:
            raise ValueError(f"Grid dimensions must be positive, got {width}x{height}")
        if len(samples) != width * height:
            raise ValueError(
                f"Grid {width}x{height} needs {width * height} samples, got {len(samples)}"
            )
        object.__setattr__(self, "width", width)
        object.__setattr__(self, "height", height)
        object.__setattr__(self, "samples", samples)

    # === CONSTRUCTORS ===

    @classmethod
    def filled(cls, width: int, height: int, sample: Optional[Sample] = None) -> Grid:
        """Grid of one repeated sample (opaque black by default)"""
        return cls(width, height, [sample or Sample.black()] * (width * height))

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence]) -> Grid:
        """
        Build from nested rows of Samples or channel tuples

        Args:
            rows: List of rows, each a list of Sample or (r, g, b[, a]) tuples

        Returns:
            Grid with height == len(rows)
        """
        if not rows:
            raise ValueError("Grid needs at least one row")
        width = len(rows[0])
        samples: List[Sample] = []
        for y, row in enumerate(rows):
            if len(row) != width:
                raise ValueError(f"Row {y} has {len(row)} samples, expected {width}")
            for value in row:
                samples.append(value if isinstance(value, Sample) else Sample.from_tuple(value))
        return cls(width, len(rows), samples)

    @classmethod
    def from_rgba_bytes(cls, width: int, height: int, data: bytes) -> Grid:
        """
        Build from a flat RGBA byte buffer (4 bytes per pixel, row-major),
        the layout image decoders hand over.
        """
        if len(data) != width * height * 4:
            raise ValueError(
                f"RGBA buffer for {width}x{height} needs {width * height * 4} bytes, got {len(data)}"
            )
        return cls(width, height, (
            Sample(data[i], data[i + 1], data[i + 2], data[i + 3])
            for i in range(0, len(data), 4)
        ))

    # === ACCESS ===

    @property
    def size(self) -> Tuple[int, int]:
        return (self.width, self.height)

    @property
    def pixel_count(self) -> int:
        return self.width * self.height

    def pixel(self, x: int, y: int) -> Sample:
        return self.samples[y * self.width + x]

    def rows(self) -> Iterator[Tuple[Sample, ...]]:
        for y in range(self.height):
            yield self.samples[y * self.width:(y + 1) * self.width]

    def sub_grid(self, x: int, y: int, width: int, height: int) -> Grid:
        """Verbatim copy of a rectangle that lies inside this grid"""
        return Grid(width, height, (
            self.samples[row * self.width + col]
            for row in range(y, y + height)
            for col in range(x, x + width)
        ))

    def __len__(self) -> int:
        return len(self.samples)

    def __iter__(self) -> Iterator[Sample]:
        return iter(self.samples)


@dataclass(frozen=True)
class Frame:
    """
    One still raster of an animation

    grid is what gets exported; source_grid is the decoded input the frame
    was built from (identical to grid until the sequence is resampled).
    """

    index: int
    filename: str
    grid: Grid
    source_grid: Optional[Grid] = field(default=None, repr=False, compare=False)

    @property
    def original(self) -> Grid:
        return self.source_grid if self.source_grid is not None else self.grid

    @property
    def width(self) -> int:
        return self.grid.width

    @property
    def height(self) -> int:
        return self.grid.height
