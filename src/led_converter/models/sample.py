"""
Sample model - one decoded RGBA pixel

Channel values come from an upstream decoder as 8-bit integers. After
brightness scaling a channel may legally exceed 255 (scaling is not clamped),
so the model carries plain ints and performs no range checks.
"""

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Sample:
    """
    Immutable RGBA sample

    Examples:
        px = Sample(255, 128, 0)          # opaque orange
        r, g, b = px.to_rgb()
        faded = Sample(10, 20, 30, a=0)   # alpha is carried but never packed
    """

    r: int
    g: int
    b: int
    a: int = 255

    @classmethod
    def from_tuple(cls, values) -> 'Sample':
        """
        Create from an (r, g, b) or (r, g, b, a) sequence

        Args:
            values: 3 or 4 integer channel values

        Returns:
            Sample (alpha defaults to 255 for RGB input)
        """
        if len(values) == 3:
            r, g, b = values
            return cls(r, g, b)
        r, g, b, a = values
        return cls(r, g, b, a)

    @classmethod
    def black(cls) -> 'Sample':
        """Opaque black, the resampler's background fill"""
        return cls(0, 0, 0, 255)

    def to_rgb(self) -> Tuple[int, int, int]:
        return (self.r, self.g, self.b)
