"""
Sequence loader - batch ingestion and whole-sequence resampling

Ingestion sorts a batch of decoded frames by file name (numeric aware),
checks that every frame matches the first one's size and produces a new
FrameSequence. A mismatch rejects the whole batch.
"""

from typing import Iterable, Optional, Tuple, Union

from led_converter.engine.resampler import Resampler, parse_resize_mode
from led_converter.models.enums import LogCategory, ResizeMode
from led_converter.models.errors import MissingSourceDataError
from led_converter.models.frame_sequence import FrameSequence
from led_converter.models.grid import Grid
from led_converter.utils.logger import get_category_logger
from led_converter.utils.naming import natural_sort_key

log = get_category_logger(LogCategory.SEQUENCE)


class SequenceLoader:
    """
    Builds FrameSequences from decoded grids

    Example:
        loader = SequenceLoader()
        seq = loader.load([("walk_10.png", g10), ("walk_2.png", g2)])
        [f.filename for f in seq]  # ["walk_2.png", "walk_10.png"]

        strip = loader.resample(seq, 64, 1, ResizeMode.CROP_TOP)
    """

    def __init__(self, resampler: Optional[Resampler] = None):
        self.resampler = resampler or Resampler()

    def load(self, named_grids: Iterable[Tuple[str, Grid]], sort: bool = True) -> FrameSequence:
        """
        Ingest a batch of (filename, grid) pairs

        Raises:
            MissingSourceDataError: empty batch
            DimensionMismatchError: a frame differs in size from the first
        """
        batch = list(named_grids)
        if not batch:
            raise MissingSourceDataError("No frames supplied")

        if sort:
            batch.sort(key=lambda item: natural_sort_key(item[0]))

        sequence = FrameSequence.from_grids(batch)
        log.info(
            f"Loaded {len(sequence)} frames",
            size=f"{sequence.width}x{sequence.height}",
            first=batch[0][0],
        )
        return sequence

    def resample(
        self,
        sequence: FrameSequence,
        width: int,
        height: int,
        mode: Union[ResizeMode, str] = ResizeMode.CROP_TOP,
        offset_x: int = 0,
        offset_y: int = 0,
    ) -> FrameSequence:
        """
        New sequence with every frame rebuilt from its source grid

        Resampling always starts from the decoded input, so repeated calls
        with different parameters never compound.
        """
        if len(sequence) == 0:
            raise MissingSourceDataError("No frames to resample")

        mode = parse_resize_mode(mode)
        grids = [
            self.resampler.resample(frame.original, width, height, mode, offset_x, offset_y)
            for frame in sequence
        ]
        resampled = sequence.with_grids(grids)
        log.info(
            f"Frames reprocessed to {width}x{height}",
            mode=mode.value,
            offset=f"{offset_x},{offset_y}",
            frames=len(resampled),
        )
        return resampled

    def restore(self, sequence: FrameSequence) -> FrameSequence:
        """New sequence using the original, un-resampled grids"""
        return sequence.with_grids([frame.original for frame in sequence])
