"""
Tests for the TwinCAT structured text artifact
"""

import re

import pytest

from led_converter.engine.pixel_codec import PixelCodec
from led_converter.exporters.structured_text import StructuredTextExporter
from led_converter.models.enums import ArtifactType
from led_converter.models.errors import MissingSourceDataError, OutputSizeMismatchError
from led_converter.models.frame_sequence import FrameSequence
from led_converter.models.grid import Grid
from led_converter.models.output_spec import OutputSpec
from led_converter.models.sample import Sample

TOKEN = re.compile(r"16#([0-9A-F]{8})")


@pytest.fixture
def exporter():
    return StructuredTextExporter()


def test_header_and_constants(exporter, two_frame_sequence, fixed_time):
    spec = OutputSpec.for_sequence(two_frame_sequence, "ANIM", fps=30)
    content = exporter.export(two_frame_sequence, spec, fixed_time).content
    lines = content.split("\n")

    assert lines[1] == "(* Animation: ANIM *)"
    assert "(* Frames: 2 *)" in lines
    assert "(* Resolution: 2x1 *)" in lines
    assert "(* FPS: 30 *)" in lines
    assert "(* Duration: 0.07s *)" in lines
    assert "(* Generated: 2024-05-17 *)" in lines
    assert "nFrameCount_ANIM : INT := 2;" in lines
    assert "nPixelsPerFrame_ANIM : INT := 2;" in lines


def test_frame_arrays_one_row_per_line(exporter, two_frame_sequence, fixed_time):
    spec = OutputSpec.for_sequence(two_frame_sequence, "ANIM")
    content = exporter.export(two_frame_sequence, spec, fixed_time).content

    assert (
        "aFrame_ANIM_000 : ARRAY[0..1] OF DWORD := [\n"
        "    16#00000001,    16#00000002\n"
        "];\n\n"
    ) in content
    assert (
        "aFrame_ANIM_001 : ARRAY[0..1] OF DWORD := [\n"
        "    16#00000003,    16#00000004\n"
        "];\n\n"
    ) in content


def test_rows_wrap_at_grid_width(exporter, make_grid):
    sequence = FrameSequence.from_grids([("wave.png", make_grid(3, 2))])
    content = exporter.export(sequence, OutputSpec.for_sequence(sequence, "WAVE")).content

    body = content.split("aFrame_WAVE_000 : ARRAY[0..5] OF DWORD := [\n")[1].split("];")[0]
    rows = body.split("\n")
    assert len(rows) == 3 and rows[-1] == ""
    assert len(TOKEN.findall(rows[0])) == 3
    assert rows[0].endswith(",")
    assert not rows[1].endswith(",")


def test_pointer_array_and_usage(exporter, two_frame_sequence):
    content = exporter.export(two_frame_sequence, OutputSpec.for_sequence(two_frame_sequence, "ANIM")).content

    assert (
        "aFrames_ANIM : ARRAY[0..1] OF POINTER TO DWORD := [\n"
        "    ADR(aFrame_ANIM_000),\n"
        "    ADR(aFrame_ANIM_001)\n"
        "];\n"
    ) in content
    assert "(* USAGE EXAMPLE:" in content
    assert "    aLEDBuffer : ARRAY[0..1] OF DWORD;" in content
    assert content.endswith("(* ===================================================== *)\n")


def test_tokens_decode_to_scaled_channels(exporter, make_grid):
    grid = make_grid(4, 3)
    sequence = FrameSequence.from_grids([("a.png", grid)])
    spec = OutputSpec.for_sequence(sequence, "A", brightness=50)
    content = exporter.export(sequence, spec).content

    words = [int(t, 16) for t in TOKEN.findall(content)]
    assert len(words) == 12
    decoded = [PixelCodec.decode(w) for w in words]
    expected = [
        tuple(max(0, int(c * 0.5 + 0.5)) for c in s.to_rgb())
        for s in grid
    ]
    assert decoded == expected


def test_brightness_100_matches_raw_channels(exporter, two_frame_sequence):
    content = exporter.export(two_frame_sequence, OutputSpec.for_sequence(two_frame_sequence, "ANIM")).content
    words = [int(t, 16) for t in TOKEN.findall(content)]
    assert words == [1, 2, 3, 4]


def test_result_metadata(exporter, two_frame_sequence):
    result = exporter.export(two_frame_sequence, OutputSpec.for_sequence(two_frame_sequence, "ANIM"))
    assert result.artifact == ArtifactType.STRUCTURED_TEXT
    assert result.filename == "ANIM.txt"
    assert result.size_bytes == len(result.content.encode("utf-8"))


def test_spec_size_defaults_to_sequence(exporter, two_frame_sequence):
    content = exporter.export(two_frame_sequence, OutputSpec("ANIM")).content
    assert "(* Resolution: 2x1 *)" in content


def test_empty_sequence_raises(exporter):
    with pytest.raises(MissingSourceDataError):
        exporter.export(FrameSequence.empty(), OutputSpec("X"))


class TestImageExport:

    def test_single_image_layout(self, exporter, fixed_time):
        grid = Grid(2, 2, [Sample(1, 0, 0), Sample(2, 0, 0), Sample(3, 0, 0), Sample(4, 0, 0)])
        result = exporter.export_image(grid, OutputSpec("LOGO"), fixed_time)

        assert result.filename == "LOGO.txt"
        assert result.content == (
            "(* Image: LOGO *)\n"
            "(* Resolution: 2x2 *)\n"
            "(* Generated: 2024-05-17 *)\n\n"
            "nWidth_LOGO : INT := 2;\n"
            "nHeight_LOGO : INT := 2;\n\n"
            "aArray_LOGO : ARRAY[0..3] OF DWORD := [\n"
            "    16#00000001,    16#00000002,\n"
            "    16#00000003,    16#00000004\n"
            "];"
        )

    def test_missing_image_raises(self, exporter):
        with pytest.raises(MissingSourceDataError):
            exporter.export_image(None, OutputSpec("LOGO"))


def test_duration_rounds_ties_up(exporter):
    sequence = FrameSequence.from_grids([("one.png", Grid(1, 1, [Sample(1, 1, 1)]))])
    content = exporter.export(sequence, OutputSpec("ONE", fps=8)).content
    assert "(* Duration: 0.13s *)" in content


@pytest.mark.parametrize("width,height", [(4, 1), (1, 2), (2, 2)])
def test_explicit_size_must_match_frames(exporter, two_frame_sequence, width, height):
    with pytest.raises(OutputSizeMismatchError) as exc:
        exporter.export(two_frame_sequence, OutputSpec("ANIM", width=width, height=height))
    assert exc.value.code == "OUTPUT_SIZE_MISMATCH"


def test_image_size_must_match_grid(exporter):
    grid = Grid(2, 1, [Sample(1, 0, 0), Sample(2, 0, 0)])
    with pytest.raises(OutputSizeMismatchError):
        exporter.export_image(grid, OutputSpec("LOGO", width=1, height=2))
