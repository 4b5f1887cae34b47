"""
Tests for the JSON interchange artifact
"""

import json

import pytest

from led_converter.exporters.json_export import JsonExporter, USAGE_INFO
from led_converter.models.enums import ArtifactType
from led_converter.models.errors import MissingSourceDataError
from led_converter.models.frame_sequence import FrameSequence
from led_converter.models.grid import Grid
from led_converter.models.output_spec import OutputSpec
from led_converter.models.sample import Sample


@pytest.fixture
def exporter():
    return JsonExporter()


def test_metadata(exporter, two_frame_sequence, fixed_time):
    spec = OutputSpec.for_sequence(two_frame_sequence, "ANIM", brightness=80, fps=2)
    data = json.loads(exporter.export(two_frame_sequence, spec, fixed_time).content)

    assert data["metadata"] == {
        "name": "ANIM",
        "frameCount": 2,
        "width": 2,
        "height": 1,
        "fps": 2,
        "duration": 1,
        "brightness": 80,
        "pixelsPerFrame": 2,
        "generated": "2024-05-17T08:30:15.123Z",
    }


def test_fractional_duration(exporter, two_frame_sequence):
    data = exporter.build(two_frame_sequence, OutputSpec("ANIM", fps=30))
    assert data["metadata"]["duration"] == pytest.approx(2 / 30)


def test_frames_and_pixels(exporter, two_frame_sequence):
    data = exporter.build(two_frame_sequence, OutputSpec("ANIM"))

    assert [f["index"] for f in data["frames"]] == [0, 1]
    assert [f["filename"] for f in data["frames"]] == ["anim_0.png", "anim_1.png"]
    assert data["frames"][1]["pixels"][0] == {
        "dword": "0x00000003",
        "rgb": {"r": 3, "g": 0, "b": 0},
    }


def test_rgb_matches_dword(exporter):
    grid = Grid(2, 1, [Sample(10, 200, 30), Sample(255, 128, 0)])
    sequence = FrameSequence.from_grids([("x.png", grid)])
    data = exporter.build(sequence, OutputSpec("X", brightness=60))

    for pixel in data["frames"][0]["pixels"]:
        rgb = pixel["rgb"]
        word = (rgb["b"] << 16) | (rgb["g"] << 8) | rgb["r"]
        assert pixel["dword"] == f"0x{word:08X}"


def test_overdrive_keeps_unmasked_rgb(exporter):
    sequence = FrameSequence.from_grids([("x.png", Grid(1, 1, [Sample(200, 0, 0)]))])
    pixel = exporter.build(sequence, OutputSpec("X", brightness=150))["frames"][0]["pixels"][0]

    assert pixel["rgb"]["r"] == 300
    assert pixel["dword"] == "0x0000002C"


def test_usage_block_and_format(exporter, two_frame_sequence):
    result = exporter.export(two_frame_sequence, OutputSpec("ANIM"))
    assert result.artifact == ArtifactType.JSON
    assert result.filename == "ANIM.json"
    assert result.content.startswith('{\n  "metadata": {\n    "name": "ANIM"')
    assert json.loads(result.content)["usage"] == USAGE_INFO


def test_empty_sequence_raises(exporter):
    with pytest.raises(MissingSourceDataError):
        exporter.build(FrameSequence.empty(), OutputSpec("X"))
