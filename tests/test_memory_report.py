"""
Tests for the memory usage estimate and the artifact emitter facade
"""

import pytest

from led_converter.exporters.artifact_emitter import ArtifactEmitter
from led_converter.exporters.memory_report import calculate_memory_usage, generate_memory_report
from led_converter.models.enums import ArtifactType
from led_converter.models.output_spec import OutputSpec


def test_usage_numbers():
    usage = calculate_memory_usage(frame_count=10, width=64, height=1)
    assert usage.pixels_per_frame == 64
    assert usage.bytes_per_frame == 256
    assert usage.total_bytes == 2560
    assert usage.total_kb == "2.50"
    assert usage.total_mb == "0.00"


def test_report_under_threshold_has_no_warning():
    report = generate_memory_report("FIRE", calculate_memory_usage(10, 64, 1))
    assert "(* MEMORY USAGE REPORT: FIRE *)" in report
    assert "(* Total memory: 2560 bytes (2.50 KB / 0.00 MB) *)" in report
    assert "WARNING" not in report


def test_report_over_threshold_warns():
    usage = calculate_memory_usage(frame_count=100, width=200, height=200)
    assert usage.exceeds()

    report = generate_memory_report("BIG", usage)
    assert "(* WARNING: Animation exceeds 10MB! Consider: *)" in report
    assert "(* - Reducing frame count *)" in report


def test_custom_threshold():
    usage = calculate_memory_usage(1, 16, 16)
    report = generate_memory_report("SMALL", usage, threshold=512)
    assert "exceeds 0.000488281MB" in report


class TestArtifactEmitter:

    @pytest.fixture
    def emitter(self):
        return ArtifactEmitter(guid_factory=lambda: "00000000-0000-4000-8000-000000000000")

    @pytest.mark.parametrize("artifact,filename", [
        (ArtifactType.STRUCTURED_TEXT, "ANIM.txt"),
        (ArtifactType.TC_GVL, "GVL_Anim_ANIM.TcGVL"),
        (ArtifactType.JSON, "ANIM.json"),
    ])
    def test_emit_dispatches(self, emitter, two_frame_sequence, artifact, filename):
        result = emitter.emit(artifact, two_frame_sequence, OutputSpec("ANIM"))
        assert result.artifact == artifact
        assert result.filename == filename

    def test_codec_shared_across_formats(self, emitter, two_frame_sequence):
        spec = OutputSpec("ANIM", brightness=50)
        assert "16#00000001" in emitter.structured_text(two_frame_sequence, spec).content
        assert "16#00000001" in emitter.tc_gvl(two_frame_sequence, spec).content
        assert '"0x00000001"' in emitter.json(two_frame_sequence, spec).content

    def test_memory_report_uses_spec_size(self, emitter, two_frame_sequence):
        report = emitter.memory_report(two_frame_sequence, OutputSpec("ANIM", width=8, height=8))
        assert "(* Pixels per frame: 64 *)" in report
        assert "(* Total frames: 2 *)" in report


def test_kilobytes_round_ties_up():
    usage = calculate_memory_usage(frame_count=1, width=32, height=1)
    assert usage.total_bytes == 128
    assert usage.total_kb == "0.13"

    report = generate_memory_report("TINY", usage)
    assert "(* Total memory: 128 bytes (0.13 KB / 0.00 MB) *)" in report
