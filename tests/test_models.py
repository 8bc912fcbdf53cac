"""Tests for trackboard.core.models, color and validation."""

import math

import numpy as np
import pytest

from trackboard.core.color import BLACK, RGB, WHITE
from trackboard.core.errors import InvalidCanvasConfig, InvalidRequest, InvalidWindow
from trackboard.core.models import AnnotationRecord, CanvasConfig, Gap, GenomicWindow, TrackSpec
from trackboard.core.validation import (
    ensure_renderable,
    validate_canvas_config,
    validate_track_spec,
    validate_tracks,
    validate_window,
)


class TestGenomicWindow:
    def test_width(self):
        assert GenomicWindow(1000, 2500).width == 1500

    def test_inverted_raises(self):
        with pytest.raises(InvalidWindow, match="inverted"):
            GenomicWindow(2000, 1000)

    def test_non_finite_raises(self):
        with pytest.raises(InvalidWindow):
            GenomicWindow(0, math.nan)

    def test_degenerate_is_constructible(self):
        w = GenomicWindow(5, 5)
        assert w.is_degenerate
        assert w.width == 0

    def test_to_dict_uses_wire_names(self):
        assert GenomicWindow(1, 2).to_dict() == {"from": 1, "to": 2}


class TestTrackSpec:
    def test_guide_positions(self):
        spec = TrackSpec("t", height=80, v_offset=100)
        assert spec.band_top == 110
        assert spec.band_bottom == 160
        assert spec.bottom == 180

    def test_defaults(self):
        spec = TrackSpec("t", height=10)
        assert spec.v_offset == 0
        assert spec.fg_color == BLACK
        assert spec.bg_color is None


class TestCanvasConfig:
    def test_size(self):
        assert CanvasConfig(640.7, 480).size == (640, 480)

    @pytest.mark.parametrize("width,height", [(0, 10), (10, 0), (-5, 10), (0.5, 10)])
    def test_non_positive_raises(self, width, height):
        with pytest.raises(InvalidCanvasConfig):
            CanvasConfig(width, height)


class TestAnnotationRecord:
    def test_length_defaults_to_sequence_length(self):
        assert AnnotationRecord(id="t", sequence="ACGT").length == 4

    def test_explicit_length_kept(self):
        assert AnnotationRecord(id="t", sequence="", length=500).length == 500

    def test_boundaries_read_only(self):
        record = AnnotationRecord(id="t", exon_boundaries=[1, 2, 3])
        assert record.exon_boundaries.dtype == np.float64
        with pytest.raises(ValueError):
            record.exon_boundaries[0] = 10

    def test_gap_arrays(self):
        record = AnnotationRecord(id="t", gaps=[Gap(1, 2, "low"), Gap(5, 9, "high")])
        np.testing.assert_array_equal(record.gap_starts, [1, 5])
        np.testing.assert_array_equal(record.gap_ends, [2, 9])

    def test_from_document(self):
        record = AnnotationRecord.from_document({
            "id": "ENSAPLG00000013960",
            "subseq": "ACGTN",
            "exon_boundaries": [10, 20],
            "gaps": [{"start": 1, "end": 4, "type": "low"}],
            "length": 9000,
            "genetree": "GT1",
        })
        assert record.id == "ENSAPLG00000013960"
        assert record.sequence == "ACGTN"
        assert record.gaps == (Gap(1.0, 4.0, "low"),)
        assert record.length == 9000
        assert record.group == "GT1"

    def test_from_document_tolerates_missing_fields(self):
        record = AnnotationRecord.from_document(
            {"id": "t", "subseq": float("nan"), "gaps": None, "length": float("nan")}
        )
        assert record.sequence == ""
        assert record.gaps == ()
        assert record.length == 0
        assert record.group is None


class TestRGB:
    def test_parse_wire_dict(self):
        assert RGB.parse({"r": 154, "g": 205, "b": 50}) == RGB(154, 205, 50)

    def test_parse_hex(self):
        assert RGB.parse("#cd0000") == RGB(205, 0, 0)

    def test_parse_named(self):
        assert RGB.parse("white") == WHITE

    def test_parse_sequence(self):
        assert RGB.parse([0, 100, 0]) == RGB(0, 100, 0)

    def test_out_of_range_raises(self):
        with pytest.raises(ValueError):
            RGB(0, 256, 0)

    def test_unknown_name_raises(self):
        with pytest.raises(ValueError, match="Unknown color"):
            RGB.parse("not-a-color")

    def test_hex_round_trip(self):
        assert RGB.parse(RGB(154, 205, 50).to_hex()) == RGB(154, 205, 50)


class TestValidation:
    def test_window(self):
        assert validate_window({"from": 1000, "to": 2000}) == GenomicWindow(1000, 2000)

    def test_window_missing_field(self):
        with pytest.raises(InvalidRequest, match="'to'"):
            validate_window({"from": 1000})

    def test_window_wrong_type(self):
        with pytest.raises(InvalidRequest, match="must be a number"):
            validate_window({"from": "abc", "to": 10})

    def test_window_inverted(self):
        with pytest.raises(InvalidWindow):
            validate_window({"from": 10, "to": 1})

    def test_canvas_defaults_to_white(self):
        canvas = validate_canvas_config({"width": 800, "height": 600})
        assert canvas.bg_color == WHITE
        assert canvas.size == (800, 600)

    def test_canvas_zero_size(self):
        with pytest.raises(InvalidCanvasConfig):
            validate_canvas_config({"width": 0, "height": 600})

    def test_track_spec(self):
        spec = validate_track_spec({
            "name": "t1", "height": 80, "v_offset": 20,
            "fgColor": {"r": 1, "g": 2, "b": 3}, "bgColor": "#ffffff",
        })
        assert spec == TrackSpec("t1", 80, 20, RGB(1, 2, 3), WHITE)

    def test_track_spec_defaults(self):
        spec = validate_track_spec({"name": "t1", "height": 80})
        assert spec.v_offset == 0
        assert spec.fg_color == BLACK
        assert spec.bg_color is None

    def test_track_spec_bad_height(self):
        with pytest.raises(InvalidRequest, match=r"tracks\[3\]\.height"):
            validate_track_spec({"name": "t", "height": -1}, index=3)

    def test_track_spec_bad_color(self):
        with pytest.raises(InvalidRequest, match="fgColor"):
            validate_track_spec({"name": "t", "height": 5, "fgColor": {"r": 1}})

    def test_track_spec_needs_name(self):
        with pytest.raises(InvalidRequest, match="name"):
            validate_track_spec({"height": 5})

    def test_tracks_must_be_list(self):
        with pytest.raises(InvalidRequest):
            validate_tracks({"name": "t"})

    def test_empty_tracks(self):
        assert validate_tracks([]) == ()
        assert validate_tracks(None) == ()

    def test_ensure_renderable_rejects_zero_width(self):
        with pytest.raises(InvalidWindow, match="zero width"):
            ensure_renderable(GenomicWindow(5, 5), CanvasConfig(10, 10))
