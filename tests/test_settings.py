"""Tests for trackboard.settings."""

import pytest

from trackboard.core.color import RGB
from trackboard.settings import Settings


class TestDefaults:
    def test_values(self):
        s = Settings()
        assert s.port == 1338
        assert s.host == "127.0.0.1"
        assert s.request_timeout == 10.0
        assert s.cache_ttl is None
        assert s.zoom_threshold == 300

    def test_colors(self):
        s = Settings()
        assert s.gap_colors == {"low": RGB(154, 205, 50), "high": RGB(0, 100, 0)}
        assert s.boundary_rgb == RGB(205, 0, 0)

    def test_to_dict(self):
        d = Settings().to_dict()
        assert d["port"] == 1338
        assert d["log_level"] == "INFO"


class TestValidation:
    def test_port_bounds(self):
        with pytest.raises(ValueError):
            Settings(port=70000)

    def test_workers_positive(self):
        with pytest.raises(ValueError):
            Settings(max_workers=0)

    def test_timeout_must_be_positive(self):
        with pytest.raises(ValueError):
            Settings(request_timeout=0)

    def test_log_level_choices(self):
        with pytest.raises(ValueError):
            Settings(log_level="VERBOSE")


class TestFromEnv:
    def test_reads_prefixed_variables(self):
        s = Settings.from_env({
            "TRACKBOARD_PORT": "9000",
            "TRACKBOARD_MAX_WORKERS": "2",
            "TRACKBOARD_REQUEST_TIMEOUT": "1.5",
            "TRACKBOARD_LOG_LEVEL": "debug",
        })
        assert s.port == 9000
        assert s.max_workers == 2
        assert s.request_timeout == 1.5
        assert s.log_level == "DEBUG"

    def test_none_values(self):
        s = Settings.from_env({"TRACKBOARD_REQUEST_TIMEOUT": "none", "TRACKBOARD_CACHE_TTL": "None"})
        assert s.request_timeout is None
        assert s.cache_ttl is None

    def test_color_formats(self):
        s = Settings.from_env({
            "TRACKBOARD_LOW_GAP_COLOR": "255,0,0",
            "TRACKBOARD_BOUNDARY_COLOR": "#0000ff",
        })
        assert s.gap_colors["low"] == RGB(255, 0, 0)
        assert s.boundary_rgb == RGB(0, 0, 255)

    def test_overrides_win(self):
        s = Settings.from_env({"TRACKBOARD_PORT": "9000"}, port=9100, host=None)
        assert s.port == 9100
        assert s.host == "127.0.0.1"

    def test_unrelated_variables_ignored(self):
        assert Settings.from_env({"PORT": "1"}).port == 1338

    def test_bad_value(self):
        with pytest.raises(ValueError):
            Settings.from_env({"TRACKBOARD_PORT": "not-a-port"})
