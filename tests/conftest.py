"""Shared test fixtures for trackboard."""

import threading

import pytest

from trackboard.core.color import RGB, WHITE
from trackboard.core.errors import RecordNotFound
from trackboard.core.models import AnnotationRecord, CanvasConfig, Gap, GenomicWindow, TrackSpec
from trackboard.settings import Settings
from trackboard.store.base import AnnotationStore
from trackboard.store.memory import InMemoryAnnotationStore


FG = RGB(10, 20, 30)
LOW = RGB(154, 205, 50)
HIGH = RGB(0, 100, 0)
BOUNDARY = RGB(205, 0, 0)


class DictStore(AnnotationStore):
    """Store over a plain dict that counts lookups and can misbehave.

    ``errors`` maps a track name to an exception raised on lookup;
    ``blockers`` maps a track name to an Event the lookup waits on.
    """

    def __init__(self, records=(), errors=None, blockers=None):
        self.records = {r.id: r for r in records}
        self.errors = dict(errors or {})
        self.blockers = dict(blockers or {})
        self.calls = []
        self._lock = threading.Lock()

    def lookup_by_track_name(self, name):
        with self._lock:
            self.calls.append(name)
        if name in self.blockers:
            self.blockers[name].wait(timeout=5.0)
        if name in self.errors:
            raise self.errors[name]
        if name not in self.records:
            raise RecordNotFound(name)
        return self.records[name]

    def sequence_length(self, names):
        return max(self.records[n].length for n in names)

    def track_names(self, group=None):
        return [n for n, r in self.records.items() if group is None or r.group == group]


@pytest.fixture
def window():
    """The 1000-2000 window used throughout: scale(x) == x - 1000 on a 1000px canvas."""
    return GenomicWindow(1000, 2000)


@pytest.fixture
def canvas_config():
    return CanvasConfig(width=1000, height=200, bg_color=WHITE)


@pytest.fixture
def example_record():
    """One low gap at 1500-1600 and one boundary at 1800, 3000 bases of ACGT."""
    return AnnotationRecord(
        id="track_a",
        sequence="ACGT" * 750,
        exon_boundaries=[500.0, 1800.0, 2500.0],
        gaps=(
            Gap(1500, 1600, "low"),
            Gap(100, 200, "high"),
        ),
        group="GT0001",
    )


@pytest.fixture
def records(example_record):
    """Three records; track_b and track_c have one high gap each."""
    return [
        example_record,
        AnnotationRecord(
            id="track_b",
            sequence="A" * 2500,
            exon_boundaries=[1200.0],
            gaps=(Gap(1100, 1300, "high"),),
            group="GT0001",
        ),
        AnnotationRecord(
            id="track_c",
            sequence="",
            exon_boundaries=[],
            gaps=(Gap(1900, 2100, "high"),),
            length=8000,
            group="GT0002",
        ),
    ]


@pytest.fixture
def dict_store(records):
    return DictStore(records)


@pytest.fixture
def memory_store(records):
    return InMemoryAnnotationStore.from_records(records)


@pytest.fixture
def settings():
    return Settings(max_workers=4, request_timeout=5.0, cache_size=16)


@pytest.fixture
def track_specs():
    """Three stacked 64px tracks; guides at offset+8 and offset+48."""
    return [
        TrackSpec("track_a", height=64, v_offset=0, fg_color=FG),
        TrackSpec("track_b", height=64, v_offset=64, fg_color=FG),
        TrackSpec("track_c", height=64, v_offset=128, fg_color=FG),
    ]


@pytest.fixture
def make_store(records):
    """Factory for a DictStore over ``records`` with per-track failures."""
    def _make(errors=None, blockers=None, extra=()):
        return DictStore(list(records) + list(extra), errors=errors, blockers=blockers)
    return _make
