"""
Tests for LocationSegmenter.

Tests how a location stream turns into begin/segment/point/end calls.
"""

import math
import random

import pytest

from app.features.export.segmenter import LocationSegmenter, write_locations
from app.features.tracks.types import LocationSample


# =============================================================================
# Helpers
# =============================================================================

def invalid(kind: str = "pause") -> LocationSample:
    """Samples that must never be rendered."""
    return {
        "pause": LocationSample(latitude=100.0, longitude=0.0),
        "dropout": LocationSample(latitude=0.0, longitude=0.0),
        "nan": LocationSample(latitude=math.nan, longitude=10.0),
        "lon": LocationSample(latitude=10.0, longitude=181.0),
    }[kind]


def run(make_writer, samples):
    writer = make_writer()
    stats = LocationSegmenter(writer).write(iter(samples))
    return writer, stats


def is_balanced(names) -> bool:
    """open/close_segment alternate, and every open is followed by a point."""
    depth = 0
    for i, name in enumerate(names):
        if name == "open":
            if depth != 0 or i + 1 >= len(names) or names[i + 1] != "point":
                return False
            depth = 1
        elif name == "close_segment":
            if depth != 1:
                return False
            depth = 0
        elif name == "point" and depth != 1:
            return False
    return depth == 0


# =============================================================================
# Test Call Sequences
# =============================================================================

class TestCallSequence:
    """Tests for the exact calls emitted for known streams."""

    def test_two_runs_split_by_invalid_sample(self, make_writer, samples):
        """[invalid, valid x3, invalid, valid x2] renders two segments."""
        s = [
            invalid(),
            samples.valid(1),
            samples.valid(2),
            samples.valid(3),
            invalid(),
            samples.valid(5),
            samples.valid(6),
        ]
        writer, stats = run(make_writer, s)

        assert writer.calls == [
            ("begin", s[1]),
            ("open",),
            ("point", s[1]),
            ("point", s[2]),
            ("point", s[3]),
            ("close_segment",),
            ("open",),
            ("point", s[5]),
            ("point", s[6]),
            ("close_segment",),
            ("end", s[6]),
        ]
        assert stats.segments == 2
        assert stats.points_written == 5
        assert stats.samples == 7
        assert stats.invalid_samples == 2

    def test_all_invalid_emits_nothing(self, make_writer):
        """Stream without valid samples: no calls at all."""
        writer, stats = run(make_writer, [invalid("pause"), invalid("dropout"), invalid("nan")])

        assert writer.calls == []
        assert stats.segments == 0
        assert stats.invalid_samples == 3

    def test_single_valid_sample_emits_nothing(self, make_writer, samples):
        """One valid sample never opens a segment."""
        writer, _ = run(make_writer, [invalid(), samples.valid(1), invalid()])
        assert writer.calls == []

    def test_only_one_sample_in_stream(self, make_writer, samples):
        writer, _ = run(make_writer, [samples.valid(0)])
        assert writer.calls == []

    def test_empty_stream(self, make_writer, caplog):
        """Empty stream emits nothing and logs a warning."""
        with caplog.at_level("WARNING"):
            writer, stats = run(make_writer, [])

        assert writer.calls == []
        assert stats.samples == 0
        assert "Unable to get any points to write" in caplog.text

    def test_isolated_valid_sample_between_runs_is_dropped(self, make_writer, samples):
        """v v i v i v v: the lone sample in the middle is not rendered."""
        s = [
            samples.valid(0),
            samples.valid(1),
            invalid(),
            samples.valid(3),
            invalid(),
            samples.valid(5),
            samples.valid(6),
        ]
        writer, stats = run(make_writer, s)

        points = [call[1] for call in writer.calls if call[0] == "point"]
        assert points == [s[0], s[1], s[5], s[6]]
        assert s[3] not in points
        assert stats.segments == 2

    def test_begin_anchor_is_first_point_of_first_segment(self, make_writer, samples):
        s = [invalid(), samples.valid(1), invalid(), samples.valid(3), samples.valid(4)]
        writer, _ = run(make_writer, s)

        assert writer.calls[0] == ("begin", s[3])

    def test_end_anchor_is_last_processed_sample(self, make_writer, samples):
        """Trailing invalid samples still become the end anchor."""
        s = [samples.valid(0), samples.valid(1), samples.valid(2), invalid(), invalid("dropout")]
        writer, _ = run(make_writer, s)

        assert writer.calls[-1] == ("end", s[-1])
        assert writer.calls[-2] == ("close_segment",)

    def test_open_segment_closed_at_end_of_stream(self, make_writer, samples):
        writer, _ = run(make_writer, [samples.valid(0), samples.valid(1)])

        assert writer.names == ["begin", "open", "point", "point", "close_segment", "end"]

    def test_consecutive_invalid_samples_close_once(self, make_writer, samples):
        s = [samples.valid(0), samples.valid(1), invalid(), invalid(), invalid()]
        writer, _ = run(make_writer, s)

        assert writer.names.count("close_segment") == 1

    @pytest.mark.parametrize("kind", ["pause", "dropout", "nan", "lon"])
    def test_every_invalid_kind_splits_segments(self, make_writer, samples, kind):
        s = [samples.valid(0), samples.valid(1), invalid(kind), samples.valid(3), samples.valid(4)]
        writer, stats = run(make_writer, s)

        assert stats.segments == 2
        assert invalid(kind) not in [call[1] for call in writer.calls if call[0] == "point"]

    def test_shortcut_function(self, make_writer, samples):
        writer = make_writer()
        stats = write_locations(iter([samples.valid(0), samples.valid(1)]), writer)

        assert stats.points_written == 2
        assert writer.names[0] == "begin"


# =============================================================================
# Test Structural Properties
# =============================================================================

class TestStructure:
    """Properties that hold for any stream."""

    @staticmethod
    def random_stream(rng, samples, length):
        return [samples.valid(i) if rng.random() < 0.7 else invalid() for i in range(length)]

    def test_random_streams_are_balanced(self, make_writer, samples):
        rng = random.Random(1234)

        for _ in range(200):
            stream = self.random_stream(rng, samples, rng.randint(0, 30))
            writer, _ = run(make_writer, stream)
            names = writer.names

            assert is_balanced(names)
            if names:
                assert names[0] == "begin"
                assert names[-1] == "end"
                assert names.count("begin") == 1
                assert names.count("end") == 1
            else:
                assert "open" not in names

    def test_random_streams_render_only_valid_samples(self, make_writer, samples):
        rng = random.Random(99)

        for _ in range(100):
            stream = self.random_stream(rng, samples, rng.randint(0, 30))
            writer, _ = run(make_writer, stream)

            for call in writer.calls:
                if call[0] == "point":
                    assert call[1].is_valid

    def test_each_segment_has_at_least_two_points(self, make_writer, samples):
        rng = random.Random(7)

        for _ in range(100):
            stream = self.random_stream(rng, samples, rng.randint(0, 30))
            writer, _ = run(make_writer, stream)

            count = 0
            for name in writer.names:
                if name == "open":
                    count = 0
                elif name == "point":
                    count += 1
                elif name == "close_segment":
                    assert count >= 2

    def test_same_stream_twice_gives_same_calls(self, make_writer, samples):
        stream = [
            samples.valid(0), invalid(), samples.valid(2), samples.valid(3),
            invalid("nan"), samples.valid(5), samples.valid(6), samples.valid(7),
        ]

        first, _ = run(make_writer, stream)
        second, _ = run(make_writer, list(stream))

        assert first.calls == second.calls

    def test_consumes_one_shot_iterator(self, make_writer, samples):
        """The stream is read once, forward only."""
        generator = (samples.valid(i) for i in range(5))
        writer = make_writer()
        stats = LocationSegmenter(writer).write(generator)

        assert stats.points_written == 5
        assert next(generator, None) is None
