"""Tests for synthetic point generation."""

import random

import numpy as np
import pytest

from py_spiderfy.config import settings
from py_spiderfy.core import (
    BoundingBox, InvalidArgument, PointSynthesizer, Status, SynthesizerOptions,
    detect_duplicates, synthesize, synthesize_with_duplicates,
)
from py_spiderfy.utils.random import get_rng, set_random_seed


class SequenceRandom:
    """Random source replaying a fixed cycle of values."""

    def __init__(self, values):
        self.values = list(values)
        self.calls = 0

    def random(self):
        value = self.values[self.calls % len(self.values)]
        self.calls += 1
        return value


class TestPlainSynthesis:
    """Test the plain generator."""

    def test_count_and_serials(self):
        """Test point count and sequential serial numbers."""
        points = synthesize(100)

        assert len(points) == 100
        assert [p.serial_number for p in points] == list(range(1, 101))
        assert len({p.serial_number for p in points}) == 100

    def test_station_labels(self):
        """Test station labels follow serial numbers."""
        points = synthesize(3)
        assert [p.station for p in points] == ["Station-1", "Station-2", "Station-3"]

    def test_zero_points(self):
        """Test that zero points yields an empty list."""
        assert synthesize(0) == []

    @pytest.mark.parametrize("n", [-1, 2.5, "10", None, True])
    def test_invalid_count_fails_fast(self, n):
        """Test that invalid counts raise immediately."""
        with pytest.raises(InvalidArgument):
            synthesize(n)

    def test_count_above_limit_rejected(self, monkeypatch):
        """Test the max_points limit from settings."""
        monkeypatch.setattr(settings, "max_points", 5)
        assert len(synthesize(5)) == 5
        with pytest.raises(InvalidArgument):
            synthesize(6)

    def test_bounds_and_precision(self):
        """Test coordinates stay in the Murcia box with 6 decimals."""
        set_random_seed(1234)
        points = PointSynthesizer().generate(10_000)

        lons = np.array([p.longitude for p in points])
        lats = np.array([p.latitude for p in points])
        assert np.all((lons >= -1.6) & (lons <= -0.8))
        assert np.all((lats >= 37.5) & (lats <= 38.2))
        for point in points[:200]:
            assert round(point.longitude, 6) == point.longitude
            assert round(point.latitude, 6) == point.latitude

    def test_all_statuses_drawn(self):
        """Test that every status category appears."""
        set_random_seed(99)
        statuses = {p.status for p in PointSynthesizer().generate(500)}
        assert statuses == {Status.GREEN, Status.YELLOW, Status.RED}

    def test_unseeded_calls_differ(self):
        """Test that unseeded calls produce different values."""
        set_random_seed(None)
        first = [p.coordinates for p in synthesize(50)]
        second = [p.coordinates for p in synthesize(50)]
        assert first != second


class TestInjectedRandomSource:
    """Test reproducibility through injected random sources."""

    def test_fixed_sequence_values(self):
        """Test exact values from a fixed random sequence."""
        rng = SequenceRandom([0.0, 0.5, 0.99])
        point = PointSynthesizer(rng=rng).generate(1)[0]

        # draws: latitude, longitude, status
        assert point.coordinates == (-1.2, 37.5)
        assert point.status is Status.YELLOW
        assert rng.calls == 3

    def test_status_index_mapping(self):
        """Test mapping from random draw to status."""
        synthesizer = PointSynthesizer(rng=SequenceRandom([0.0]))
        assert synthesizer.random_status() is Status.GREEN
        synthesizer.rng = SequenceRandom([0.4])
        assert synthesizer.random_status() is Status.RED
        synthesizer.rng = SequenceRandom([0.7])
        assert synthesizer.random_status() is Status.YELLOW

    def test_same_seed_same_points(self):
        """Test that the same seed reproduces the same points."""
        first = PointSynthesizer(rng=np.random.default_rng(7)).generate(20)
        second = PointSynthesizer(rng=np.random.default_rng(7)).generate(20)
        assert first == second

    def test_stdlib_random_source(self):
        """Test that random.Random works as a source."""
        points = PointSynthesizer(rng=random.Random(3)).generate(10)
        assert len(points) == 10

    def test_global_generator_reset(self):
        """Test reseeding the module-wide generator."""
        set_random_seed(5)
        first = get_rng().random()
        set_random_seed(5)
        assert get_rng().random() == first

    def test_custom_bounds(self):
        """Test generation inside a custom bounding box."""
        options = SynthesizerOptions(bounds=BoundingBox(0.0, 1.0, 10.0, 11.0), precision=2)
        points = PointSynthesizer(options, rng=np.random.default_rng(0)).generate(100)

        for point in points:
            assert options.bounds.contains(*point.coordinates)
            assert round(point.longitude, 2) == point.longitude

    def test_inverted_bounds_rejected(self):
        """Test that invalid bounding boxes are rejected."""
        with pytest.raises(InvalidArgument):
            BoundingBox(lon_min=1.0, lon_max=0.0)
        with pytest.raises(InvalidArgument):
            BoundingBox(lat_min=float("nan"))


class TestForcedDuplicates:
    """Test the generator variant with a guaranteed duplicate pair."""

    def test_shape(self):
        """Test count, serials and the trailing duplicate pair."""
        points = synthesize_with_duplicates(100)

        assert len(points) == 102
        assert [p.serial_number for p in points] == list(range(1, 103))
        assert points[-1].coordinates == points[-2].coordinates
        assert points[-2].station == "Station-101"

    def test_zero_returns_only_pair(self):
        """Test that n=0 returns only the forced pair."""
        points = synthesize_with_duplicates(0)

        assert [p.serial_number for p in points] == [1, 2]
        assert points[0].coordinates == points[1].coordinates

    def test_pair_found_by_detection(self):
        """Test that detection finds the forced pair."""
        points = PointSynthesizer(rng=np.random.default_rng(11)).generate_with_duplicates(30)
        duplicates = detect_duplicates(points)

        assert points[-2] in duplicates
        assert points[-1] in duplicates

    def test_invalid_count(self):
        """Test that a negative count is rejected."""
        with pytest.raises(InvalidArgument):
            synthesize_with_duplicates(-5)

    def test_limit_counts_forced_pair(self, monkeypatch):
        """Test that max_points bounds the total including the forced pair."""
        monkeypatch.setattr(settings, "max_points", 5)
        assert len(synthesize_with_duplicates(3)) == 5
        with pytest.raises(InvalidArgument):
            synthesize_with_duplicates(4)
        with pytest.raises(InvalidArgument):
            synthesize_with_duplicates(5)
