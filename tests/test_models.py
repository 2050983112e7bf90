"""
Unit tests for data models.
"""

import pytest
from dtool.config import CACHE_FILENAME, DEFAULT_PARALLEL
from dtool.models import (
    RunConfig,
    FingerprintOutcome,
    PoolResult,
    DuplicatePair,
    DuplicateGroup,
    RunSummary,
    format_size,
)


class TestFormatSize:
    """Test the format_size utility function."""

    def test_bytes(self):
        """Test formatting bytes."""
        assert format_size(500) == "500.0 B"

    def test_kilobytes(self):
        """Test formatting kilobytes."""
        assert format_size(2048) == "2.0 KB"

    def test_megabytes(self):
        """Test formatting megabytes."""
        assert format_size(5242880) == "5.0 MB"

    def test_zero(self):
        """Test formatting zero bytes."""
        assert format_size(0) == "0.0 B"


class TestRunConfig:
    """Test RunConfig defaults and validation."""

    def test_defaults(self):
        """Test default RunConfig values."""
        config = RunConfig()
        assert config.max_parallel == DEFAULT_PARALLEL
        assert config.verbose is False
        assert config.visual is False
        assert config.prune is True
        assert config.cache_filename == CACHE_FILENAME
        assert '.jpg' in config.extensions

    @pytest.mark.parametrize("value", [0, -3, 1.5, "2"])
    def test_rejects_invalid_parallelism(self, value):
        """Test that parallelism below 1 or not an int is rejected."""
        with pytest.raises(ValueError):
            RunConfig(max_parallel=value)

    def test_extensions_lowercased(self):
        """Test that extensions are normalised to lower case."""
        config = RunConfig(extensions={'.JPG', '.Png'})
        assert config.extensions == frozenset({'.jpg', '.png'})

    def test_empty_extensions_kept_empty(self):
        """Test that an empty extension set stays empty."""
        assert RunConfig(extensions=()).extensions == frozenset()

    def test_frozen(self):
        """Test that RunConfig cannot be modified after construction."""
        config = RunConfig()
        with pytest.raises(AttributeError):
            config.max_parallel = 8


class TestFingerprintOutcome:
    """Test FingerprintOutcome and PoolResult."""

    def test_success(self):
        """Test an outcome with a fingerprint."""
        outcome = FingerprintOutcome(path="a.jpg", fingerprint="ffff0000")
        assert outcome.ok

    def test_failure(self):
        """Test an outcome with an error."""
        outcome = FingerprintOutcome(path="a.jpg", error="broken")
        assert not outcome.ok

    def test_pool_result_views(self):
        """Test splitting pool outcomes into successes and failures."""
        result = PoolResult(outcomes=[
            FingerprintOutcome(path="a.jpg", fingerprint="1"),
            FingerprintOutcome(path="b.jpg", error="bad"),
            FingerprintOutcome(path="c.jpg", fingerprint="2"),
        ])
        assert result.total == 3
        assert [o.path for o in result.succeeded] == ["a.jpg", "c.jpg"]
        assert [o.path for o in result.failed] == ["b.jpg"]


class TestDuplicateModels:
    """Test DuplicatePair, DuplicateGroup and RunSummary."""

    def test_pair_to_dict(self):
        """Test DuplicatePair serialization."""
        pair = DuplicatePair(fingerprint="abcd", previous="a.jpg", current="b.jpg")
        assert pair.to_dict() == {
            'fingerprint': "abcd",
            'previous': "a.jpg",
            'current': "b.jpg",
        }

    def test_group_properties(self):
        """Test DuplicateGroup size and redundant count."""
        group = DuplicateGroup(fingerprint="abcd", paths=["a.jpg", "b.jpg", "c.jpg"])
        assert group.size == 3
        assert group.redundant == 2
        assert group.to_dict()['paths'] == ["a.jpg", "b.jpg", "c.jpg"]

    def test_summary_error_count(self):
        """Test that error_count counts failed outcomes."""
        summary = RunSummary(
            directory="/photos",
            failed=[FingerprintOutcome(path="bad.jpg", error="x")],
        )
        assert summary.error_count == 1
