"""
Unit tests for the bounded worker pool.
"""

import io
import logging
import threading
import time

import pytest
from dtool.models import RunConfig
from dtool.scanner import WorkerPool, fingerprint_files


class TestWorkerPool:
    """Test WorkerPool.run."""

    def test_merges_successes(self, temp_dir, fake_fingerprints):
        """Test that new fingerprints are merged into the existing table."""
        fake = fake_fingerprints({"a.jpg": "ffff0000", "c.png": "1234abcd"})
        table = {"old.jpg": "0000"}

        result = WorkerPool(RunConfig(max_parallel=2), fingerprint_func=fake).run(
            temp_dir, ["a.jpg", "c.png"], table
        )

        assert result.total == 2
        assert table == {"old.jpg": "0000", "a.jpg": "ffff0000", "c.png": "1234abcd"}

    def test_one_outcome_per_candidate(self, temp_dir, fake_fingerprints):
        """Test that every candidate is fingerprinted exactly once."""
        names = [f"img{i:03d}.jpg" for i in range(200)]
        failing = set(names[::7])
        fake = fake_fingerprints({name: f"{i:016x}" for i, name in enumerate(names)}, failing)
        table = {}

        result = WorkerPool(RunConfig(max_parallel=8), fingerprint_func=fake).run(temp_dir, names, table)

        assert result.total == len(names)
        assert sorted(o.path for o in result.outcomes) == names
        assert sorted(fake.calls) == names
        assert {o.path for o in result.failed} == failing
        assert set(table) == set(names) - failing

    def test_failures_not_merged(self, temp_dir, fake_fingerprints):
        """Test that failed files never enter the table."""
        fake = fake_fingerprints({"good.jpg": "abcd"}, failing={"bad.jpg"})
        table = {}

        result = WorkerPool(RunConfig(max_parallel=2), fingerprint_func=fake).run(
            temp_dir, ["bad.jpg", "good.jpg"], table
        )

        assert table == {"good.jpg": "abcd"}
        assert [o.path for o in result.failed] == ["bad.jpg"]
        assert "Not a valid image file" in result.failed[0].error

    def test_unexpected_exception_is_isolated(self, temp_dir):
        """Test that an arbitrary exception only fails its own file."""
        def flaky(path):
            if path.endswith("boom.jpg"):
                raise RuntimeError("decoder crashed")
            return "1111"

        table = {}
        result = WorkerPool(RunConfig(max_parallel=3), fingerprint_func=flaky).run(
            temp_dir, ["a.jpg", "boom.jpg", "c.jpg"], table
        )

        assert table == {"a.jpg": "1111", "c.jpg": "1111"}
        assert result.failed[0].error == "decoder crashed"

    def test_empty_fingerprint_is_failure(self, temp_dir):
        """Test that an empty fingerprint counts as a failure."""
        table = {}
        result = WorkerPool(RunConfig(), fingerprint_func=lambda path: "").run(
            temp_dir, ["a.jpg"], table
        )
        assert table == {}
        assert len(result.failed) == 1

    @pytest.mark.parametrize("limit", [1, 2, 4])
    def test_parallelism_is_bounded(self, temp_dir, limit):
        """Test that no more than max_parallel computations run at once."""
        lock = threading.Lock()
        state = {'running': 0, 'peak': 0}

        def slow(path):
            with lock:
                state['running'] += 1
                state['peak'] = max(state['peak'], state['running'])
            time.sleep(0.01)
            with lock:
                state['running'] -= 1
            return "abcd"

        names = [f"{i}.jpg" for i in range(20)]
        WorkerPool(RunConfig(max_parallel=limit), fingerprint_func=slow).run(temp_dir, names, {})

        assert 1 <= state['peak'] <= limit

    def test_paths_resolved_against_directory(self, temp_dir):
        """Test that the fingerprint function receives full paths."""
        seen = []
        WorkerPool(RunConfig(), fingerprint_func=lambda p: seen.append(p) or "ab").run(
            temp_dir, ["a.jpg"], {}
        )
        assert seen == [str(temp_dir / "a.jpg")]

    def test_empty_candidates(self, temp_dir, fake_fingerprints):
        """Test that no candidates means no work."""
        fake = fake_fingerprints({})
        table = {"a.jpg": "1"}
        result = WorkerPool(RunConfig(), fingerprint_func=fake).run(temp_dir, [], table)
        assert result.total == 0
        assert fake.calls == []
        assert table == {"a.jpg": "1"}

    def test_progress_bar_option(self, temp_dir, fake_fingerprints):
        """Test that asking for a progress bar does not change the result."""
        fake = fake_fingerprints({"a.jpg": "1", "b.jpg": "2"})
        table = {}
        result = WorkerPool(RunConfig(show_progress=True), fingerprint_func=fake).run(
            temp_dir, ["a.jpg", "b.jpg"], table
        )
        assert result.total == 2
        assert table == {"a.jpg": "1", "b.jpg": "2"}


class TestReporting:
    """Test verbose output and error diagnostics."""

    def test_verbose_prints_fingerprint_and_path(self, temp_dir, fake_fingerprints):
        """Test the verbose line format."""
        out = io.StringIO()
        fake = fake_fingerprints({"a.jpg": "ffff0000"})
        WorkerPool(RunConfig(verbose=True), fingerprint_func=fake, stdout=out).run(
            temp_dir, ["a.jpg"], {}
        )
        assert out.getvalue() == f"ffff0000 {temp_dir / 'a.jpg'}\n"

    def test_quiet_by_default(self, temp_dir, fake_fingerprints):
        """Test that nothing is printed without verbose."""
        out = io.StringIO()
        fake = fake_fingerprints({"a.jpg": "ffff0000"})
        WorkerPool(RunConfig(), fingerprint_func=fake, stdout=out).run(temp_dir, ["a.jpg"], {})
        assert out.getvalue() == ""

    def test_failure_logged_with_path(self, temp_dir, fake_fingerprints, caplog):
        """Test that each failure is logged once with its path."""
        fake = fake_fingerprints({"a.jpg": "1"}, failing={"bad.jpg"})
        with caplog.at_level(logging.ERROR, logger="dtool"):
            WorkerPool(RunConfig(max_parallel=2), fingerprint_func=fake).run(
                temp_dir, ["a.jpg", "bad.jpg"], {}
            )

        errors = [r for r in caplog.records if r.levelno == logging.ERROR]
        assert len(errors) == 1
        assert "bad.jpg" in errors[0].getMessage()


class TestFingerprintFiles:
    """Test the convenience wrapper with the real fingerprint function."""

    def test_real_images(self, sample_images, temp_dir):
        """Test fingerprinting real images including a corrupted one."""
        table = {}
        result = fingerprint_files(
            temp_dir,
            ["identical1.png", "identical2.png", "corrupted.jpg"],
            table,
            RunConfig(max_parallel=2),
        )
        assert result.total == 3
        assert set(table) == {"identical1.png", "identical2.png"}
        assert table["identical1.png"] == table["identical2.png"]
        assert [o.path for o in result.failed] == ["corrupted.jpg"]
