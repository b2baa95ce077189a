"""Tests for partitioning."""

import pytest

from message_sender.dispatch import partition, worker_count_for


class TestWorkerCount:
    """Tests for worker_count_for()."""

    def test_defaults(self):
        """Test one worker per message when only the count is given."""
        assert worker_count_for(10) == 10
        assert worker_count_for(1) == 1

    def test_one_worker_per_message(self):
        """Test the default of one message per worker."""
        assert worker_count_for(10, batch_size=1, max_workers=1_000_000) == 10

    def test_capped(self):
        """Test the worker ceiling."""
        assert worker_count_for(10, batch_size=1, max_workers=4) == 4

    def test_batch_size(self):
        """Test several messages per worker."""
        assert worker_count_for(10, batch_size=3, max_workers=100) == 3

    def test_at_least_one(self):
        """Test that fewer messages than batch_size still gets a worker."""
        assert worker_count_for(2, batch_size=5, max_workers=100) == 1

    @pytest.mark.parametrize(
        "count,batch_size,max_workers", [(0, 1, 1), (1, 0, 1), (1, 1, 0)]
    )
    def test_invalid(self, count, batch_size, max_workers):
        """Test invalid arguments."""
        with pytest.raises(ValueError):
            worker_count_for(count, batch_size, max_workers)


class TestPartition:
    """Tests for partition()."""

    @pytest.mark.parametrize(
        "total,workers", [(1, 1), (3, 1), (10, 3), (10, 10), (1001, 7), (5, 2)]
    )
    def test_covers_exactly_once(self, total, workers):
        """Test contiguous, disjoint coverage of every index."""
        slices = partition(total, workers)
        assert len(slices) == workers
        covered = [i for r in slices for i in r]
        assert covered == list(range(total))
        for prev, nxt in zip(slices, slices[1:]):
            assert prev.stop == nxt.start

    def test_last_absorbs_remainder(self):
        """Test that the remainder goes to the last worker."""
        slices = partition(10, 3)
        assert slices == [range(0, 3), range(3, 6), range(6, 10)]

    @pytest.mark.parametrize("workers", [0, 4])
    def test_invalid_worker_count(self, workers):
        """Test worker counts outside 1..total."""
        with pytest.raises(ValueError):
            partition(3, workers)
