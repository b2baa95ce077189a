"""Splitting a batch into contiguous per-worker slices."""

from ..config import DEFAULT_BATCH_SIZE, DEFAULT_MAX_WORKERS


def worker_count_for(
    message_count: int,
    batch_size: int = DEFAULT_BATCH_SIZE,
    max_workers: int = DEFAULT_MAX_WORKERS,
) -> int:
    """Number of workers for a batch: one per batch_size messages, capped."""
    if batch_size < 1:
        raise ValueError(f"batch_size must be >= 1, got {batch_size}")
    if max_workers < 1:
        raise ValueError(f"max_workers must be >= 1, got {max_workers}")
    if message_count < 1:
        raise ValueError(f"message_count must be >= 1, got {message_count}")

    return max(1, min(max_workers, message_count // batch_size))


def partition(total: int, worker_count: int) -> list[range]:
    """
    Split indices 0..total-1 into worker_count contiguous ranges.

    Every range holds total // worker_count indices except the last, which
    also takes the remainder.
    """
    if worker_count < 1 or worker_count > total:
        raise ValueError(
            f"worker_count must be between 1 and {total}, got {worker_count}"
        )

    per_worker = total // worker_count
    slices = []
    for i in range(worker_count):
        start = i * per_worker
        end = total if i == worker_count - 1 else start + per_worker
        slices.append(range(start, end))
    return slices
