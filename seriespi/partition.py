import logging
from typing import List, Optional


logger = logging.getLogger(__name__)


def partition_range(n: int, workers: int) -> Optional[List[List[range]]]:
    """Split ``range(n)`` into one list of contiguous blocks per worker.

    The first ``workers - 1`` workers get ``n // workers`` indices each and
    the last one also takes the remainder. Returns ``None`` when there are
    fewer indices than workers, meaning the caller should not fan out.
    """
    n = int(n)
    workers = int(workers)
    if workers < 1:
        raise ValueError("workers must be >= 1")
    if n < 0:
        raise ValueError("n must be >= 0")
    if n < workers:
        return None
    base = n // workers
    tasks = []
    for i in range(workers - 1):
        tasks.append([range(i * base, (i + 1) * base)])
    tasks.append([range((workers - 1) * base, n)])
    logger.debug("tasks: %s", tasks)
    return tasks
