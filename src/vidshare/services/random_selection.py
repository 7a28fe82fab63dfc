"""
Random selection of published videos.

Builds an index permutation with a Fisher-Yates shuffle and takes a prefix.
Every published video is loaded and shuffled on each call, so cost grows
linearly with the catalogue.
"""

from __future__ import annotations

import logging
import random
from typing import List, Optional, Sequence, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


def fisher_yates_indices(n: int, rng: Optional[random.Random] = None) -> List[int]:
    """
    Return a uniformly random permutation of ``range(n)``.

    Swaps from the last index down to 1, drawing each partner index
    uniformly from ``[0, i]``.

    Parameters
    ----------
    n : int
        Number of indices to permute.
    rng : Optional[random.Random]
        Random source; a fresh unseeded ``random.Random`` when omitted.

    Returns
    -------
    List[int]
        The permuted indices.
    """
    if n < 0:
        raise ValueError("n must be non-negative")
    source = rng or random.Random()
    indices = list(range(n))
    for i in range(n - 1, 0, -1):
        j = source.randint(0, i)
        indices[i], indices[j] = indices[j], indices[i]
    return indices


def pick_random(
    items: Sequence[T], count: int, rng: Optional[random.Random] = None
) -> List[T]:
    """
    Pick ``min(count, len(items))`` distinct items in random order.

    Examples
    --------
    >>> pick_random(["a", "b", "c"], 5, random.Random(0))  # doctest: +SKIP
    ['b', 'c', 'a']
    """
    if count < 0:
        raise ValueError("count must be non-negative")
    logger.debug("Shuffling %d candidates to pick %d", len(items), count)
    order = fisher_yates_indices(len(items), rng)
    return [items[i] for i in order[:count]]
