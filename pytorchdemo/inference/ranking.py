"""
Label Ranking
==============

Turns a raw score vector into the top-N labelled predictions.
"""

from typing import List, Sequence

import numpy as np

from .results import InferenceResult


def get_top_n(
    scores: Sequence[float],
    labels: Sequence[str],
    count: int,
) -> List[InferenceResult]:
    """
    Rank labels by score and keep the ``count`` best.

    Equal scores keep their original label order.

    Args:
        scores: One score per label
        labels: Labels, index-aligned with ``scores``
        count: Number of results to return (all of them if larger than the label set)

    Returns:
        Results sorted by descending score

    Raises:
        ValueError: If lengths differ or ``count`` is negative

    Example:
        >>> get_top_n([0.1, 0.9, 0.5], ["cat", "dog", "bird"], 2)
        [InferenceResult(score=0.9, label='dog'), InferenceResult(score=0.5, label='bird')]
    """
    if count < 0:
        raise ValueError(f"count must be non-negative, got {count}")

    values = np.asarray(scores, dtype=np.float64).reshape(-1)
    if values.shape[0] != len(labels):
        raise ValueError(
            f"Got {values.shape[0]} scores for {len(labels)} labels"
        )

    # Stable sort on the negated scores keeps ties in index order
    order = np.argsort(-values, kind="stable")[:count]

    return [InferenceResult(score=float(values[i]), label=labels[i]) for i in order]
