"""
Keypoint candidate extraction for multi-pose decoding.

A candidate is a heatmap cell whose score passes the threshold and is not
exceeded by any cell of the same channel inside a square window around it.
Candidates are returned in (channel, y, x) order so that a stable sort by
score is reproducible when scores tie.
"""

from __future__ import annotations

import logging
from typing import Any, List

import numpy as np

from ..common.data_types import Keypoint
from .tensor_view import ArrayTensorView, as_tensor_view

logger = logging.getLogger(__name__)

# Window half-size, in heatmap cells, used for the local maximum test
LOCAL_MAXIMUM_RADIUS = 1


def score_is_maximum_in_local_window(
    joint_id: int,
    score: float,
    heatmap_y: int,
    heatmap_x: int,
    local_radius: int,
    heatmaps: ArrayTensorView,
) -> bool:
    """Check that no cell within ``local_radius`` of (x, y) has a strictly greater score."""
    scores = heatmaps.scores()
    y_start = max(heatmap_y - local_radius, 0)
    y_end = min(heatmap_y + local_radius + 1, heatmaps.height)
    x_start = max(heatmap_x - local_radius, 0)
    x_end = min(heatmap_x + local_radius + 1, heatmaps.width)

    window = scores[y_start:y_end, x_start:x_end, joint_id]
    return not bool(np.any(window > score))


def _window_maximum(scores: np.ndarray, radius: int) -> np.ndarray:
    """Per-channel maximum over a (2r+1) x (2r+1) window clamped to the grid."""
    height, width = scores.shape[:2]
    padded = np.pad(
        scores,
        ((radius, radius), (radius, radius), (0, 0)),
        mode="constant",
        constant_values=-np.inf,
    )
    result = np.full_like(scores, -np.inf)
    size = 2 * radius + 1
    for dy in range(size):
        for dx in range(size):
            np.maximum(result, padded[dy:dy + height, dx:dx + width], out=result)
    return result


def extract_candidates(
    heatmaps: Any,
    score_threshold: float,
    local_radius: int = LOCAL_MAXIMUM_RADIUS,
) -> List[Keypoint]:
    """
    Find local-maximum heatmap cells above a score threshold.

    Args:
        heatmaps: Heatmap tensor, one channel per joint
        score_threshold: Cells scoring below this are skipped
        local_radius: Half-size of the local maximum window in cells

    Returns:
        Candidates in (channel, y, x) order, positions in heatmap cells
    """
    heatmaps = as_tensor_view(heatmaps)
    scores = heatmaps.scores()

    is_local_max = scores >= _window_maximum(scores, local_radius)
    # Zeroed NaN and negative cells never qualify, even at a zero threshold
    mask = (scores >= score_threshold) & (scores > 0.0) & is_local_max

    channels, ys, xs = np.nonzero(mask.transpose(2, 0, 1))
    candidates = [
        Keypoint(
            joint_id=int(c),
            score=float(scores[y, x, c]),
            x=float(x),
            y=float(y),
            found=True,
        )
        for c, y, x in zip(channels, ys, xs)
    ]

    logger.debug(f"Extracted {len(candidates)} candidates above {score_threshold:.2f}")
    return candidates
