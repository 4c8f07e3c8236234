"""Tests for keypoint candidate extraction."""

import numpy as np
import pytest

from posenet_decoder.decoding import (
    ArrayTensorView,
    extract_candidates,
    score_is_maximum_in_local_window,
)


def brute_force_candidates(heatmaps: np.ndarray, threshold: float, radius: int):
    """Reference scan over (channel, y, x) with the same acceptance rule."""
    scores = np.nan_to_num(heatmaps[0], nan=0.0)
    scores[scores < 0] = 0.0
    height, width, channels = scores.shape
    found = []
    for c in range(channels):
        for y in range(height):
            for x in range(width):
                score = scores[y, x, c]
                if score < threshold or score <= 0.0:
                    continue
                window = scores[max(y - radius, 0):y + radius + 1, max(x - radius, 0):x + radius + 1, c]
                if not np.any(window > score):
                    found.append((c, y, x))
    return found


class TestExtractCandidates:
    """Test suite for extract_candidates."""

    @pytest.mark.parametrize("radius", [1, 2])
    def test_matches_sequential_scan(self, random_heatmaps, radius):
        candidates = extract_candidates(random_heatmaps, 0.3, local_radius=radius)
        got = [(kp.joint_id, int(kp.y), int(kp.x)) for kp in candidates]

        assert got == brute_force_candidates(random_heatmaps, 0.3, radius)

    def test_monotonic_in_threshold(self, random_heatmaps):
        counts = [len(extract_candidates(random_heatmaps, t)) for t in (0.0, 0.2, 0.5, 0.8, 0.95)]

        assert counts == sorted(counts, reverse=True)

    def test_candidates_are_local_maxima(self, random_heatmaps):
        view = ArrayTensorView(random_heatmaps)
        for kp in extract_candidates(view, 0.1):
            assert score_is_maximum_in_local_window(kp.joint_id, kp.score, int(kp.y), int(kp.x), 1, view)
            assert kp.found

    def test_order_is_channel_then_row_then_column(self):
        heatmaps = np.zeros((1, 6, 6, 2), dtype=np.float32)
        heatmaps[0, 4, 1, 0] = 0.9
        heatmaps[0, 1, 4, 0] = 0.7
        heatmaps[0, 0, 0, 1] = 0.8

        candidates = extract_candidates(heatmaps, 0.5)

        assert [(kp.joint_id, kp.y, kp.x) for kp in candidates] == [(0, 1, 4), (0, 4, 1), (1, 0, 0)]

    def test_equal_neighbours_are_both_kept(self):
        heatmaps = np.zeros((1, 5, 5, 1), dtype=np.float32)
        heatmaps[0, 2, 2, 0] = 0.6
        heatmaps[0, 2, 3, 0] = 0.6

        candidates = extract_candidates(heatmaps, 0.5)

        assert [(kp.x, kp.y) for kp in candidates] == [(2.0, 2.0), (3.0, 2.0)]

    def test_strictly_greater_neighbour_disqualifies(self):
        heatmaps = np.zeros((1, 5, 5, 1), dtype=np.float32)
        heatmaps[0, 2, 2, 0] = 0.6
        heatmaps[0, 3, 3, 0] = 0.61

        candidates = extract_candidates(heatmaps, 0.5)

        assert [(kp.x, kp.y) for kp in candidates] == [(3.0, 3.0)]

    def test_window_is_clamped_at_borders(self):
        heatmaps = np.zeros((1, 3, 3, 1), dtype=np.float32)
        heatmaps[0, 0, 0, 0] = 0.9
        heatmaps[0, 2, 2, 0] = 0.8

        candidates = extract_candidates(heatmaps, 0.5)

        assert len(candidates) == 2

    def test_nan_and_negative_scores_never_pass(self):
        heatmaps = np.zeros((1, 4, 4, 1), dtype=np.float32)
        heatmaps[0, 1, 1, 0] = np.nan
        heatmaps[0, 2, 2, 0] = -3.0

        assert extract_candidates(heatmaps, 0.1) == []

    def test_zero_threshold_skips_nan_and_negative_cells(self):
        heatmaps = np.full((1, 4, 4, 2), np.nan, dtype=np.float32)
        heatmaps[0, :, :, 1] = -0.5

        assert extract_candidates(heatmaps, 0.0) == []

    def test_all_below_threshold(self):
        heatmaps = np.full((1, 4, 4, 3), 0.2, dtype=np.float32)

        assert extract_candidates(heatmaps, 0.5) == []
