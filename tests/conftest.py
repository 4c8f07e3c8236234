"""Shared fixtures: synthetic network outputs."""

from dataclasses import dataclass

import numpy as np
import pytest

from posenet_decoder.decoding import DEFAULT_POSE_GRAPH

NUM_JOINTS = DEFAULT_POSE_GRAPH.num_joints
NUM_EDGES = DEFAULT_POSE_GRAPH.num_edges


@dataclass
class SyntheticOutputs:
    """Zero-filled output tensors with batch dimension."""
    heatmaps: np.ndarray
    offsets: np.ndarray
    displacements_fwd: np.ndarray
    displacements_bwd: np.ndarray

    def add_person(self, x: int, y: int, root_score: float = 0.9, joint_score: float = 0.6) -> None:
        """Place every joint of one person on cell (x, y), nose scoring highest."""
        self.heatmaps[0, y, x, :] = joint_score
        self.heatmaps[0, y, x, 0] = root_score

    def as_list(self):
        return [self.heatmaps, self.offsets, self.displacements_fwd, self.displacements_bwd]


def make_outputs(height: int = 17, width: int = 17, num_joints: int = NUM_JOINTS,
                 num_edges: int = NUM_EDGES) -> SyntheticOutputs:
    return SyntheticOutputs(
        heatmaps=np.zeros((1, height, width, num_joints), dtype=np.float32),
        offsets=np.zeros((1, height, width, 2 * num_joints), dtype=np.float32),
        displacements_fwd=np.zeros((1, height, width, 2 * num_edges), dtype=np.float32),
        displacements_bwd=np.zeros((1, height, width, 2 * num_edges), dtype=np.float32),
    )


@pytest.fixture
def outputs() -> SyntheticOutputs:
    """17x17 grid, 17 joints, no detections."""
    return make_outputs()


@pytest.fixture
def random_heatmaps() -> np.ndarray:
    rng = np.random.default_rng(seed=7)
    return rng.random((1, 12, 10, 4), dtype=np.float32)
