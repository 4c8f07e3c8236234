"""
Skeleton topology used for multi-pose decoding.

The pose graph is a tree of parent -> child joint pairs. Edge ``e`` reads
its displacement vector from channels ``(e, e + num_edges)`` of the
forward and backward displacement tensors, so the edge order must match
the order the network was trained with.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Iterator, List, Sequence, Tuple


class JointIndex(IntEnum):
    """COCO keypoint indices."""
    NOSE = 0
    LEFT_EYE = 1
    RIGHT_EYE = 2
    LEFT_EAR = 3
    RIGHT_EAR = 4
    LEFT_SHOULDER = 5
    RIGHT_SHOULDER = 6
    LEFT_ELBOW = 7
    RIGHT_ELBOW = 8
    LEFT_WRIST = 9
    RIGHT_WRIST = 10
    LEFT_HIP = 11
    RIGHT_HIP = 12
    LEFT_KNEE = 13
    RIGHT_KNEE = 14
    LEFT_ANKLE = 15
    RIGHT_ANKLE = 16


KEYPOINT_NAMES: List[str] = [joint.name.lower() for joint in JointIndex]


@dataclass(frozen=True)
class PoseGraph:
    """Parent -> child edges over ``num_joints`` joints."""
    edges: Tuple[Tuple[int, int], ...]
    num_joints: int

    def __post_init__(self):
        if self.num_joints <= 0:
            raise ValueError("num_joints must be positive")
        for parent, child in self.edges:
            if not (0 <= parent < self.num_joints and 0 <= child < self.num_joints):
                raise ValueError(
                    f"Edge ({parent}, {child}) references a joint outside 0..{self.num_joints - 1}"
                )

    @classmethod
    def from_edges(cls, edges: Sequence[Tuple[int, int]], num_joints: int) -> "PoseGraph":
        return cls(edges=tuple((int(p), int(c)) for p, c in edges), num_joints=num_joints)

    @property
    def num_edges(self) -> int:
        return len(self.edges)

    def __len__(self) -> int:
        return len(self.edges)

    def __iter__(self) -> Iterator[Tuple[int, int]]:
        return iter(self.edges)


# Trained edge order of the PoseNet displacement outputs
DEFAULT_POSE_GRAPH = PoseGraph.from_edges(
    [
        # Face
        (JointIndex.NOSE, JointIndex.LEFT_EYE),
        (JointIndex.LEFT_EYE, JointIndex.LEFT_EAR),
        (JointIndex.NOSE, JointIndex.RIGHT_EYE),
        (JointIndex.RIGHT_EYE, JointIndex.RIGHT_EAR),
        # Left side
        (JointIndex.NOSE, JointIndex.LEFT_SHOULDER),
        (JointIndex.LEFT_SHOULDER, JointIndex.LEFT_ELBOW),
        (JointIndex.LEFT_ELBOW, JointIndex.LEFT_WRIST),
        (JointIndex.LEFT_SHOULDER, JointIndex.LEFT_HIP),
        (JointIndex.LEFT_HIP, JointIndex.LEFT_KNEE),
        (JointIndex.LEFT_KNEE, JointIndex.LEFT_ANKLE),
        # Right side
        (JointIndex.NOSE, JointIndex.RIGHT_SHOULDER),
        (JointIndex.RIGHT_SHOULDER, JointIndex.RIGHT_ELBOW),
        (JointIndex.RIGHT_ELBOW, JointIndex.RIGHT_WRIST),
        (JointIndex.RIGHT_SHOULDER, JointIndex.RIGHT_HIP),
        (JointIndex.RIGHT_HIP, JointIndex.RIGHT_KNEE),
        (JointIndex.RIGHT_KNEE, JointIndex.RIGHT_ANKLE),
    ],
    num_joints=len(JointIndex),
)
