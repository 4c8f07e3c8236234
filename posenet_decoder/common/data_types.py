"""
Core data types for the PoseNet decoder.

This module defines the shared data structures used across decoding,
smoothing and tracking:
- Keypoint: one joint estimate plus its per-axis filter state
- Pose: a fixed-length, joint-indexed sequence of keypoints
- TrackState: the caller-owned, slot-stable previous-frame poses
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Iterator, List, Tuple

import numpy as np

Vector2 = Tuple[float, float]


class EstimationMode(str, Enum):
    """Number of subjects decoded per frame."""
    SINGLE = "single"
    MULTI = "multi"


class ModelType(str, Enum):
    """Supported network architectures."""
    MOBILENET = "mobilenet"
    RESNET50 = "resnet50"
    OPENPOSE = "openpose"


# -----------------------------------------------------------------------------
# Keypoints
# -----------------------------------------------------------------------------

@dataclass
class Keypoint:
    """A single joint estimate.

    Attributes:
        joint_id: Canonical joint index within the pose
        score: Heatmap confidence (0-1)
        x: Horizontal position (image pixels, or heatmap cells for raw candidates)
        y: Vertical position (image pixels, or heatmap cells for raw candidates)
        found: False for the "unresolved" sentinel, True for any measurement,
            including a legitimate zero-confidence one
        prior_estimate: Filter estimate the current position was corrected from
        error_covariance: Per-axis error covariance carried to the next frame
        gain: Per-axis gain used on the last update
    """
    joint_id: int
    score: float = 0.0
    x: float = 0.0
    y: float = 0.0
    found: bool = False
    prior_estimate: Vector2 = (0.0, 0.0)
    error_covariance: Vector2 = (0.0, 0.0)
    gain: Vector2 = (0.0, 0.0)

    @classmethod
    def unresolved(cls, joint_id: int) -> "Keypoint":
        """Sentinel for a joint that has not been detected."""
        return cls(joint_id=joint_id)

    @property
    def position(self) -> Vector2:
        return (self.x, self.y)

    def moved_to(self, x: float, y: float, **changes) -> "Keypoint":
        """Copy of this keypoint at a new position."""
        return replace(self, x=float(x), y=float(y), **changes)

    def is_visible(self, min_confidence: float) -> bool:
        return self.found and self.score >= min_confidence


# -----------------------------------------------------------------------------
# Poses
# -----------------------------------------------------------------------------

@dataclass
class Pose:
    """Keypoints for one subject, indexed by joint id."""
    keypoints: List[Keypoint] = field(default_factory=list)

    @classmethod
    def empty(cls, num_joints: int) -> "Pose":
        return cls(keypoints=[Keypoint.unresolved(j) for j in range(num_joints)])

    def copy(self) -> "Pose":
        """Copy with independent keypoints."""
        return Pose(keypoints=[replace(kp) for kp in self.keypoints])

    def __len__(self) -> int:
        return len(self.keypoints)

    def __iter__(self) -> Iterator[Keypoint]:
        return iter(self.keypoints)

    def __getitem__(self, joint_id: int) -> Keypoint:
        return self.keypoints[joint_id]

    def __setitem__(self, joint_id: int, keypoint: Keypoint) -> None:
        self.keypoints[joint_id] = keypoint

    @property
    def num_joints(self) -> int:
        return len(self.keypoints)

    @property
    def found_count(self) -> int:
        return sum(1 for kp in self.keypoints if kp.found)

    @property
    def is_empty(self) -> bool:
        """True when no joint is resolved."""
        return self.found_count == 0

    @property
    def score(self) -> float:
        """Mean confidence over resolved joints (0 for an empty pose)."""
        scores = [kp.score for kp in self.keypoints if kp.found]
        return float(np.mean(scores)) if scores else 0.0

    def visible_keypoints(self, min_confidence: float) -> List[Keypoint]:
        """Keypoints confident enough to be drawn."""
        return [kp for kp in self.keypoints if kp.is_visible(min_confidence)]

    def to_array(self) -> np.ndarray:
        """Return an (num_joints, 3) float32 array of x, y, score."""
        return np.array(
            [[kp.x, kp.y, kp.score] for kp in self.keypoints],
            dtype=np.float32,
        ).reshape(len(self.keypoints), 3)


# -----------------------------------------------------------------------------
# Track state
# -----------------------------------------------------------------------------

class TrackState:
    """Previous-frame poses, one per output slot.

    Slot ``i`` always holds the pose returned at position ``i`` by the
    previous decode call. The caller owns this object across frames; the
    decoders read it and overwrite it in place but never keep a reference.
    """

    __slots__ = ("num_joints", "slots")

    def __init__(self, max_poses: int, num_joints: int):
        if max_poses < 1:
            raise ValueError("max_poses must be at least 1")
        self.num_joints = num_joints
        self.slots: List[Pose] = [Pose.empty(num_joints) for _ in range(max_poses)]

    def __len__(self) -> int:
        return len(self.slots)

    def __getitem__(self, slot: int) -> Pose:
        return self.slots[slot]

    def __setitem__(self, slot: int, pose: Pose) -> None:
        self.slots[slot] = pose

    def __iter__(self) -> Iterator[Pose]:
        return iter(self.slots)

    @property
    def max_poses(self) -> int:
        return len(self.slots)

    @property
    def active_slots(self) -> List[int]:
        return [i for i, pose in enumerate(self.slots) if not pose.is_empty]

    def reset_slot(self, slot: int) -> None:
        """Drop the track held in ``slot``."""
        self.slots[slot] = Pose.empty(self.num_joints)

    def reset(self) -> None:
        for slot in range(len(self.slots)):
            self.reset_slot(slot)
