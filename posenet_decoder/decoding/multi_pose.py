"""
Multi-pose decoding.

Greedy decoding of up to ``max_poses`` subjects:
1. Extract local-maximum candidates and sort them by score
2. Take the best remaining candidate as a root unless it falls within the
   NMS radius of the same joint of an already accepted pose
3. Decode the full pose from the root through the pose graph
4. Smooth each accepted pose against the track held in the same slot
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional

from ..common.data_types import Keypoint, Pose, TrackState, Vector2
from ..common.errors import ConfigurationMismatch
from ..smoothing import smooth_keypoint
from .candidates import LOCAL_MAXIMUM_RADIUS, extract_candidates
from .mapping import map_to_image
from .skeleton import PoseGraph
from .tensor_view import (
    as_tensor_view,
    validate_displacements,
    validate_num_joints,
    validate_offsets,
    validate_stride,
)
from .traversal import decode_pose

logger = logging.getLogger(__name__)


def within_nms_radius_of_corresponding_point(
    poses: List[Pose],
    squared_nms_radius: float,
    point: Vector2,
    joint_id: int,
) -> bool:
    """Check whether ``point`` is too close to ``joint_id`` of any accepted pose."""
    for pose in poses:
        keypoint = pose[joint_id]
        if not keypoint.found:
            continue
        dx = point[0] - keypoint.x
        dy = point[1] - keypoint.y
        if dx * dx + dy * dy <= squared_nms_radius:
            return True
    return False


def _has_prior_track(prior: Keypoint, raw: Keypoint, distance_threshold: float) -> bool:
    return prior.found and prior.x != 0.0 and abs(prior.x - raw.x) < distance_threshold


def decode_multiple_poses(
    heatmaps: Any,
    offsets: Any,
    displacements_fwd: Any,
    displacements_bwd: Any,
    stride: int,
    graph: PoseGraph,
    track_state: TrackState,
    max_poses: Optional[int] = None,
    score_threshold: float = 0.5,
    nms_radius: float = 20.0,
    smoothing_enabled: bool = False,
    distance_threshold: float = 50.0,
    q: float = 0.015,
    r: float = 0.015,
    local_radius: int = LOCAL_MAXIMUM_RADIUS,
) -> List[Pose]:
    """
    Decode up to ``max_poses`` poses and update the track state in place.

    Args:
        heatmaps: Heatmap tensor, one channel per joint
        offsets: Offset field tensor
        displacements_fwd: Parent -> child displacement tensor
        displacements_bwd: Child -> parent displacement tensor
        stride: Input image pixels per heatmap cell
        graph: Skeleton edges matching the displacement channels
        track_state: Previous-frame poses per slot; overwritten with this frame's
        max_poses: Maximum poses to accept (defaults to the number of slots)
        score_threshold: Minimum root candidate score
        nms_radius: Minimum image distance between same joints of two poses
        smoothing_enabled: Apply the temporal filter correction
        distance_threshold: Largest horizontal jump still treated as the same track
        q: Filter process noise
        r: Filter measurement noise
        local_radius: Half-size of the candidate local maximum window

    Returns:
        Accepted poses in slot order, at most ``max_poses``
    """
    heatmaps = as_tensor_view(heatmaps)
    offsets = as_tensor_view(offsets)
    displacements_fwd = as_tensor_view(displacements_fwd)
    displacements_bwd = as_tensor_view(displacements_bwd)

    validate_stride(stride)
    validate_num_joints(heatmaps, graph.num_joints)
    validate_offsets(heatmaps, offsets)
    validate_displacements(heatmaps, displacements_fwd, graph.num_edges, "Forward displacements")
    validate_displacements(heatmaps, displacements_bwd, graph.num_edges, "Backward displacements")

    if max_poses is None:
        max_poses = len(track_state)
    if max_poses > len(track_state):
        raise ConfigurationMismatch(
            f"max_poses={max_poses} exceeds the {len(track_state)} available track slots"
        )
    if track_state.num_joints != graph.num_joints:
        raise ConfigurationMismatch(
            f"Track state holds {track_state.num_joints} joints, graph has {graph.num_joints}"
        )

    squared_nms_radius = float(nms_radius) * nms_radius

    candidates = extract_candidates(heatmaps, score_threshold, local_radius)
    candidates.sort(key=lambda kp: kp.score, reverse=True)

    poses: List[Pose] = []
    suppressed = 0
    for root in candidates:
        if len(poses) >= max_poses:
            break

        root_position = map_to_image(root, stride, offsets)
        if within_nms_radius_of_corresponding_point(poses, squared_nms_radius, root_position, root.joint_id):
            suppressed += 1
            continue

        poses.append(decode_pose(
            root, heatmaps, offsets, stride, displacements_fwd, displacements_bwd, graph
        ))

    logger.debug(
        f"Decoded {len(poses)} poses from {len(candidates)} candidates ({suppressed} suppressed)"
    )

    # Subjects that disappeared lose their track
    for slot in range(len(poses), len(track_state)):
        track_state.reset_slot(slot)

    for slot, pose in enumerate(poses):
        prior_pose = track_state[slot]
        for joint_id, raw in enumerate(pose):
            if not raw.found:
                continue
            prior = prior_pose[joint_id]
            apply = smoothing_enabled and _has_prior_track(prior, raw, distance_threshold)
            pose[joint_id] = smooth_keypoint(raw, prior, q, r, apply=apply)
        track_state[slot] = pose.copy()

    return poses
