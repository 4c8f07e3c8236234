"""
Single-pose decoding.

Each joint is placed at the global maximum of its heatmap channel. There
is no threshold and no graph traversal, so every joint is always resolved.
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

import numpy as np

from ..common.data_types import Keypoint, Pose
from ..common.errors import ConfigurationMismatch
from ..smoothing import smooth_keypoint
from .mapping import map_to_image
from .profiles import resolve_permutation
from .tensor_view import as_tensor_view, validate_offsets, validate_stride

logger = logging.getLogger(__name__)


def decode_single_pose(
    heatmaps: Any,
    offsets: Any,
    stride: int,
    prior_pose: Pose,
    smoothing_enabled: bool = False,
    q: float = 0.015,
    r: float = 0.015,
    joint_permutation: Optional[Sequence[int]] = None,
) -> Pose:
    """
    Decode exactly one pose from heatmaps and offsets.

    Args:
        heatmaps: Heatmap tensor, one channel per joint
        offsets: Offset field tensor
        stride: Input image pixels per heatmap cell
        prior_pose: Previous-frame pose, indexed by output joint id
        smoothing_enabled: Apply the temporal filter correction
        q: Filter process noise
        r: Filter measurement noise
        joint_permutation: Heatmap channel -> output joint id

    Returns:
        Pose with every joint resolved, in image coordinates
    """
    heatmaps = as_tensor_view(heatmaps)
    offsets = as_tensor_view(offsets)
    validate_stride(stride)
    validate_offsets(heatmaps, offsets)

    num_joints = heatmaps.channels
    permutation = resolve_permutation(joint_permutation, num_joints)
    if len(prior_pose) != num_joints:
        raise ConfigurationMismatch(
            f"Prior pose has {len(prior_pose)} joints, heatmaps have {num_joints} channels"
        )

    # Row-major flattening keeps the first maximum in (y, x) scan order
    scores = heatmaps.scores().reshape(-1, num_joints)
    best_cells = np.argmax(scores, axis=0)

    pose = Pose.empty(num_joints)
    for channel in range(num_joints):
        cell = int(best_cells[channel])
        y, x = divmod(cell, heatmaps.width)
        part = Keypoint(
            joint_id=channel,
            score=float(scores[cell, channel]),
            x=float(x),
            y=float(y),
            found=True,
        )
        image_x, image_y = map_to_image(part, stride, offsets)

        output_id = permutation[channel]
        raw = Keypoint(joint_id=output_id, score=part.score, x=image_x, y=image_y, found=True)

        prior = prior_pose[output_id]
        if not prior.found:
            # Fresh track: start the filter at the measurement
            prior = prior.moved_to(raw.x, raw.y)

        pose[output_id] = smooth_keypoint(raw, prior, q, r, apply=smoothing_enabled)

    return pose
