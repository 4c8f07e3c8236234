"""Conversion between heatmap-grid cells and input-image coordinates."""

from __future__ import annotations

from typing import Tuple

from ..common.data_types import Keypoint, Vector2
from .tensor_view import ArrayTensorView


def get_offset_vector(y: int, x: int, joint_id: int, offsets: ArrayTensorView) -> Vector2:
    """
    Offset (x, y) for ``joint_id`` at heatmap cell (x, y).

    The first half of the offset channels holds the y components and the
    second half the x components.
    """
    num_joints = offsets.channels // 2
    return (
        float(offsets.array[y, x, joint_id + num_joints]),
        float(offsets.array[y, x, joint_id]),
    )


def map_to_image(keypoint: Keypoint, stride: int, offsets: ArrayTensorView) -> Vector2:
    """
    Position of a heatmap-grid keypoint in the input image.

    Args:
        keypoint: Keypoint whose x, y are heatmap cell indices
        stride: Input image pixels per heatmap cell
        offsets: Offset field tensor

    Returns:
        (x, y) in image pixels
    """
    offset_x, offset_y = get_offset_vector(int(keypoint.y), int(keypoint.x), keypoint.joint_id, offsets)
    return (keypoint.x * stride + offset_x, keypoint.y * stride + offset_y)


def strided_index_near_point(point: Vector2, stride: int, height: int, width: int) -> Tuple[int, int]:
    """
    Heatmap cell (x, y) closest to an image-space point, clamped to the grid.

    Halves round to the nearest even cell.
    """
    x = min(max(round(float(point[0]) / stride), 0), width - 1)
    y = min(max(round(float(point[1]) / stride), 0), height - 1)
    return (int(x), int(y))


def get_displacement(edge_id: int, cell: Tuple[int, int], displacements: ArrayTensorView) -> Vector2:
    """Displacement (x, y) along ``edge_id`` at heatmap cell (x, y)."""
    num_edges = displacements.channels // 2
    x, y = cell
    return (
        float(displacements.array[y, x, num_edges + edge_id]),
        float(displacements.array[y, x, edge_id]),
    )
