"""
Pose graph traversal along learned displacement fields.

Starting from one rooted keypoint, the rest of the skeleton is resolved by
walking the pose graph: first up the tree (child -> parent) through the
backward displacements, then down the tree (parent -> child) through the
forward displacements.
"""

from __future__ import annotations

from ..common.data_types import Keypoint, Pose
from .mapping import get_displacement, get_offset_vector, map_to_image, strided_index_near_point
from .skeleton import PoseGraph
from .tensor_view import ArrayTensorView


def _is_source(keypoint: Keypoint) -> bool:
    return keypoint.found and keypoint.score > 0.0


def traverse_to_target_keypoint(
    edge_id: int,
    source: Keypoint,
    target_joint_id: int,
    heatmaps: ArrayTensorView,
    offsets: ArrayTensorView,
    stride: int,
    displacements: ArrayTensorView,
) -> Keypoint:
    """
    Resolve ``target_joint_id`` by following ``edge_id`` from ``source``.

    Args:
        edge_id: Index of the edge in the pose graph
        source: Resolved keypoint in image coordinates
        target_joint_id: Joint at the other end of the edge
        heatmaps: Heatmap tensor
        offsets: Offset field tensor
        stride: Input image pixels per heatmap cell
        displacements: Forward or backward displacement tensor

    Returns:
        Target keypoint in image coordinates, scored by the heatmap at the
        displaced cell
    """
    height, width = heatmaps.height, heatmaps.width

    source_cell = strided_index_near_point(source.position, stride, height, width)
    displacement_x, displacement_y = get_displacement(edge_id, source_cell, displacements)
    displaced_point = (source.x + displacement_x, source.y + displacement_y)

    cell_x, cell_y = strided_index_near_point(displaced_point, stride, height, width)
    offset_x, offset_y = get_offset_vector(cell_y, cell_x, target_joint_id, offsets)
    score = heatmaps.score(cell_y, cell_x, target_joint_id)

    return Keypoint(
        joint_id=target_joint_id,
        score=score,
        x=cell_x * stride + offset_x,
        y=cell_y * stride + offset_y,
        found=True,
    )


def decode_pose(
    root: Keypoint,
    heatmaps: ArrayTensorView,
    offsets: ArrayTensorView,
    stride: int,
    displacements_fwd: ArrayTensorView,
    displacements_bwd: ArrayTensorView,
    graph: PoseGraph,
) -> Pose:
    """
    Decode a full pose from a root keypoint given in heatmap cells.

    Joints that cannot be reached stay unresolved. A root with zero score
    never seeds a traversal.
    """
    pose = Pose.empty(heatmaps.channels)

    root_x, root_y = map_to_image(root, stride, offsets)
    pose[root.joint_id] = Keypoint(
        joint_id=root.joint_id,
        score=root.score,
        x=root_x,
        y=root_y,
        found=True,
    )

    # Up the tree, following backward displacements
    for edge_id in range(graph.num_edges - 1, -1, -1):
        parent, child = graph.edges[edge_id]
        if _is_source(pose[child]) and not pose[parent].found:
            pose[parent] = traverse_to_target_keypoint(
                edge_id, pose[child], parent, heatmaps, offsets, stride, displacements_bwd
            )

    # Down the tree, following forward displacements
    for edge_id in range(graph.num_edges):
        parent, child = graph.edges[edge_id]
        if _is_source(pose[parent]) and not pose[child].found:
            pose[child] = traverse_to_target_keypoint(
                edge_id, pose[parent], child, heatmaps, offsets, stride, displacements_fwd
            )

    return pose
