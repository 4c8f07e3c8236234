"""Decoding of heatmap, offset and displacement tensors into poses."""

from .tensor_view import TensorView, ArrayTensorView, as_tensor_view
from .skeleton import JointIndex, KEYPOINT_NAMES, PoseGraph, DEFAULT_POSE_GRAPH
from .mapping import (
    get_offset_vector,
    map_to_image,
    strided_index_near_point,
    get_displacement,
)
from .candidates import (
    LOCAL_MAXIMUM_RADIUS,
    extract_candidates,
    score_is_maximum_in_local_window,
)
from .traversal import decode_pose, traverse_to_target_keypoint
from .single_pose import decode_single_pose
from .multi_pose import decode_multiple_poses, within_nms_radius_of_corresponding_point
from .profiles import (
    OPENPOSE_JOINT_PERMUTATION,
    PROFILES,
    ModelProfile,
    compute_stride,
    get_profile,
    resolve_permutation,
)

__all__ = [
    # Tensors
    "TensorView",
    "ArrayTensorView",
    "as_tensor_view",
    # Skeleton
    "JointIndex",
    "KEYPOINT_NAMES",
    "PoseGraph",
    "DEFAULT_POSE_GRAPH",
    # Mapping
    "get_offset_vector",
    "map_to_image",
    "strided_index_near_point",
    "get_displacement",
    # Candidates
    "LOCAL_MAXIMUM_RADIUS",
    "extract_candidates",
    "score_is_maximum_in_local_window",
    # Decoders
    "decode_pose",
    "traverse_to_target_keypoint",
    "decode_single_pose",
    "decode_multiple_poses",
    "within_nms_radius_of_corresponding_point",
    # Profiles
    "OPENPOSE_JOINT_PERMUTATION",
    "PROFILES",
    "ModelProfile",
    "compute_stride",
    "get_profile",
    "resolve_permutation",
]
