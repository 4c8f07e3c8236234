"""
Model profiles.

Everything that depends on which network produced the tensors is resolved
once, when the configuration is loaded, into a frozen :class:`ModelProfile`:
where each tensor sits in the engine's output list, whether the joint
channels need reordering, and how the stride is derived.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Sequence, Tuple, Union

from ..common.data_types import ModelType
from ..common.errors import ConfigurationMismatch, InvalidTensorShape

# Heatmap channel -> canonical joint id for OpenPose outputs
OPENPOSE_JOINT_PERMUTATION: Tuple[int, ...] = (
    0, 17, 5, 7, 9, 6, 8, 10, 11, 13, 15, 12, 14, 16, 1, 2, 3, 4, 18,
)


def compute_stride(input_height: int, heatmap_height: int, multiple: int = 8) -> int:
    """
    Input pixels per heatmap cell.

    ``floor((input_height - 1) / (heatmap_height - 1))`` rounded down to a
    multiple of ``multiple``.

    Raises:
        InvalidTensorShape: If the heatmap is a single row or the result is
            not positive
    """
    if heatmap_height <= 1 or input_height <= 1:
        raise InvalidTensorShape(
            f"Cannot derive a stride from input height {input_height} and heatmap height {heatmap_height}"
        )
    stride = (input_height - 1) // (heatmap_height - 1)
    stride -= stride % multiple
    if stride <= 0:
        raise InvalidTensorShape(
            f"Stride rounds down to {stride} for input height {input_height} "
            f"and heatmap height {heatmap_height}"
        )
    return stride


def resolve_permutation(permutation: Optional[Sequence[int]], num_joints: int) -> Tuple[int, ...]:
    """Validate a channel -> joint id table, defaulting to the identity."""
    if permutation is None:
        return tuple(range(num_joints))
    permutation = tuple(int(j) for j in permutation)
    if len(permutation) != num_joints or sorted(permutation) != list(range(num_joints)):
        raise ConfigurationMismatch(
            f"Joint permutation of length {len(permutation)} is not a permutation of {num_joints} joints"
        )
    return permutation


@dataclass(frozen=True)
class ModelProfile:
    """Static per-model decoding parameters.

    Attributes:
        model_type: Network architecture
        output_order: Engine output indices of heatmaps, offsets, forward
            and backward displacements
        joint_permutation: Heatmap channel -> canonical joint id, None for identity
        single_pose_only: Model has no usable displacement outputs
        stride_multiple: Stride is rounded down to a multiple of this
    """
    model_type: ModelType
    output_order: Tuple[int, int, int, int] = (0, 1, 2, 3)
    joint_permutation: Optional[Tuple[int, ...]] = None
    single_pose_only: bool = False
    stride_multiple: int = 8

    def compute_stride(self, input_height: int, heatmap_height: int) -> int:
        return compute_stride(input_height, heatmap_height, self.stride_multiple)


PROFILES: Dict[ModelType, ModelProfile] = {
    ModelType.MOBILENET: ModelProfile(
        model_type=ModelType.MOBILENET,
        output_order=(0, 1, 2, 3),
    ),
    ModelType.RESNET50: ModelProfile(
        model_type=ModelType.RESNET50,
        output_order=(0, 1, 3, 2),
    ),
    ModelType.OPENPOSE: ModelProfile(
        model_type=ModelType.OPENPOSE,
        output_order=(0, 1, 3, 2),
        joint_permutation=OPENPOSE_JOINT_PERMUTATION,
        single_pose_only=True,
    ),
}


def get_profile(model_type: Union[ModelType, str]) -> ModelProfile:
    """Look up the profile for a model type."""
    return PROFILES[ModelType(model_type)]
