"""
Frame-by-frame pose tracking session.

Owns everything that persists between frames (the track state and the
frame counter) and dispatches each frame's tensors to the single-pose or
multi-pose decoder according to the configuration.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, List, Optional, Sequence

from ..common import (
    ConfigurationMismatch,
    DecoderSettings,
    EstimationMode,
    InvalidTensorShape,
    Keypoint,
    Pose,
    TrackState,
)
from ..decoding import (
    DEFAULT_POSE_GRAPH,
    ModelProfile,
    PoseGraph,
    as_tensor_view,
    decode_multiple_poses,
    decode_single_pose,
    get_profile,
)


@dataclass
class ModelOutputs:
    """The four output tensors of one inference call."""
    heatmaps: Any
    offsets: Any
    displacements_fwd: Any
    displacements_bwd: Any

    @classmethod
    def from_engine_outputs(cls, outputs: Sequence[Any], profile: ModelProfile) -> "ModelOutputs":
        """Pick the tensors out of an engine's output list using the model's output order."""
        if len(outputs) < 4:
            raise ConfigurationMismatch(f"Expected 4 model outputs, got {len(outputs)}")
        heatmaps, offsets, fwd, bwd = (outputs[i] for i in profile.output_order)
        return cls(heatmaps=heatmaps, offsets=offsets, displacements_fwd=fwd, displacements_bwd=bwd)


@dataclass
class FrameResult:
    """Decoded poses for a single frame."""
    frame_index: int
    poses: List[Pose] = field(default_factory=list)
    stride: int = 0
    dropped: bool = False

    @property
    def pose_count(self) -> int:
        return len(self.poses)


class PoseTracker:
    """
    Decodes a stream of model outputs into slot-stable poses.

    Example:
        >>> tracker = PoseTracker(DecoderSettings.from_yaml("config.yaml"))
        >>> for outputs in engine_outputs:
        ...     result = tracker.process(outputs)
        ...     for slot, pose in enumerate(result.poses):
        ...         print(slot, pose.score)
    """

    def __init__(
        self,
        config: Optional[DecoderSettings] = None,
        graph: PoseGraph = DEFAULT_POSE_GRAPH,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Initialize the tracker.

        Args:
            config: Decoder configuration (uses defaults if None)
            graph: Skeleton edges matching the displacement outputs
            logger: Logger instance (creates one if None)
        """
        self.config = config or DecoderSettings.default()
        self.logger = logger or logging.getLogger(__name__)
        self.graph = graph
        self.profile: ModelProfile = get_profile(self.config.model.model_type)

        # State
        self._track_state: Optional[TrackState] = None
        self._frame_index: int = 0

    @property
    def mode(self) -> EstimationMode:
        return self.config.decoding.mode

    @property
    def num_slots(self) -> int:
        return 1 if self.mode == EstimationMode.SINGLE else self.config.decoding.max_poses

    @property
    def track_state(self) -> Optional[TrackState]:
        return self._track_state

    @property
    def frame_index(self) -> int:
        return self._frame_index

    def reset(self) -> None:
        """Reset tracker state."""
        self._track_state = None
        self._frame_index = 0
        self.logger.info("Pose tracker state reset")

    def _expected_joints(self, heatmap_channels: int) -> int:
        if self.mode == EstimationMode.MULTI:
            return self.graph.num_joints
        if self.profile.joint_permutation is not None:
            return len(self.profile.joint_permutation)
        if self._track_state is not None:
            return self._track_state.num_joints
        return heatmap_channels

    def _ensure_track_state(self, heatmap_channels: int) -> TrackState:
        num_joints = self._expected_joints(heatmap_channels)
        if heatmap_channels != num_joints:
            raise ConfigurationMismatch(
                f"Heatmaps have {heatmap_channels} channels, configured for {num_joints} joints"
            )
        if self._track_state is None:
            self._track_state = TrackState(self.num_slots, num_joints)
            self.logger.debug(f"Created track state: {self.num_slots} slots x {num_joints} joints")
        return self._track_state

    def process_engine_outputs(self, outputs: Sequence[Any], input_height: Optional[int] = None) -> FrameResult:
        """Process a raw engine output list."""
        return self.process(ModelOutputs.from_engine_outputs(outputs, self.profile), input_height)

    def process(self, outputs: ModelOutputs, input_height: Optional[int] = None) -> FrameResult:
        """
        Decode one frame.

        Args:
            outputs: Model output tensors for the frame
            input_height: Height of the model input image (defaults to config)

        Returns:
            FrameResult; ``dropped`` is set when the tensors have an invalid shape

        Raises:
            ConfigurationMismatch: Tensor channels do not match the skeleton
        """
        frame_index = self._frame_index
        self._frame_index += 1

        decoding = self.config.decoding
        smoothing = self.config.smoothing
        input_height = input_height or self.config.model.input_height

        try:
            heatmaps = as_tensor_view(outputs.heatmaps)
            stride = self.profile.compute_stride(input_height, heatmaps.height)
            track_state = self._ensure_track_state(heatmaps.channels)

            if self.mode == EstimationMode.SINGLE:
                pose = decode_single_pose(
                    heatmaps,
                    outputs.offsets,
                    stride,
                    prior_pose=track_state[0],
                    smoothing_enabled=smoothing.enabled,
                    q=smoothing.q,
                    r=smoothing.r,
                    joint_permutation=self.profile.joint_permutation,
                )
                track_state[0] = pose.copy()
                poses = [pose]
            else:
                poses = decode_multiple_poses(
                    heatmaps,
                    outputs.offsets,
                    outputs.displacements_fwd,
                    outputs.displacements_bwd,
                    stride,
                    self.graph,
                    track_state,
                    max_poses=decoding.max_poses,
                    score_threshold=decoding.score_threshold,
                    nms_radius=decoding.nms_radius,
                    smoothing_enabled=smoothing.enabled,
                    distance_threshold=smoothing.distance_threshold,
                    q=smoothing.q,
                    r=smoothing.r,
                    local_radius=decoding.local_maximum_radius,
                )
        except InvalidTensorShape as e:
            self.logger.warning(f"Dropping frame {frame_index}: {e}")
            return FrameResult(frame_index=frame_index, dropped=True)

        self.logger.debug(f"Frame {frame_index}: {len(poses)} poses (stride={stride})")
        return FrameResult(frame_index=frame_index, poses=poses, stride=stride)

    def visible_keypoints(self, pose: Pose) -> List[Keypoint]:
        """Keypoints of ``pose`` above the configured display confidence."""
        return pose.visible_keypoints(self.config.decoding.min_keypoint_confidence)


def create_tracker(
    config: Optional[DecoderSettings] = None,
    log_level: Optional[int] = None,
) -> PoseTracker:
    """Create a tracker with logging configured.

    Args:
        config: Decoder configuration
        log_level: Logging level (defaults to the configured level)

    Returns:
        Configured PoseTracker instance
    """
    config = config or DecoderSettings.default()

    # Setup logging
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if config.logging.log_to_file:
        handlers.append(logging.FileHandler(config.logging.log_file))

    logging.basicConfig(
        level=log_level if log_level is not None else config.logging.level,
        format=config.logging.format,
        handlers=handlers,
    )

    tracker = PoseTracker(config)
    tracker.logger.info(
        f"PoseTracker initialized: model={config.model.model_type.value}, "
        f"mode={config.decoding.mode.value}, smoothing={config.smoothing.enabled}"
    )
    return tracker
