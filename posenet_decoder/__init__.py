"""
PoseNet output decoder

Turns the raw outputs of a PoseNet-style network into temporally stable
2D keypoints for one or many people in a video stream:
- Candidate extraction and non-maximum suppression
- Skeleton graph traversal along displacement fields
- Single-pose and multi-pose decoding
- Per-joint temporal smoothing

Example:
    >>> from posenet_decoder import DecoderSettings, create_tracker
    >>>
    >>> tracker = create_tracker(DecoderSettings.from_yaml("config.yaml"))
    >>>
    >>> for outputs in engine_outputs:
    ...     result = tracker.process_engine_outputs(outputs)
    ...     for pose in result.poses:
    ...         print(pose.score)
"""

__version__ = "0.1.0"

from .common import (
    # Config
    DecoderSettings,
    create_default_config_file,
    # Data types
    Keypoint,
    Pose,
    TrackState,
    # Enums
    EstimationMode,
    ModelType,
    # Errors
    PoseDecodingError,
    ConfigurationMismatch,
    InvalidTensorShape,
)

from .decoding import (
    ArrayTensorView,
    TensorView,
    PoseGraph,
    DEFAULT_POSE_GRAPH,
    KEYPOINT_NAMES,
    ModelProfile,
    compute_stride,
    get_profile,
    extract_candidates,
    map_to_image,
    decode_pose,
    decode_single_pose,
    decode_multiple_poses,
)

from .smoothing import smooth_keypoint

from .tracking import FrameResult, ModelOutputs, PoseTracker, create_tracker

__all__ = [
    # Version
    "__version__",
    # Config
    "DecoderSettings",
    "create_default_config_file",
    # Data types
    "Keypoint",
    "Pose",
    "TrackState",
    # Enums
    "EstimationMode",
    "ModelType",
    # Errors
    "PoseDecodingError",
    "ConfigurationMismatch",
    "InvalidTensorShape",
    # Decoding
    "ArrayTensorView",
    "TensorView",
    "PoseGraph",
    "DEFAULT_POSE_GRAPH",
    "KEYPOINT_NAMES",
    "ModelProfile",
    "compute_stride",
    "get_profile",
    "extract_candidates",
    "map_to_image",
    "decode_pose",
    "decode_single_pose",
    "decode_multiple_poses",
    # Smoothing
    "smooth_keypoint",
    # Tracking
    "FrameResult",
    "ModelOutputs",
    "PoseTracker",
    "create_tracker",
]
