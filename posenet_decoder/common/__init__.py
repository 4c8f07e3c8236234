"""Common configuration, data types and errors for the PoseNet decoder."""

from .config import (
    DecoderSettings,
    ModelConfig,
    DecodingConfig,
    SmoothingConfig,
    LoggingConfig,
    create_default_config_file,
)
from .data_types import (
    # Enums
    EstimationMode,
    ModelType,
    # Pose types
    Vector2,
    Keypoint,
    Pose,
    TrackState,
)
from .errors import (
    PoseDecodingError,
    ConfigurationMismatch,
    InvalidTensorShape,
)

__all__ = [
    # Config
    "DecoderSettings",
    "ModelConfig",
    "DecodingConfig",
    "SmoothingConfig",
    "LoggingConfig",
    "create_default_config_file",
    # Enums
    "EstimationMode",
    "ModelType",
    # Pose types
    "Vector2",
    "Keypoint",
    "Pose",
    "TrackState",
    # Errors
    "PoseDecodingError",
    "ConfigurationMismatch",
    "InvalidTensorShape",
]
