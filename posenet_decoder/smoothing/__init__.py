"""Per-joint temporal smoothing."""

from .kalman import kalman_gain, smooth_keypoint, update_error_covariance

__all__ = [
    "kalman_gain",
    "smooth_keypoint",
    "update_error_covariance",
]
