"""
Temporal smoothing of keypoint positions.

Each joint is filtered independently on each axis with a scalar
recursive (Kalman-like) filter. The stored prior is always the position
that was actually output, so the correction compounds across frames and
behaves as a low-pass filter.
"""

from __future__ import annotations

from ..common.data_types import Keypoint


def kalman_gain(prior_covariance: float, q: float, r: float) -> float:
    """Gain applied to the innovation: (P + Q) / (P + Q + R)."""
    return (prior_covariance + q) / (prior_covariance + q + r)


def update_error_covariance(prior_covariance: float, q: float, r: float) -> float:
    """Error covariance after the update: R (P + Q) / (Q + P + R)."""
    return r * (prior_covariance + q) / (q + prior_covariance + r)


def smooth_keypoint(raw: Keypoint, prior: Keypoint, q: float, r: float, apply: bool = True) -> Keypoint:
    """
    Filter one keypoint against its previous-frame state.

    Args:
        raw: Current measurement in image coordinates
        prior: Previous-frame keypoint for the same joint and slot
        q: Process noise
        r: Measurement noise
        apply: If False the raw position is output unchanged, but the gain
            and covariance are still advanced

    Returns:
        Copy of ``raw`` at the effective position, carrying the updated
        filter state
    """
    prior_x, prior_y = prior.error_covariance
    gain = (kalman_gain(prior_x, q, r), kalman_gain(prior_y, q, r))
    covariance = (
        update_error_covariance(prior_x, q, r),
        update_error_covariance(prior_y, q, r),
    )
    estimate = prior.position

    if apply:
        x = estimate[0] + (raw.x - estimate[0]) * gain[0]
        y = estimate[1] + (raw.y - estimate[1]) * gain[1]
    else:
        x, y = raw.x, raw.y

    return raw.moved_to(x, y, prior_estimate=estimate, error_covariance=covariance, gain=gain)
