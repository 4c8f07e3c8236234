"""
Tracking module for frame-by-frame pose decoding.

This module provides:
- PoseTracker: Owns the track state and decodes each frame
- ModelOutputs: The four output tensors of one inference call
- FrameResult: Decoded poses for a frame

Example:
    from posenet_decoder.tracking import create_tracker

    tracker = create_tracker()
    result = tracker.process_engine_outputs(engine_outputs)
    for slot, pose in enumerate(result.poses):
        print(slot, pose.score)
"""

from .tracker import FrameResult, ModelOutputs, PoseTracker, create_tracker

__all__ = [
    "FrameResult",
    "ModelOutputs",
    "PoseTracker",
    "create_tracker",
]
