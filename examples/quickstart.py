#!/usr/bin/env python3
"""
Quick Start Example - PoseNet Decoder

Decodes a short stream of synthetic network outputs: two people walking
across the frame. Useful to check an installation and to see what the
tracker returns without a model.

Usage:
    python examples/quickstart.py [--mode multi] [--smooth] [--config decoder.yaml]
"""

import argparse
import sys
from pathlib import Path

import numpy as np

# Add parent to path for local development
sys.path.insert(0, str(Path(__file__).parent.parent))

from posenet_decoder import (
    DEFAULT_POSE_GRAPH,
    KEYPOINT_NAMES,
    DecoderSettings,
    create_tracker,
)

GRID = 17
INPUT_SIZE = 257


def synthetic_frame(people):
    """Model outputs with every joint of each person on one heatmap cell."""
    num_joints = DEFAULT_POSE_GRAPH.num_joints
    num_edges = DEFAULT_POSE_GRAPH.num_edges

    heatmaps = np.zeros((1, GRID, GRID, num_joints), dtype=np.float32)
    offsets = np.zeros((1, GRID, GRID, 2 * num_joints), dtype=np.float32)
    fwd = np.zeros((1, GRID, GRID, 2 * num_edges), dtype=np.float32)
    bwd = np.zeros((1, GRID, GRID, 2 * num_edges), dtype=np.float32)

    for x, y, score in people:
        heatmaps[0, y, x, :] = score * 0.8
        heatmaps[0, y, x, 0] = score
        # Sub-cell jitter so smoothing has something to do
        offsets[0, y, x, :] = np.random.uniform(-3.0, 3.0, size=2 * num_joints)

    return [heatmaps, offsets, fwd, bwd]


def main():
    parser = argparse.ArgumentParser(description="Decode synthetic PoseNet outputs")
    parser.add_argument("--mode", choices=["single", "multi"], default="multi")
    parser.add_argument("--smooth", action="store_true", help="Enable temporal smoothing")
    parser.add_argument("--frames", type=int, default=8)
    parser.add_argument("--config", help="YAML config (overrides the flags above)")
    args = parser.parse_args()

    if args.config:
        config = DecoderSettings.from_yaml(args.config)
    else:
        config = DecoderSettings(
            model={"input_height": INPUT_SIZE},
            decoding={"mode": args.mode},
            smoothing={"enabled": args.smooth},
        )

    tracker = create_tracker(config)

    print("=" * 60)
    print("PoseNet Decoder - Quick Start")
    print("=" * 60)
    print(f"Mode: {config.decoding.mode.value}  Smoothing: {config.smoothing.enabled}")
    print("-" * 60)

    for i in range(args.frames):
        people = [(2 + i % 4, 4, 0.9), (14 - i % 3, 12, 0.7)]
        result = tracker.process_engine_outputs(synthetic_frame(people))

        if result.dropped:
            print(f"Frame {result.frame_index}: dropped")
            continue

        print(f"Frame {result.frame_index}: {result.pose_count} pose(s), stride {result.stride}")
        for slot, pose in enumerate(result.poses):
            nose = pose[0]
            visible = len(tracker.visible_keypoints(pose))
            print(
                f"  slot {slot}: score={pose.score:.2f} "
                f"{KEYPOINT_NAMES[0]}=({nose.x:6.1f}, {nose.y:6.1f}) visible={visible}"
            )

    print("-" * 60)
    print("Done")


if __name__ == "__main__":
    main()
