"""
Read-only access to network output tensors.

Any inference runtime can feed the decoder by supplying either a numpy
array shaped ``[1, H, W, C]`` (or ``[H, W, C]``) or an object implementing
the minimal :class:`TensorView` protocol. Everything is normalized to an
:class:`ArrayTensorView` so the scans can be vectorized.
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Protocol, Tuple, runtime_checkable

import numpy as np

from ..common.errors import ConfigurationMismatch, InvalidTensorShape

logger = logging.getLogger(__name__)


@runtime_checkable
class TensorView(Protocol):
    """Minimal capability an inference engine must expose per output tensor."""

    def shape(self) -> Tuple[int, int, int]:
        """Return (height, width, channels)."""
        ...

    def get(self, y: int, x: int, channel: int) -> float:
        """Value at batch 0, row ``y``, column ``x``, ``channel``."""
        ...


class ArrayTensorView:
    """TensorView backed by a float32 ``(H, W, C)`` numpy array."""

    __slots__ = ("array", "_scores")

    def __init__(self, data: Any):
        array = np.asarray(data, dtype=np.float32)
        if array.ndim == 4:
            if array.shape[0] <= 0:
                raise InvalidTensorShape(f"Empty batch dimension in tensor of shape {array.shape}")
            array = array[0]
        elif array.ndim != 3:
            raise InvalidTensorShape(
                f"Expected a [1, H, W, C] or [H, W, C] tensor, got {array.ndim} dimensions"
            )
        if any(dim <= 0 for dim in array.shape):
            raise InvalidTensorShape(f"Tensor has a non-positive dimension: {array.shape}")

        self.array = array
        self._scores: Optional[np.ndarray] = None

    @classmethod
    def from_view(cls, view: TensorView) -> "ArrayTensorView":
        """Materialize a protocol-only view into an array."""
        height, width, channels = view.shape()
        if height <= 0 or width <= 0 or channels <= 0:
            raise InvalidTensorShape(f"Tensor has a non-positive dimension: {(height, width, channels)}")

        array = np.empty((height, width, channels), dtype=np.float32)
        for y in range(height):
            for x in range(width):
                for c in range(channels):
                    array[y, x, c] = view.get(y, x, c)
        return cls(array)

    def shape(self) -> Tuple[int, int, int]:
        height, width, channels = self.array.shape
        return (int(height), int(width), int(channels))

    def get(self, y: int, x: int, channel: int) -> float:
        return float(self.array[y, x, channel])

    @property
    def height(self) -> int:
        return int(self.array.shape[0])

    @property
    def width(self) -> int:
        return int(self.array.shape[1])

    @property
    def channels(self) -> int:
        return int(self.array.shape[2])

    def scores(self) -> np.ndarray:
        """Confidence values with NaN and negatives replaced by 0."""
        if self._scores is None:
            scores = self.array.copy()
            scores[np.isnan(scores) | (scores < 0.0)] = 0.0
            self._scores = scores
        return self._scores

    def score(self, y: int, x: int, channel: int) -> float:
        return float(self.scores()[y, x, channel])

    def __repr__(self) -> str:
        return f"ArrayTensorView(shape={self.shape()})"


def as_tensor_view(tensor: Any) -> ArrayTensorView:
    """Adapt an array or TensorView into an :class:`ArrayTensorView`."""
    if isinstance(tensor, ArrayTensorView):
        return tensor
    if isinstance(tensor, np.ndarray):
        return ArrayTensorView(tensor)
    if callable(getattr(tensor, "shape", None)) and callable(getattr(tensor, "get", None)):
        return ArrayTensorView.from_view(tensor)
    return ArrayTensorView(tensor)


def validate_stride(stride: int) -> None:
    if stride <= 0:
        raise InvalidTensorShape(f"Stride must be positive, got {stride}")


def validate_offsets(heatmaps: ArrayTensorView, offsets: ArrayTensorView) -> None:
    """Offsets must cover the heatmap grid with an (y, x) channel pair per joint."""
    if offsets.shape()[:2] != heatmaps.shape()[:2]:
        raise InvalidTensorShape(
            f"Offsets grid {offsets.shape()[:2]} does not match heatmap grid {heatmaps.shape()[:2]}"
        )
    if offsets.channels != 2 * heatmaps.channels:
        raise ConfigurationMismatch(
            f"Offsets have {offsets.channels} channels, expected {2 * heatmaps.channels} "
            f"for {heatmaps.channels} joints"
        )


def validate_displacements(
    heatmaps: ArrayTensorView,
    displacements: ArrayTensorView,
    num_edges: int,
    name: str = "displacements",
) -> None:
    if displacements.shape()[:2] != heatmaps.shape()[:2]:
        raise InvalidTensorShape(
            f"{name} grid {displacements.shape()[:2]} does not match heatmap grid {heatmaps.shape()[:2]}"
        )
    if displacements.channels != 2 * num_edges:
        raise ConfigurationMismatch(
            f"{name} have {displacements.channels} channels, expected {2 * num_edges} "
            f"for {num_edges} edges"
        )


def validate_num_joints(heatmaps: ArrayTensorView, num_joints: int) -> None:
    if heatmaps.channels != num_joints:
        raise ConfigurationMismatch(
            f"Heatmaps have {heatmaps.channels} channels, configured for {num_joints} joints"
        )
