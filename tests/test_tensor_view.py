"""Tests for tensor adaptation and shape validation."""

import numpy as np
import pytest

from posenet_decoder.common import ConfigurationMismatch, InvalidTensorShape
from posenet_decoder.decoding import ArrayTensorView, TensorView, as_tensor_view
from posenet_decoder.decoding.tensor_view import (
    validate_displacements,
    validate_num_joints,
    validate_offsets,
    validate_stride,
)


class DictTensor:
    """Engine-side tensor exposing only the protocol methods."""

    def __init__(self, values, shape):
        self.values = values
        self._shape = shape

    def shape(self):
        return self._shape

    def get(self, y, x, channel):
        return self.values.get((y, x, channel), 0.0)


class TestArrayTensorView:
    """Test suite for ArrayTensorView."""

    def test_batch_dimension_is_dropped(self):
        view = ArrayTensorView(np.zeros((1, 5, 4, 3)))

        assert view.shape() == (5, 4, 3)
        assert (view.height, view.width, view.channels) == (5, 4, 3)

    def test_three_dimensional_input(self):
        view = ArrayTensorView(np.ones((2, 3, 4)))

        assert view.shape() == (2, 3, 4)
        assert view.get(1, 2, 3) == 1.0

    def test_wrong_rank_raises(self):
        with pytest.raises(InvalidTensorShape):
            ArrayTensorView(np.zeros((5, 5)))

    def test_zero_dimension_raises(self):
        with pytest.raises(InvalidTensorShape):
            ArrayTensorView(np.zeros((1, 0, 5, 3)))

    def test_scores_clear_nan_and_negatives(self):
        data = np.array([[[np.nan, -1.0, 0.5]]], dtype=np.float32)
        view = ArrayTensorView(data)

        assert view.scores().tolist() == [[[0.0, 0.0, 0.5]]]
        assert np.isnan(view.array[0, 0, 0])

    def test_satisfies_protocol(self):
        assert isinstance(ArrayTensorView(np.zeros((1, 1, 1))), TensorView)


class TestAsTensorView:
    """Test suite for as_tensor_view."""

    def test_passes_existing_view_through(self):
        view = ArrayTensorView(np.zeros((1, 2, 2, 1)))

        assert as_tensor_view(view) is view

    def test_materializes_protocol_object(self):
        tensor = DictTensor({(1, 0, 1): 0.75}, (2, 2, 2))

        view = as_tensor_view(tensor)

        assert view.shape() == (2, 2, 2)
        assert view.get(1, 0, 1) == 0.75
        assert view.get(0, 0, 0) == 0.0

    def test_protocol_object_with_empty_shape_raises(self):
        with pytest.raises(InvalidTensorShape):
            as_tensor_view(DictTensor({}, (0, 2, 2)))

    def test_nested_lists_are_accepted(self):
        view = as_tensor_view([[[0.1, 0.2]]])

        assert view.shape() == (1, 1, 2)


class TestValidation:
    """Test suite for tensor validation helpers."""

    def test_non_positive_stride(self):
        with pytest.raises(InvalidTensorShape):
            validate_stride(0)

    def test_offsets_grid_mismatch_is_shape_error(self):
        heatmaps = ArrayTensorView(np.zeros((4, 4, 2)))
        offsets = ArrayTensorView(np.zeros((4, 5, 4)))

        with pytest.raises(InvalidTensorShape):
            validate_offsets(heatmaps, offsets)

    def test_offsets_channel_mismatch_is_configuration_error(self):
        heatmaps = ArrayTensorView(np.zeros((4, 4, 2)))
        offsets = ArrayTensorView(np.zeros((4, 4, 3)))

        with pytest.raises(ConfigurationMismatch):
            validate_offsets(heatmaps, offsets)

    def test_displacement_channels(self):
        heatmaps = ArrayTensorView(np.zeros((4, 4, 2)))

        validate_displacements(heatmaps, ArrayTensorView(np.zeros((4, 4, 2))), num_edges=1)
        with pytest.raises(ConfigurationMismatch):
            validate_displacements(heatmaps, ArrayTensorView(np.zeros((4, 4, 4))), num_edges=1)

    def test_joint_count(self):
        with pytest.raises(ConfigurationMismatch):
            validate_num_joints(ArrayTensorView(np.zeros((4, 4, 16))), 17)

    def test_errors_are_value_errors(self):
        assert issubclass(InvalidTensorShape, ValueError)
        assert issubclass(ConfigurationMismatch, ValueError)
