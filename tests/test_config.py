"""Tests for decoder configuration."""

import pytest
import yaml
from pydantic import ValidationError

from posenet_decoder.common import (
    DecoderSettings,
    EstimationMode,
    ModelType,
    create_default_config_file,
)


class TestDecoderSettings:
    """Test suite for DecoderSettings."""

    def test_defaults(self):
        config = DecoderSettings.default()

        assert config.model.model_type == ModelType.MOBILENET
        assert config.model.input_height == 256
        assert config.decoding.mode == EstimationMode.SINGLE
        assert config.decoding.max_poses == 3
        assert config.decoding.score_threshold == 0.25
        assert config.decoding.nms_radius == 100.0
        assert config.decoding.min_keypoint_confidence == 0.15
        assert config.smoothing.enabled is False
        assert config.smoothing.q == 0.015
        assert config.smoothing.r == 0.015
        assert config.smoothing.distance_threshold == 50.0

    def test_yaml_round_trip(self, tmp_path):
        config = DecoderSettings(
            model={"model_type": "resnet50", "input_height": 513},
            decoding={"mode": "multi", "max_poses": 5, "nms_radius": 30.0},
            smoothing={"enabled": True},
        )
        path = tmp_path / "nested" / "decoder.yaml"

        config.to_yaml(path)
        loaded = DecoderSettings.from_yaml(path)

        assert loaded == config
        assert loaded.model.model_type == ModelType.RESNET50
        assert loaded.decoding.mode == EstimationMode.MULTI

    def test_yaml_uses_plain_values(self, tmp_path):
        path = tmp_path / "decoder.yaml"
        DecoderSettings.default().to_yaml(path)

        data = yaml.safe_load(path.read_text())

        assert data["model"]["model_type"] == "mobilenet"
        assert data["decoding"]["mode"] == "single"

    def test_partial_yaml(self, tmp_path):
        path = tmp_path / "decoder.yaml"
        path.write_text("decoding:\n  score_threshold: 0.5\n")

        config = DecoderSettings.from_yaml(path)

        assert config.decoding.score_threshold == 0.5
        assert config.decoding.max_poses == 3

    def test_empty_yaml(self, tmp_path):
        path = tmp_path / "decoder.yaml"
        path.write_text("")

        assert DecoderSettings.from_yaml(path) == DecoderSettings.default()

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            DecoderSettings.from_yaml(tmp_path / "missing.yaml")

    def test_max_poses_range(self):
        with pytest.raises(ValidationError):
            DecoderSettings(decoding={"max_poses": 16})
        with pytest.raises(ValidationError):
            DecoderSettings(decoding={"max_poses": 0})

    def test_noise_must_be_positive(self):
        with pytest.raises(ValidationError):
            DecoderSettings(smoothing={"q": 0.0})

    def test_multi_pose_rejected_for_single_pose_model(self):
        with pytest.raises(ValidationError):
            DecoderSettings(model={"model_type": "openpose"}, decoding={"mode": "multi"})

    def test_single_pose_openpose_is_valid(self):
        config = DecoderSettings(model={"model_type": "openpose"})

        assert config.model.model_type == ModelType.OPENPOSE

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("POSENET_DECODING__MAX_POSES", "7")
        monkeypatch.setenv("POSENET_SMOOTHING__ENABLED", "true")

        config = DecoderSettings()

        assert config.decoding.max_poses == 7
        assert config.smoothing.enabled is True


def test_create_default_config_file(tmp_path):
    path = create_default_config_file(tmp_path / "configs" / "default.yaml")

    assert path.exists()
    assert DecoderSettings.from_yaml(path) == DecoderSettings.default()
