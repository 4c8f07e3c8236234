"""
Configuration system for the PoseNet decoder.

Uses Pydantic Settings for configuration management with support for:
- YAML configuration files
- Environment variables
- Default values
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .data_types import EstimationMode, ModelType


class ModelConfig(BaseModel):
    """Network the output tensors come from."""
    model_config = ConfigDict(protected_namespaces=())

    model_type: ModelType = ModelType.MOBILENET
    input_height: int = Field(default=256, ge=64)  # Model input size, used for the stride


class DecodingConfig(BaseModel):
    """Keypoint decoding configuration."""
    mode: EstimationMode = EstimationMode.SINGLE
    max_poses: int = Field(default=3, ge=1, le=15)  # Multi-pose only
    score_threshold: float = Field(default=0.25, ge=0.0, le=1.0)
    nms_radius: float = Field(default=100.0, gt=0.0)  # Image pixels
    local_maximum_radius: int = Field(default=1, ge=1, le=8)  # Heatmap cells
    min_keypoint_confidence: float = Field(default=0.15, ge=0.0, le=1.0)  # Display filter


class SmoothingConfig(BaseModel):
    """Temporal smoothing configuration."""
    enabled: bool = False
    q: float = Field(default=0.015, gt=0.0, le=1.0)  # Process noise (temporal regularization)
    r: float = Field(default=0.015, gt=0.0, le=1.0)  # Measurement noise
    distance_threshold: float = Field(default=50.0, ge=0.0, le=300.0)  # Multi-pose max jump, pixels


class LoggingConfig(BaseModel):
    """Logging configuration."""
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    log_to_file: bool = False
    log_file: str = "posenet_decoder.log"


class DecoderSettings(BaseSettings):
    """Main decoder configuration.

    Can be loaded from:
    - YAML file
    - Environment variables (prefix: POSENET_)
    - Default values
    """
    model_config = SettingsConfigDict(env_prefix="POSENET_", env_nested_delimiter="__")

    model: ModelConfig = Field(default_factory=ModelConfig)
    decoding: DecodingConfig = Field(default_factory=DecodingConfig)
    smoothing: SmoothingConfig = Field(default_factory=SmoothingConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @model_validator(mode="after")
    def check_mode_supported(self) -> "DecoderSettings":
        from ..decoding.profiles import get_profile

        profile = get_profile(self.model.model_type)
        if self.decoding.mode == EstimationMode.MULTI and profile.single_pose_only:
            raise ValueError(
                f"Model '{self.model.model_type.value}' supports single-pose decoding only"
            )
        return self

    @classmethod
    def from_yaml(cls, path: str | Path) -> "DecoderSettings":
        """Load configuration from YAML file.

        Args:
            path: Path to YAML configuration file

        Returns:
            DecoderSettings instance
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f)

        return cls(**data) if data else cls()

    def to_yaml(self, path: str | Path) -> None:
        """Save configuration to YAML file.

        Args:
            path: Output path for YAML file
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w") as f:
            yaml.dump(self.model_dump(mode="json"), f, default_flow_style=False, sort_keys=False)

    @classmethod
    def default(cls) -> "DecoderSettings":
        """Create configuration with all default values."""
        return cls()


def create_default_config_file(path: str | Path = "configs/default.yaml") -> Path:
    """Create a default configuration YAML file.

    Args:
        path: Output path for the config file

    Returns:
        Path to created config file
    """
    path = Path(path)
    config = DecoderSettings.default()
    config.to_yaml(path)
    return path
