"""
Configuration management for the PoseNet decoder

Central configuration system supporting:
- Dataclass-based configs
- YAML file loading
- Environment variable overrides
- Runtime modification
"""

import os
import yaml
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Optional, Dict, Any

from .constants import (
    DEFAULT_INPUT_DIMS,
    DEFAULT_MAX_POSES,
    DEFAULT_MIN_CONFIDENCE,
    DEFAULT_NMS_RADIUS,
    DEFAULT_SCORE_THRESHOLD,
    ESTIMATION_TYPES,
    MAX_POSE_DETECTIONS_LIMIT,
    MIN_INPUT_DIM,
    MODEL_TYPES,
)
from .exceptions import ConfigError


@dataclass
class DecoderConfig:
    """Configuration for keypoint decoding"""
    estimation_type: str = "multi"  # single, multi
    max_poses: int = DEFAULT_MAX_POSES
    score_threshold: float = DEFAULT_SCORE_THRESHOLD
    nms_radius: int = DEFAULT_NMS_RADIUS
    min_confidence: float = DEFAULT_MIN_CONFIDENCE

    def __post_init__(self):
        """Validate configuration"""
        if self.estimation_type not in ESTIMATION_TYPES:
            raise ConfigError(f"estimation_type must be one of {ESTIMATION_TYPES}")
        if self.max_poses < 0 or self.max_poses > MAX_POSE_DETECTIONS_LIMIT:
            raise ConfigError(
                f"max_poses must be between 0 and {MAX_POSE_DETECTIONS_LIMIT}"
            )
        if self.score_threshold < 0 or self.score_threshold > 1:
            raise ConfigError("score_threshold must be between 0 and 1")
        if self.nms_radius < 0:
            raise ConfigError("nms_radius must be >= 0")
        if self.min_confidence < 0 or self.min_confidence > 1:
            raise ConfigError("min_confidence must be between 0 and 1")


@dataclass
class ModelConfig:
    """Configuration for the network whose outputs are decoded"""
    model_type: str = "resnet50"  # mobilenet, resnet50
    input_width: int = DEFAULT_INPUT_DIMS[0]
    input_height: int = DEFAULT_INPUT_DIMS[1]

    def __post_init__(self):
        """Validate configuration"""
        if self.model_type not in MODEL_TYPES:
            raise ConfigError(f"model_type must be one of {MODEL_TYPES}")
        if self.input_width < MIN_INPUT_DIM or self.input_height < MIN_INPUT_DIM:
            raise ConfigError(f"input dimensions must be >= {MIN_INPUT_DIM}")


@dataclass
class LoggingConfig:
    """Configuration for package logging"""
    level: str = "info"
    log_file: Optional[str] = None


@dataclass
class PoseNetConfig:
    """Master configuration class combining all subconfigs"""
    decoder: DecoderConfig = field(default_factory=DecoderConfig)
    model: ModelConfig = field(default_factory=ModelConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_yaml(cls, yaml_path: str) -> "PoseNetConfig":
        """
        Load configuration from YAML file

        Args:
            yaml_path: Path to YAML configuration file

        Returns:
            PoseNetConfig instance

        Raises:
            FileNotFoundError: If YAML file not found
            ConfigError: If YAML format is invalid
        """
        yaml_path = Path(yaml_path)
        if not yaml_path.exists():
            raise FileNotFoundError(f"Config file not found: {yaml_path}")

        try:
            with open(yaml_path, 'r') as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML format in {yaml_path}: {e}")

        try:
            return cls(
                decoder=DecoderConfig(**data.get('decoder', {})),
                model=ModelConfig(**data.get('model', {})),
                logging=LoggingConfig(**data.get('logging', {}))
            )
        except TypeError as e:
            raise ConfigError(f"Unknown configuration key in {yaml_path}: {e}")

    @classmethod
    def from_env(cls, base_config: Optional["PoseNetConfig"] = None) -> "PoseNetConfig":
        """
        Create config from environment variables

        Supports environment variables like:
        - POSENET_ESTIMATION_TYPE
        - POSENET_SCORE_THRESHOLD
        - POSENET_MODEL_TYPE

        Args:
            base_config: Base configuration to override (default: new config)

        Returns:
            PoseNetConfig instance with environment overrides
        """
        if base_config is None:
            config = cls()
        else:
            config = base_config

        # Override decoder config
        if 'POSENET_ESTIMATION_TYPE' in os.environ:
            config.decoder.estimation_type = os.environ['POSENET_ESTIMATION_TYPE']
        if 'POSENET_MAX_POSES' in os.environ:
            config.decoder.max_poses = int(os.environ['POSENET_MAX_POSES'])
        if 'POSENET_SCORE_THRESHOLD' in os.environ:
            config.decoder.score_threshold = float(
                os.environ['POSENET_SCORE_THRESHOLD']
            )
        if 'POSENET_NMS_RADIUS' in os.environ:
            config.decoder.nms_radius = int(os.environ['POSENET_NMS_RADIUS'])

        # Override model config
        if 'POSENET_MODEL_TYPE' in os.environ:
            config.model.model_type = os.environ['POSENET_MODEL_TYPE']

        # Override logging config
        if 'POSENET_LOG_LEVEL' in os.environ:
            config.logging.level = os.environ['POSENET_LOG_LEVEL']

        # Re-run validation on the overridden values
        config.decoder.__post_init__()
        config.model.__post_init__()

        return config

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary"""
        return asdict(self)

    def to_yaml(self, yaml_path: str) -> None:
        """
        Save configuration to YAML file

        Args:
            yaml_path: Path to save YAML configuration
        """
        yaml_path = Path(yaml_path)
        yaml_path.parent.mkdir(parents=True, exist_ok=True)

        with open(yaml_path, 'w') as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)

    def __str__(self) -> str:
        """String representation of config"""
        return yaml.dump(self.to_dict(), default_flow_style=False, sort_keys=False)
