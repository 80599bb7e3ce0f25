"""
Core module - Configuration, constants, and exceptions for the PoseNet decoder
"""

from .config import (
    PoseNetConfig,
    DecoderConfig,
    ModelConfig,
    LoggingConfig,
)
from .constants import (
    PART_NAMES,
    NUM_KEYPOINTS,
    PARENT_CHILD_TUPLES,
    NUM_EDGES,
    SKELETON_JOINT_PAIRS,
    LOCAL_MAXIMUM_RADIUS,
)
from .exceptions import (
    PoseNetException,
    ValidationError,
    PoseAssemblyError,
    ConfigError,
    DataLoadError,
)

__all__ = [
    "PoseNetConfig",
    "DecoderConfig",
    "ModelConfig",
    "LoggingConfig",
    "PART_NAMES",
    "NUM_KEYPOINTS",
    "PARENT_CHILD_TUPLES",
    "NUM_EDGES",
    "SKELETON_JOINT_PAIRS",
    "LOCAL_MAXIMUM_RADIUS",
    "PoseNetException",
    "ValidationError",
    "PoseAssemblyError",
    "ConfigError",
    "DataLoadError",
]
