"""
PoseNet Decoder - Keypoint decoding for PoseNet-style pose estimation models

A Python package for:
- Single-pose decoding from heatmaps and offsets
- Multi-pose decoding with displacement-field part assembly
- Model input preprocessing
- Loading model outputs and writing decoded poses
"""

__version__ = "0.1.0"
__author__ = "PoseNet Decoder Team"

# Core imports
from .core.config import PoseNetConfig, DecoderConfig, ModelConfig, LoggingConfig
from .core.constants import (
    PART_NAMES,
    NUM_KEYPOINTS,
    PARENT_CHILD_TUPLES,
    NUM_EDGES,
    SKELETON_JOINT_PAIRS,
)
from .core.exceptions import (
    PoseNetException,
    ValidationError,
    PoseAssemblyError,
    ConfigError,
    DataLoadError,
)
from .decoding import (
    Keypoint,
    Pose,
    ModelOutputs,
    decode_single_pose,
    decode_multiple_poses,
    PoseDecoder,
)

# Lazy imports for modules with heavier dependencies
def __getattr__(name):
    """Lazy loading for modules with external dependencies"""
    if name == "OutputsLoader":
        from .io.data_loader import OutputsLoader
        return OutputsLoader
    elif name in ("CSVWriter", "CSVReader", "PoseRow"):
        from .io import csv_handler
        return getattr(csv_handler, name)
    elif name in ("compute_input_dims", "prepare_input", "apply_sigmoid"):
        from .preprocessing import preprocessor
        return getattr(preprocessor, name)
    elif name == "setup_logger":
        from .utils.logger import setup_logger
        return setup_logger
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

__all__ = [
    # Version
    "__version__",
    # Config
    "PoseNetConfig",
    "DecoderConfig",
    "ModelConfig",
    "LoggingConfig",
    # Constants
    "PART_NAMES",
    "NUM_KEYPOINTS",
    "PARENT_CHILD_TUPLES",
    "NUM_EDGES",
    "SKELETON_JOINT_PAIRS",
    # Exceptions
    "PoseNetException",
    "ValidationError",
    "PoseAssemblyError",
    "ConfigError",
    "DataLoadError",
    # Decoding
    "Keypoint",
    "Pose",
    "ModelOutputs",
    "decode_single_pose",
    "decode_multiple_poses",
    "PoseDecoder",
    # IO
    "OutputsLoader",
    "CSVWriter",
    "CSVReader",
    "PoseRow",
    # Preprocessing
    "compute_input_dims",
    "prepare_input",
    "apply_sigmoid",
    # Logging
    "setup_logger",
]
