"""
Custom exceptions for the PoseNet decoder

Provides specific exception types for:
- Input validation errors
- Pose assembly errors
- Configuration errors
- Data loading errors
"""

import logging

logger = logging.getLogger(__name__)


class PoseNetException(Exception):
    """
    Base exception class for all PoseNet decoder exceptions

    All custom exceptions should inherit from this class for easy
    exception catching and handling at the application level.
    """
    pass


class ValidationError(PoseNetException):
    """
    Raised when decoder inputs violate their contract

    Reasons:
    - Model output arrays are not rank 4 or batch size is not 1
    - Heatmap, offset and displacement grids do not share (height, width)
    - Offset or displacement channel counts do not match the part count
    - Stride is not positive
    - Part or edge id is out of range

    Example:
        >>> from posenet.core.exceptions import ValidationError
        >>> from posenet.decoding import ModelOutputs
        >>> try:
        ...     outputs = ModelOutputs(heatmaps, offsets, fwd, bwd)
        ... except ValidationError as e:
        ...     print(f"Invalid model outputs: {e}")
    """
    pass


class PoseAssemblyError(PoseNetException):
    """
    Raised when a pose slot that already holds a keypoint is written again

    Decoded keypoints are placed once and never revised.
    """
    pass


class ConfigError(PoseNetException):
    """
    Raised when configuration is invalid or missing

    Reasons:
    - Configuration value is out of valid range
    - Unknown model or estimation type
    - Invalid configuration file format

    Example:
        >>> from posenet.core.exceptions import ConfigError
        >>> from posenet.core.config import PoseNetConfig
        >>> try:
        ...     config = PoseNetConfig.from_yaml("broken.yaml")
        ... except ConfigError as e:
        ...     print(f"Configuration error: {e}")
    """
    pass


class DataLoadError(PoseNetException):
    """
    Raised when data files fail to load

    Applicable to:
    - NPZ files holding model outputs
    - Pose CSV files
    """
    pass


def handle_posenet_exception(e: PoseNetException, verbose: bool = True) -> str:
    """
    Handle PoseNet exceptions with formatted error message

    Args:
        e: The PoseNetException instance
        verbose: If True, log the error message

    Returns:
        Formatted error message string
    """
    error_type = type(e).__name__
    error_msg = str(e)
    formatted_msg = f"[{error_type}] {error_msg}"

    if verbose:
        logger.error(formatted_msg)

    return formatted_msg
