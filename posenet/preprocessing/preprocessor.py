"""
Input preprocessing for PoseNet models

Provides:
- Aspect-preserving model input dimensions
- MobileNet and ResNet50 pixel normalization
- Image to input tensor conversion
- Sigmoid for raw heatmap logits
"""

from typing import Tuple

import cv2
import numpy as np

from ..core.constants import MIN_INPUT_DIM, MODEL_TYPES, RESNET_MEAN
from ..core.exceptions import ValidationError


def compute_input_dims(
    source_width: int,
    source_height: int,
    target_height: int
) -> Tuple[int, int]:
    """
    Model input dimensions that keep the source aspect ratio

    Args:
        source_width: Source image width
        source_height: Source image height
        target_height: Requested model input height

    Returns:
        (width, height), each at least 64 pixels

    Example:
        >>> compute_input_dims(1280, 720, 256)
        (455, 256)
    """
    if source_width <= 0 or source_height <= 0:
        raise ValidationError(
            f"Source dimensions must be positive, got {source_width}x{source_height}"
        )

    height = max(target_height, MIN_INPUT_DIM)
    width = int(height * (source_width / source_height))
    return max(width, MIN_INPUT_DIM), height


def preprocess_mobilenet(image: np.ndarray) -> np.ndarray:
    """Scale [0, 1] pixel values to [-1, 1]"""
    return 2.0 * image - 1.0


def preprocess_resnet(image: np.ndarray) -> np.ndarray:
    """Scale [0, 1] RGB pixel values to [0, 255] and subtract channel means"""
    return image * 255.0 - np.asarray(RESNET_MEAN, dtype=image.dtype)


def prepare_input(
    image: np.ndarray,
    input_dims: Tuple[int, int],
    model_type: str = "resnet50"
) -> np.ndarray:
    """
    Convert an RGB image into a model input tensor

    Args:
        image: RGB image (H, W, 3), uint8 or float in [0, 1]
        input_dims: (width, height) of the model input
        model_type: 'mobilenet' or 'resnet50'

    Returns:
        float32 array [1, height, width, 3]

    Example:
        >>> image = cv2.cvtColor(cv2.imread('frame.jpg'), cv2.COLOR_BGR2RGB)
        >>> tensor = prepare_input(image, (455, 256), 'mobilenet')
        >>> tensor.shape
        (1, 256, 455, 3)
    """
    if model_type not in MODEL_TYPES:
        raise ValidationError(f"model_type must be one of {MODEL_TYPES}")
    if image.ndim != 3 or image.shape[2] != 3:
        raise ValidationError(f"Expected RGB image (H, W, 3), got {image.shape}")

    resized = cv2.resize(image, tuple(input_dims), interpolation=cv2.INTER_LINEAR)

    if resized.dtype == np.uint8:
        pixels = resized.astype(np.float32) / 255.0
    else:
        pixels = resized.astype(np.float32)

    if model_type == "mobilenet":
        pixels = preprocess_mobilenet(pixels)
    else:
        pixels = preprocess_resnet(pixels)

    return pixels[np.newaxis, ...]


def apply_sigmoid(logits: np.ndarray) -> np.ndarray:
    """Convert raw heatmap logits into confidence scores"""
    return 1.0 / (1.0 + np.exp(-logits))
