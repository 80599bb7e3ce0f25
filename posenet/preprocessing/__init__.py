"""
Preprocessing module - Model input preparation

Provides:
- Aspect-preserving input sizing
- MobileNet / ResNet50 normalization
- Heatmap sigmoid
"""

from .preprocessor import (
    compute_input_dims,
    preprocess_mobilenet,
    preprocess_resnet,
    prepare_input,
    apply_sigmoid,
)

__all__ = [
    "compute_input_dims",
    "preprocess_mobilenet",
    "preprocess_resnet",
    "prepare_input",
    "apply_sigmoid",
]
