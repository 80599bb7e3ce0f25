"""
Container and shape validation for raw PoseNet model outputs

The four arrays share one (height, width) grid:
- heatmaps          [1, H, W, num_parts]
- offsets           [1, H, W, 2 * num_parts]
- displacement_fwd  [1, H, W, 2 * num_edges]
- displacement_bwd  [1, H, W, 2 * num_edges]
"""

from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np

from ..core.constants import DISPLACEMENT_LAYER_ORDER, MODEL_TYPES
from ..core.exceptions import ValidationError


def _check_rank(name: str, array: np.ndarray) -> None:
    if array.ndim != 4:
        raise ValidationError(f"{name} must have shape [1, H, W, C], got {array.shape}")
    if array.shape[0] != 1:
        raise ValidationError(f"{name} batch size must be 1, got {array.shape[0]}")


def validate_pose_arrays(
    heatmaps: np.ndarray,
    offsets: np.ndarray,
    displacements_fwd: Optional[np.ndarray] = None,
    displacements_bwd: Optional[np.ndarray] = None,
    stride: Optional[int] = None
) -> None:
    """
    Check the shared-shape contract of the decoder inputs

    Displacement arrays are optional so single-pose inputs can be checked
    with the same routine.

    Raises:
        ValidationError: On any shape, channel count or stride mismatch
    """
    _check_rank("heatmaps", heatmaps)
    _check_rank("offsets", offsets)

    grid = heatmaps.shape[1:3]
    num_parts = heatmaps.shape[3]

    if num_parts < 1:
        raise ValidationError("heatmaps must have at least one part channel")
    if grid[0] < 1 or grid[1] < 1:
        raise ValidationError(f"heatmap grid must be non-empty, got {grid}")
    if offsets.shape[1:3] != grid:
        raise ValidationError(
            f"offsets grid {offsets.shape[1:3]} does not match heatmaps grid {grid}"
        )
    if offsets.shape[3] != 2 * num_parts:
        raise ValidationError(
            f"offsets must have {2 * num_parts} channels, got {offsets.shape[3]}"
        )

    for name, displacements in (("displacement_fwd", displacements_fwd),
                                ("displacement_bwd", displacements_bwd)):
        if displacements is None:
            continue
        _check_rank(name, displacements)
        if displacements.shape[1:3] != grid:
            raise ValidationError(
                f"{name} grid {displacements.shape[1:3]} does not match heatmaps grid {grid}"
            )
        if displacements.shape[3] != 2 * (num_parts - 1):
            raise ValidationError(
                f"{name} must have {2 * (num_parts - 1)} channels "
                f"(one edge less than {num_parts} parts), got {displacements.shape[3]}"
            )

    if stride is not None and stride <= 0:
        raise ValidationError(f"stride must be positive, got {stride}")


@dataclass(frozen=True)
class ModelOutputs:
    """
    The four output arrays of one inference call

    Example:
        >>> outputs = ModelOutputs(heatmaps, offsets, fwd, bwd)
        >>> outputs.height, outputs.width, outputs.num_parts
        (17, 17, 17)
    """
    heatmaps: np.ndarray
    offsets: np.ndarray
    displacement_fwd: np.ndarray
    displacement_bwd: np.ndarray

    def __post_init__(self):
        """Validate shapes"""
        for name in ("heatmaps", "offsets", "displacement_fwd", "displacement_bwd"):
            object.__setattr__(self, name, np.asarray(getattr(self, name)))
        validate_pose_arrays(
            self.heatmaps, self.offsets, self.displacement_fwd, self.displacement_bwd
        )

    @classmethod
    def from_layers(cls, layers: Sequence[np.ndarray], model_type: str) -> "ModelOutputs":
        """
        Build from raw output layers in model order

        The forward and backward displacement layers are swapped between
        MobileNet and ResNet50 exports.

        Args:
            layers: [heatmaps, offsets, displacement_a, displacement_b]
            model_type: 'mobilenet' or 'resnet50'
        """
        if model_type not in MODEL_TYPES:
            raise ValidationError(f"model_type must be one of {MODEL_TYPES}")
        if len(layers) != 4:
            raise ValidationError(f"Expected 4 output layers, got {len(layers)}")

        order = DISPLACEMENT_LAYER_ORDER[model_type]
        return cls(
            heatmaps=layers[0],
            offsets=layers[1],
            displacement_fwd=layers[order['fwd']],
            displacement_bwd=layers[order['bwd']],
        )

    @property
    def height(self) -> int:
        return int(self.heatmaps.shape[1])

    @property
    def width(self) -> int:
        return int(self.heatmaps.shape[2])

    @property
    def num_parts(self) -> int:
        return int(self.heatmaps.shape[3])

    @property
    def num_edges(self) -> int:
        return int(self.displacement_fwd.shape[3] // 2)
