"""
Coordinate mapping between heatmap grid space and input image space

Offset and displacement fields store the Y component in the first half of
their channels and the X component in the second half.
"""

from typing import Tuple

import numpy as np

from ..core.constants import STRIDE_MULTIPLE
from ..core.exceptions import ValidationError
from .keypoint import Keypoint


def compute_stride(image_dim: int, heatmap_dim: int) -> int:
    """
    Scale factor between heatmap grid and input image pixels

    Args:
        image_dim: Input image height in pixels
        heatmap_dim: Heatmap height in cells

    Returns:
        Stride rounded down to a multiple of 8

    Raises:
        ValidationError: If the dimensions do not give a positive stride

    Example:
        >>> compute_stride(257, 17)
        16
    """
    if heatmap_dim < 2:
        raise ValidationError(f"Heatmap dimension must be >= 2, got {heatmap_dim}")

    stride = (image_dim - 1) // (heatmap_dim - 1)
    stride -= stride % STRIDE_MULTIPLE

    if stride <= 0:
        raise ValidationError(
            f"Image dimension {image_dim} is too small for heatmap dimension {heatmap_dim}"
        )
    return stride


def get_offset_vector(y: int, x: int, part_id: int, offsets: np.ndarray) -> Tuple[float, float]:
    """
    Offset (x, y) stored at a heatmap cell for a body part

    Args:
        y: Heatmap row index
        x: Heatmap column index
        part_id: Body part channel
        offsets: Offsets output array [1, H, W, 2 * num_parts]
    """
    num_parts = offsets.shape[-1] // 2
    return (
        float(offsets[0, y, x, part_id + num_parts]),
        float(offsets[0, y, x, part_id]),
    )


def get_image_coords(part: Keypoint, stride: int, offsets: np.ndarray) -> Tuple[float, float]:
    """
    Position of a grid-space keypoint in the input image

    Scales the grid coordinates by the stride and adds the offset vector
    to refine the location.

    Example:
        >>> part = Keypoint(0.9, (3.0, 5.0), 0)
        >>> get_image_coords(part, 16, offsets)  # (3 * 16 + dx, 5 * 16 + dy)
    """
    grid_x = int(part.position[0])
    grid_y = int(part.position[1])
    offset_x, offset_y = get_offset_vector(grid_y, grid_x, part.part_id, offsets)
    return (
        part.position[0] * stride + offset_x,
        part.position[1] * stride + offset_y,
    )


def get_strided_index_near_point(
    point: Tuple[float, float],
    stride: int,
    height: int,
    width: int
) -> Tuple[int, int]:
    """
    Heatmap cell (x, y) nearest to an image-space point

    Each axis is rounded half to even and clamped to the grid.
    """
    x = int(min(max(round(point[0] / stride), 0), width - 1))
    y = int(min(max(round(point[1] / stride), 0), height - 1))
    return x, y


def get_displacement(edge_id: int, point: Tuple[int, int], displacements: np.ndarray) -> Tuple[float, float]:
    """
    Displacement (x, y) stored at heatmap cell `point` for a tree edge

    Args:
        edge_id: Index into the parent/child edge list
        point: Heatmap cell as (x, y)
        displacements: Displacement array [1, H, W, 2 * num_edges]
    """
    num_edges = displacements.shape[-1] // 2
    x, y = point
    return (
        float(displacements[0, y, x, num_edges + edge_id]),
        float(displacements[0, y, x, edge_id]),
    )


def squared_distance(a: Tuple[float, float], b: Tuple[float, float]) -> float:
    dx = a[0] - b[0]
    dy = a[1] - b[1]
    return dx * dx + dy * dy
