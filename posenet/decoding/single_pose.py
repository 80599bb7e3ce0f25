"""
Single-pose decoding

Each part channel contributes its highest-scoring heatmap cell, refined into
image coordinates with the offset field. No thresholding or suppression.
"""

import logging
from typing import List

import numpy as np

from .geometry import get_image_coords
from .keypoint import Keypoint
from .outputs import validate_pose_arrays

logger = logging.getLogger(__name__)


def decode_single_pose(heatmaps: np.ndarray, offsets: np.ndarray, stride: int) -> List[Keypoint]:
    """
    Estimate one keypoint per body part

    The winning cell is the first cell, in row-major order, with the
    strictly highest score above 0.0. A channel with no positive score
    yields a keypoint at grid cell (0, 0) with score 0.0.

    Args:
        heatmaps: Heatmap array [1, H, W, num_parts]
        offsets: Offsets array [1, H, W, 2 * num_parts]
        stride: Grid to image scale factor

    Returns:
        num_parts keypoints in image coordinates, indexed by part id

    Raises:
        ValidationError: If the arrays or stride are malformed

    Example:
        >>> keypoints = decode_single_pose(heatmaps, offsets, stride=16)
        >>> len(keypoints)
        17
    """
    heatmaps = np.asarray(heatmaps)
    offsets = np.asarray(offsets)
    validate_pose_arrays(heatmaps, offsets, stride=stride)

    _, height, width, num_parts = heatmaps.shape
    keypoints = []

    for part_id in range(num_parts):
        channel = heatmaps[0, :, :, part_id]
        flat_index = int(np.argmax(channel))
        score = float(channel.flat[flat_index])

        if score > 0.0:
            y, x = divmod(flat_index, width)
        else:
            score, y, x = 0.0, 0, 0

        part = Keypoint(score, (float(x), float(y)), part_id)
        keypoints.append(Keypoint(score, get_image_coords(part, stride, offsets), part_id))

    logger.debug("Decoded single pose over %dx%d grid", height, width)
    return keypoints
