"""
Synthetic model outputs for decoder tests
"""

import numpy as np

from posenet.core.constants import NUM_KEYPOINTS


def make_arrays(height: int = 9, width: int = 9, num_parts: int = NUM_KEYPOINTS):
    """
    Zero-filled heatmaps, offsets and displacement arrays

    Returns:
        (heatmaps, offsets, displacement_fwd, displacement_bwd)
    """
    num_edges = num_parts - 1
    heatmaps = np.zeros((1, height, width, num_parts), dtype=np.float32)
    offsets = np.zeros((1, height, width, 2 * num_parts), dtype=np.float32)
    displacement_fwd = np.zeros((1, height, width, 2 * num_edges), dtype=np.float32)
    displacement_bwd = np.zeros((1, height, width, 2 * num_edges), dtype=np.float32)
    return heatmaps, offsets, displacement_fwd, displacement_bwd


def make_outputs(height: int = 9, width: int = 9):
    """Zero-filled ModelOutputs"""
    from posenet.decoding import ModelOutputs

    return ModelOutputs(*make_arrays(height, width))
