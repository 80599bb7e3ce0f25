"""
Multi-pose decoding

Pipeline:
- Collect local-maximum part detections above a score threshold
- Take candidates in descending score order as pose roots
- Skip roots within the NMS radius of a same-part keypoint of an accepted pose
- Grow a full pose from each root along the part tree using the
  backward and forward displacement fields
"""

import logging
from typing import List, Sequence, Tuple

import numpy as np

from ..core.constants import LOCAL_MAXIMUM_RADIUS, PARENT_CHILD_TUPLES
from ..core.exceptions import ValidationError
from .geometry import (
    get_displacement,
    get_image_coords,
    get_offset_vector,
    get_strided_index_near_point,
    squared_distance,
)
from .keypoint import Keypoint, Pose
from .outputs import validate_pose_arrays

logger = logging.getLogger(__name__)


def score_is_maximum_in_local_window(
    part_id: int,
    score: float,
    y: int,
    x: int,
    radius: int,
    heatmaps: np.ndarray
) -> bool:
    """
    Check that no cell in the window around (y, x) beats `score`

    The (2 * radius + 1) square window is clipped to the heatmap bounds.
    Equal scores do not disqualify the cell.
    """
    height, width = heatmaps.shape[1:3]
    y_start = max(y - radius, 0)
    y_end = min(y + radius + 1, height)
    x_start = max(x - radius, 0)
    x_end = min(x + radius + 1, width)

    window = heatmaps[0, y_start:y_end, x_start:x_end, part_id]
    return not bool(np.any(window > score))


def build_part_list(score_threshold: float, radius: int, heatmaps: np.ndarray) -> List[Keypoint]:
    """
    Local-maximum part detections with score >= score_threshold

    Keypoints are returned in scan order (part id, then row, then column)
    with grid-space positions.

    Example:
        >>> parts = build_part_list(0.5, 1, heatmaps)
        >>> parts[0].position  # (x, y) heatmap cell
    """
    scores = heatmaps[0]
    # nonzero on [P, H, W] walks part, row, column
    part_ids, ys, xs = np.nonzero(np.transpose(scores >= score_threshold, (2, 0, 1)))

    parts = []
    for part_id, y, x in zip(part_ids.tolist(), ys.tolist(), xs.tolist()):
        score = float(scores[y, x, part_id])
        if score_is_maximum_in_local_window(part_id, score, y, x, radius, heatmaps):
            parts.append(Keypoint(score, (float(x), float(y)), part_id))

    return parts


def traverse_to_target_keypoint(
    edge_id: int,
    source_keypoint: Keypoint,
    target_keypoint_id: int,
    heatmaps: np.ndarray,
    offsets: np.ndarray,
    stride: int,
    displacements: np.ndarray
) -> Keypoint:
    """
    Locate a tree-adjacent part by following a displacement field

    The displacement read at the source's nearest grid cell is added to the
    source position as stored, without rescaling by the stride. The target
    score comes from the heatmap at the displaced cell.

    Args:
        edge_id: Edge connecting source and target
        source_keypoint: Keypoint in image coordinates
        target_keypoint_id: Part id to locate
        heatmaps: Heatmap array [1, H, W, num_parts]
        offsets: Offsets array [1, H, W, 2 * num_parts]
        stride: Grid to image scale factor
        displacements: Forward or backward displacement array

    Returns:
        Target keypoint in image coordinates
    """
    height, width = heatmaps.shape[1:3]

    source_indices = get_strided_index_near_point(
        source_keypoint.position, stride, height, width
    )
    displacement = get_displacement(edge_id, source_indices, displacements)
    displaced_point = (
        source_keypoint.position[0] + displacement[0],
        source_keypoint.position[1] + displacement[1],
    )

    x, y = get_strided_index_near_point(displaced_point, stride, height, width)
    offset_x, offset_y = get_offset_vector(y, x, target_keypoint_id, offsets)
    score = float(heatmaps[0, y, x, target_keypoint_id])

    return Keypoint(
        score,
        (x * stride + offset_x, y * stride + offset_y),
        target_keypoint_id,
    )


def decode_pose(
    root: Keypoint,
    heatmaps: np.ndarray,
    offsets: np.ndarray,
    stride: int,
    displacements_fwd: np.ndarray,
    displacements_bwd: np.ndarray
) -> Pose:
    """
    Grow a full pose from a root part detection

    The root is placed in image coordinates. Parts are then filled upwards
    along the tree (edges last to first, backward displacements) and
    downwards (edges first to last, forward displacements). Only slots with a
    positive score act as sources, and only unset slots are filled.

    Args:
        root: Root detection with grid-space position
        heatmaps, offsets, displacements_fwd, displacements_bwd: Model outputs
        stride: Grid to image scale factor

    Returns:
        Pose with keypoints in image coordinates
    """
    num_parts = heatmaps.shape[3]
    if root.part_id < 0 or root.part_id >= num_parts:
        raise ValidationError(f"Root part id {root.part_id} out of range [0, {num_parts})")

    pose = Pose(num_parts)
    root_point = get_image_coords(root, stride, offsets)
    pose.set(Keypoint(root.score, root_point, root.part_id))

    num_edges = len(PARENT_CHILD_TUPLES)

    for edge in range(num_edges - 1, -1, -1):
        target_id, source_id = PARENT_CHILD_TUPLES[edge]
        if pose[source_id].score > 0.0 and not pose.is_set(target_id):
            pose.set(traverse_to_target_keypoint(
                edge, pose[source_id], target_id, heatmaps,
                offsets, stride, displacements_bwd))

    for edge in range(num_edges):
        source_id, target_id = PARENT_CHILD_TUPLES[edge]
        if pose[source_id].score > 0.0 and not pose.is_set(target_id):
            pose.set(traverse_to_target_keypoint(
                edge, pose[source_id], target_id, heatmaps,
                offsets, stride, displacements_fwd))

    return pose


def within_nms_radius_of_corresponding_point(
    poses: Sequence[Pose],
    squared_nms_radius: float,
    point: Tuple[float, float],
    keypoint_id: int
) -> bool:
    """
    Check if any accepted pose has the same part within the NMS radius

    Unset slots take part in the comparison at their placeholder position.
    """
    return any(
        squared_distance(point, pose[keypoint_id].position) <= squared_nms_radius
        for pose in poses
    )


def decode_multiple_poses(
    heatmaps: np.ndarray,
    offsets: np.ndarray,
    displacements_fwd: np.ndarray,
    displacements_bwd: np.ndarray,
    stride: int,
    max_pose_detections: int,
    score_threshold: float = 0.5,
    nms_radius: int = 20
) -> List[Pose]:
    """
    Detect multiple poses from part scores and displacement fields

    Args:
        heatmaps: Heatmap array [1, H, W, num_parts]
        offsets: Offsets array [1, H, W, 2 * num_parts]
        displacements_fwd: Forward displacements [1, H, W, 2 * num_edges]
        displacements_bwd: Backward displacements [1, H, W, 2 * num_edges]
        stride: Grid to image scale factor
        max_pose_detections: Maximum number of poses to return
        score_threshold: Minimum root candidate score
        nms_radius: Minimum image-space distance between same-part keypoints
            of different poses

    Returns:
        Poses in discovery order, at most max_pose_detections

    Raises:
        ValidationError: If the arrays or parameters are malformed

    Example:
        >>> poses = decode_multiple_poses(heatmaps, offsets, fwd, bwd,
        ...                               stride=16, max_pose_detections=5)
        >>> len(poses) <= 5
        True
    """
    heatmaps = np.asarray(heatmaps)
    offsets = np.asarray(offsets)
    displacements_fwd = np.asarray(displacements_fwd)
    displacements_bwd = np.asarray(displacements_bwd)
    validate_pose_arrays(heatmaps, offsets, displacements_fwd, displacements_bwd, stride)

    if heatmaps.shape[3] != len(PARENT_CHILD_TUPLES) + 1:
        raise ValidationError(
            f"Multi-pose decoding needs {len(PARENT_CHILD_TUPLES) + 1} part channels, "
            f"got {heatmaps.shape[3]}"
        )
    if max_pose_detections < 0:
        raise ValidationError(f"max_pose_detections must be >= 0, got {max_pose_detections}")
    if nms_radius < 0:
        raise ValidationError(f"nms_radius must be >= 0, got {nms_radius}")

    poses: List[Pose] = []
    if max_pose_detections == 0:
        return poses

    squared_nms_radius = float(nms_radius) * nms_radius

    candidates = build_part_list(score_threshold, LOCAL_MAXIMUM_RADIUS, heatmaps)
    # Stable sort keeps scan order between equal scores
    candidates.sort(key=lambda part: part.score, reverse=True)
    logger.debug("Found %d root candidates above %.3f", len(candidates), score_threshold)

    suppressed = 0
    for root in candidates:
        if len(poses) >= max_pose_detections:
            break

        root_image_coords = get_image_coords(root, stride, offsets)

        if within_nms_radius_of_corresponding_point(
                poses, squared_nms_radius, root_image_coords, root.part_id):
            suppressed += 1
            continue

        poses.append(decode_pose(
            root, heatmaps, offsets, stride, displacements_fwd, displacements_bwd))

    logger.debug("Decoded %d poses (%d roots suppressed)", len(poses), suppressed)
    return poses
