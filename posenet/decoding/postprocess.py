"""
Keypoint post-processing for consumers of decoded poses

Provides:
- Scaling from model input resolution to source resolution
- Confidence filtering
"""

from typing import Dict, Tuple

from .keypoint import Keypoint, Pose


def compute_source_scale(
    source_width: int,
    source_height: int,
    input_width: int,
    input_height: int
) -> float:
    """
    Factor mapping model input pixels to source image pixels

    Uses the smaller side of each image, matching how the input is
    resized with the source aspect ratio preserved.

    Example:
        >>> compute_source_scale(1280, 720, 455, 256)
        2.8125
    """
    return min(source_width, source_height) / min(input_width, input_height)


def scale_pose(pose: Pose, scale: float) -> Pose:
    """
    Scale every keypoint position of a pose

    Returns:
        New pose; the input pose is left untouched
    """
    return Pose.from_keypoints([
        Keypoint(kpt.score, (kpt.x * scale, kpt.y * scale), kpt.part_id)
        for kpt in pose
    ])


def filter_keypoints(pose: Pose, min_confidence: float = 0.7) -> Dict[str, Tuple[float, float, float]]:
    """
    Keypoints of a pose that meet the confidence threshold

    Args:
        pose: Decoded pose
        min_confidence: Minimum score to keep a keypoint

    Returns:
        Dict mapping part name to (x, y, score)

    Example:
        >>> visible = filter_keypoints(pose, min_confidence=0.5)
        >>> 'nose' in visible
    """
    return {
        name: (x, y, score)
        for name, (x, y, score) in pose.to_dict().items()
        if score >= min_confidence
    }
