"""
Decoding module - Keypoint decoding from PoseNet model outputs

Provides:
- Single- and multi-pose decoders
- Grid/image coordinate mapping
- Keypoint and pose containers
- Post-processing (scaling, confidence filtering)
"""

from .keypoint import Keypoint, Pose
from .outputs import ModelOutputs, validate_pose_arrays
from .geometry import (
    compute_stride,
    get_offset_vector,
    get_image_coords,
    get_strided_index_near_point,
    get_displacement,
)
from .single_pose import decode_single_pose
from .multi_pose import (
    score_is_maximum_in_local_window,
    build_part_list,
    traverse_to_target_keypoint,
    decode_pose,
    within_nms_radius_of_corresponding_point,
    decode_multiple_poses,
)
from .postprocess import compute_source_scale, scale_pose, filter_keypoints
from .decoder import PoseDecoder

__all__ = [
    # Containers
    "Keypoint",
    "Pose",
    "ModelOutputs",
    "validate_pose_arrays",
    # Geometry
    "compute_stride",
    "get_offset_vector",
    "get_image_coords",
    "get_strided_index_near_point",
    "get_displacement",
    # Decoders
    "decode_single_pose",
    "score_is_maximum_in_local_window",
    "build_part_list",
    "traverse_to_target_keypoint",
    "decode_pose",
    "within_nms_radius_of_corresponding_point",
    "decode_multiple_poses",
    "PoseDecoder",
    # Post-processing
    "compute_source_scale",
    "scale_pose",
    "filter_keypoints",
]
