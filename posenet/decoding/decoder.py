"""
Pose decoder facade

Provides:
- PoseDecoder: selects single- or multi-pose decoding from a DecoderConfig
- Batch decoding with progress tracking
"""

import logging
from typing import Dict, List, Optional, Sequence, Tuple

from tqdm import tqdm

from ..core.config import DecoderConfig
from .keypoint import Pose
from .multi_pose import decode_multiple_poses
from .outputs import ModelOutputs
from .postprocess import filter_keypoints
from .single_pose import decode_single_pose

logger = logging.getLogger(__name__)


class PoseDecoder:
    """
    Decode model outputs into poses according to a DecoderConfig

    Holds no state between calls, so one instance can decode frames from
    several threads.

    Example:
        >>> from posenet.decoding import PoseDecoder
        >>> from posenet.core.config import DecoderConfig
        >>> decoder = PoseDecoder(DecoderConfig(estimation_type="multi", max_poses=5))
        >>> poses = decoder.decode(outputs, stride=16)
    """

    def __init__(self, config: Optional[DecoderConfig] = None):
        self.config = config if config is not None else DecoderConfig()

    def decode(self, outputs: ModelOutputs, stride: int) -> List[Pose]:
        """
        Decode one frame

        Args:
            outputs: Model outputs for the frame
            stride: Grid to image scale factor

        Returns:
            A single pose for 'single' estimation, up to max_poses poses for 'multi'
        """
        if self.config.estimation_type == "single":
            keypoints = decode_single_pose(outputs.heatmaps, outputs.offsets, stride)
            return [Pose.from_keypoints(keypoints)]

        return decode_multiple_poses(
            outputs.heatmaps,
            outputs.offsets,
            outputs.displacement_fwd,
            outputs.displacement_bwd,
            stride=stride,
            max_pose_detections=self.config.max_poses,
            score_threshold=self.config.score_threshold,
            nms_radius=self.config.nms_radius,
        )

    def decode_batch(
        self,
        outputs_list: Sequence[ModelOutputs],
        stride: int,
        show_progress: bool = True
    ) -> List[List[Pose]]:
        """
        Decode a sequence of frames

        Args:
            outputs_list: Model outputs per frame
            stride: Grid to image scale factor shared by all frames
            show_progress: Show progress bar

        Returns:
            List of per-frame pose lists
        """
        iterator = (
            tqdm(outputs_list, total=len(outputs_list), desc="Decoding poses")
            if show_progress
            else outputs_list
        )

        results = [self.decode(outputs, stride) for outputs in iterator]

        logger.info(
            "Decoded %d frames, %d poses",
            len(results), sum(len(poses) for poses in results)
        )
        return results

    def visible_keypoints(self, pose: Pose) -> Dict[str, Tuple[float, float, float]]:
        """Keypoints of a pose at or above the configured min_confidence"""
        return filter_keypoints(pose, self.config.min_confidence)
