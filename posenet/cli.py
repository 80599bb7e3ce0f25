"""
Command line entry point: decode saved model outputs into a pose CSV

Usage:
    posenet-decode frame_0001.npz frame_0002.npz --output poses.csv
    posenet-decode outputs/*.npz --estimation-type single --input-height 257
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .core.config import PoseNetConfig
from .core.constants import ESTIMATION_TYPES, MODEL_TYPES
from .core.exceptions import PoseNetException, handle_posenet_exception
from .decoding import PoseDecoder, compute_stride
from .io import CSVWriter, OutputsLoader, PoseRow
from .utils import setup_logger

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Decode PoseNet heatmap/offset/displacement outputs into keypoints"
    )
    parser.add_argument("inputs", nargs="+", help="NPZ files with model outputs, in frame order")
    parser.add_argument("--output", type=str, default="poses.csv", help="Output CSV path")
    parser.add_argument("--config", type=str, default=None, help="YAML configuration file")
    parser.add_argument("--estimation-type", choices=ESTIMATION_TYPES, default=None,
                        help="Decode a single pose or multiple poses")
    parser.add_argument("--max-poses", type=int, default=None, help="Maximum poses per frame")
    parser.add_argument("--score-threshold", type=float, default=None,
                        help="Minimum root part score for multi-pose decoding")
    parser.add_argument("--nms-radius", type=int, default=None,
                        help="Non-maximum suppression part distance in pixels")
    parser.add_argument("--model-type", choices=MODEL_TYPES, default=None,
                        help="Model architecture, used to order raw output layers")
    parser.add_argument("--input-height", type=int, default=None,
                        help="Model input height, used to compute the stride")
    parser.add_argument("--stride", type=int, default=None,
                        help="Output stride; computed from --input-height when omitted")
    parser.add_argument("--log-level", type=str, default=None, help="Logging level")
    parser.add_argument("--no-progress", action="store_true", help="Hide progress bars")
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> PoseNetConfig:
    """Merge YAML, environment and command line settings, in that order"""
    config = PoseNetConfig.from_yaml(args.config) if args.config else PoseNetConfig()
    config = PoseNetConfig.from_env(config)

    if args.estimation_type is not None:
        config.decoder.estimation_type = args.estimation_type
    if args.max_poses is not None:
        config.decoder.max_poses = args.max_poses
    if args.score_threshold is not None:
        config.decoder.score_threshold = args.score_threshold
    if args.nms_radius is not None:
        config.decoder.nms_radius = args.nms_radius
    if args.model_type is not None:
        config.model.model_type = args.model_type
    if args.input_height is not None:
        config.model.input_height = args.input_height
    if args.log_level is not None:
        config.logging.level = args.log_level

    config.decoder.__post_init__()
    config.model.__post_init__()
    return config


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    try:
        config = build_config(args)
        setup_logger(config.logging)

        outputs_list = OutputsLoader.load_batch(
            args.inputs, config.model.model_type, show_progress=not args.no_progress
        )

        decoder = PoseDecoder(config.decoder)
        rows = []
        for frame, (path, outputs) in enumerate(zip(args.inputs, outputs_list)):
            stride = args.stride
            if stride is None:
                stride = compute_stride(config.model.input_height, outputs.height)
            poses = decoder.decode(outputs, stride)
            logger.debug(f"{path}: {len(poses)} poses (stride {stride})")
            rows.extend(
                PoseRow.from_pose(pose, Path(path).name, frame, pose_id)
                for pose_id, pose in enumerate(poses)
            )

        CSVWriter.write_poses(args.output, rows)
        logger.info(f"Wrote {len(rows)} poses from {len(outputs_list)} frames to {args.output}")

    except PoseNetException as e:
        handle_posenet_exception(e)
        return 1
    except FileNotFoundError as e:
        logger.error(str(e))
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
