"""
CSV handling utilities for decoded poses

Dataclass-based CSV I/O with one row per pose:
- image_name, frame, pose_id, pose_score
- {part}_x, {part}_y, {part}_conf for each of the 17 parts
"""

import csv
from collections import defaultdict
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List

from ..core.constants import CSV_POSE_COLUMNS, PART_NAMES
from ..core.exceptions import DataLoadError
from ..decoding.keypoint import Pose


@dataclass
class PoseRow:
    """Dataclass for decoded pose rows"""
    image_name: str
    frame: int
    pose_id: int
    pose_score: float
    keypoints: Dict[str, Dict[str, float]] = field(default_factory=dict)

    @classmethod
    def from_pose(cls, pose: Pose, image_name: str, frame: int, pose_id: int) -> "PoseRow":
        """Create row from a decoded pose"""
        keypoints = {
            name: {'x': x, 'y': y, 'conf': conf}
            for name, (x, y, conf) in pose.to_dict().items()
        }
        return cls(
            image_name=image_name,
            frame=frame,
            pose_id=pose_id,
            pose_score=pose.score,
            keypoints=keypoints,
        )

    @classmethod
    def from_dict(cls, d: Dict) -> "PoseRow":
        """Create instance from dictionary"""
        row = cls(
            image_name=d['image_name'],
            frame=int(d['frame']),
            pose_id=int(d['pose_id']),
            pose_score=float(d['pose_score']),
        )

        for part_name in PART_NAMES:
            row.keypoints[part_name] = {
                'x': float(d.get(f'{part_name}_x', 0)),
                'y': float(d.get(f'{part_name}_y', 0)),
                'conf': float(d.get(f'{part_name}_conf', 0)),
            }

        return row

    def to_dict(self) -> Dict:
        """Convert to dictionary"""
        d = {
            'image_name': self.image_name,
            'frame': self.frame,
            'pose_id': self.pose_id,
            'pose_score': self.pose_score,
        }

        for part_name in PART_NAMES:
            kpt = self.keypoints.get(part_name, {'x': 0, 'y': 0, 'conf': 0})
            d[f'{part_name}_x'] = kpt['x']
            d[f'{part_name}_y'] = kpt['y']
            d[f'{part_name}_conf'] = kpt['conf']

        return d


class CSVWriter:
    """CSV writing for decoded poses"""

    @staticmethod
    def write_poses(output_path: str, poses: List[PoseRow]) -> None:
        """
        Write decoded poses to CSV

        The header is written even when there are no poses.

        Args:
            output_path: Path to output CSV file
            poses: List of PoseRow instances

        Example:
            >>> from posenet.io import CSVWriter, PoseRow
            >>> rows = [PoseRow.from_pose(pose, 'frame_0001.npz', 1, 0)]
            >>> CSVWriter.write_poses('poses.csv', rows)
        """
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, 'w', newline='') as f:
            writer = csv.DictWriter(f, fieldnames=CSV_POSE_COLUMNS)
            writer.writeheader()

            for pose in poses:
                writer.writerow(pose.to_dict())


class CSVReader:
    """CSV reading for decoded poses"""

    @staticmethod
    def read_poses(csv_path: str, min_pose_score: float = 0.0) -> Dict[int, List[PoseRow]]:
        """
        Read decoded poses from CSV, grouped by frame number

        Args:
            csv_path: Path to pose CSV file
            min_pose_score: Minimum pose score to keep a row

        Returns:
            Dictionary mapping frame number to list of PoseRow

        Raises:
            DataLoadError: If CSV cannot be read

        Example:
            >>> from posenet.io import CSVReader
            >>> poses = CSVReader.read_poses('poses.csv')
            >>> for frame, rows in poses.items():
            ...     print(f"Frame {frame}: {len(rows)} poses")
        """
        csv_path = Path(csv_path)

        if not csv_path.exists():
            raise DataLoadError(f"CSV file not found: {csv_path}")

        poses_by_frame = defaultdict(list)

        try:
            with open(csv_path, 'r') as f:
                reader = csv.DictReader(f)

                for row in reader:
                    pose = PoseRow.from_dict(row)
                    if pose.pose_score < min_pose_score:
                        continue
                    poses_by_frame[pose.frame].append(pose)

            return dict(poses_by_frame)

        except (KeyError, ValueError) as e:
            raise DataLoadError(f"Failed to read pose CSV: {e}")
