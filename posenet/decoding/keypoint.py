"""
Keypoint and pose containers produced by the decoders

A Pose is a fixed-length list of keypoints indexed by part id. A slot whose
keypoint has score 0.0 is unset; decoding fills each slot at most once.
"""

from dataclasses import dataclass
from typing import Dict, Iterator, List, Sequence, Tuple

import numpy as np

from ..core.constants import NUM_KEYPOINTS, PART_NAMES
from ..core.exceptions import PoseAssemblyError, ValidationError


@dataclass(frozen=True)
class Keypoint:
    """
    A detected body part instance

    `position` is (x, y). Depending on the decoding stage it holds heatmap
    grid coordinates or input image coordinates.
    """
    score: float
    position: Tuple[float, float]
    part_id: int

    @classmethod
    def unset(cls, part_id: int) -> "Keypoint":
        """Placeholder for a pose slot that has not been decoded"""
        return cls(0.0, (0.0, 0.0), part_id)

    @property
    def x(self) -> float:
        return self.position[0]

    @property
    def y(self) -> float:
        return self.position[1]

    @property
    def is_set(self) -> bool:
        return self.score != 0.0

    @property
    def name(self) -> str:
        return PART_NAMES[self.part_id]


class Pose:
    """
    Fixed-size sequence of keypoints for one person, indexed by part id

    Example:
        >>> pose = Pose()
        >>> pose.set(Keypoint(0.9, (120.0, 64.0), 0))
        >>> pose[0].score
        0.9
        >>> pose.is_set(1)
        False
    """

    def __init__(self, num_parts: int = NUM_KEYPOINTS):
        self._keypoints: List[Keypoint] = [Keypoint.unset(i) for i in range(num_parts)]

    @classmethod
    def from_keypoints(cls, keypoints: Sequence[Keypoint]) -> "Pose":
        """
        Build a pose from one keypoint per part id

        Raises:
            ValidationError: If a keypoint's id does not match its index
        """
        pose = cls(len(keypoints))
        for index, keypoint in enumerate(keypoints):
            if keypoint.part_id != index:
                raise ValidationError(
                    f"Keypoint at index {index} has part id {keypoint.part_id}"
                )
            pose._keypoints[index] = keypoint
        return pose

    def __len__(self) -> int:
        return len(self._keypoints)

    def __getitem__(self, part_id: int) -> Keypoint:
        return self._keypoints[part_id]

    def __iter__(self) -> Iterator[Keypoint]:
        return iter(self._keypoints)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Pose):
            return NotImplemented
        return self._keypoints == other._keypoints

    def __repr__(self) -> str:
        return f"Pose(num_set={self.num_set}, score={self.score:.3f})"

    def is_set(self, part_id: int) -> bool:
        return self._keypoints[part_id].is_set

    def set(self, keypoint: Keypoint) -> None:
        """
        Place a keypoint in its slot

        Raises:
            ValidationError: If the part id is out of range
            PoseAssemblyError: If the slot already holds a keypoint
        """
        part_id = keypoint.part_id
        if part_id < 0 or part_id >= len(self._keypoints):
            raise ValidationError(
                f"Part id {part_id} out of range [0, {len(self._keypoints)})"
            )
        if self._keypoints[part_id].is_set:
            raise PoseAssemblyError(f"Pose slot {part_id} is already set")
        self._keypoints[part_id] = keypoint

    @property
    def keypoints(self) -> Tuple[Keypoint, ...]:
        return tuple(self._keypoints)

    @property
    def num_set(self) -> int:
        return sum(1 for kpt in self._keypoints if kpt.is_set)

    @property
    def score(self) -> float:
        """Mean keypoint score over all slots"""
        if not self._keypoints:
            return 0.0
        return float(np.mean([kpt.score for kpt in self._keypoints]))

    def to_array(self) -> np.ndarray:
        """
        Convert to array format

        Returns:
            Array of shape (num_parts, 3) with [x, y, score] rows
        """
        return np.array(
            [[kpt.x, kpt.y, kpt.score] for kpt in self._keypoints],
            dtype=np.float32,
        ).reshape(len(self._keypoints), 3)

    def to_dict(self) -> Dict[str, Tuple[float, float, float]]:
        """
        Convert to keypoint dict

        Returns:
            Dict mapping part name to (x, y, score)
        """
        return {
            kpt.name: (float(kpt.x), float(kpt.y), float(kpt.score))
            for kpt in self._keypoints
        }
