"""
Tests for single-pose decoding
"""

import pytest

from posenet.tests.helpers import make_arrays


def test_all_zero_heatmaps():
    """Every part falls back to grid cell (0, 0) with score 0.0"""
    from posenet.decoding import decode_single_pose, get_image_coords, Keypoint

    heatmaps, offsets, _, _ = make_arrays()
    for part_id in range(17):
        offsets[0, 0, 0, part_id + 17] = part_id
        offsets[0, 0, 0, part_id] = 2 * part_id

    keypoints = decode_single_pose(heatmaps, offsets, stride=16)

    assert len(keypoints) == 17
    for part_id, kpt in enumerate(keypoints):
        assert kpt.part_id == part_id
        assert kpt.score == 0.0
        origin = Keypoint(0.0, (0.0, 0.0), part_id)
        assert kpt.position == get_image_coords(origin, 16, offsets)
        assert kpt.position == (float(part_id), float(2 * part_id))


def test_global_maximum_with_offset():
    """The highest cell of a channel is refined into image coordinates"""
    from posenet.decoding import decode_single_pose

    heatmaps, offsets, _, _ = make_arrays()
    heatmaps[0, 4, 6, 3] = 0.8
    heatmaps[0, 1, 1, 3] = 0.3
    offsets[0, 4, 6, 3 + 17] = 1.5
    offsets[0, 4, 6, 3] = -0.5

    keypoints = decode_single_pose(heatmaps, offsets, stride=16)

    assert keypoints[3].score == pytest.approx(0.8)
    assert keypoints[3].position == (97.5, 63.5)
    # Other channels are untouched
    assert keypoints[4].score == 0.0


def test_first_maximum_wins_ties():
    """Equal scores keep the first cell in row-major order"""
    from posenet.decoding import decode_single_pose

    heatmaps, offsets, _, _ = make_arrays()
    heatmaps[0, 2, 5, 0] = 0.6
    heatmaps[0, 2, 1, 0] = 0.6
    heatmaps[0, 7, 0, 0] = 0.6

    keypoints = decode_single_pose(heatmaps, offsets, stride=16)

    assert keypoints[0].position == (16.0, 32.0)


def test_no_threshold_applied():
    """Low scores still produce a keypoint per part"""
    from posenet.decoding import decode_single_pose

    heatmaps, offsets, _, _ = make_arrays()
    heatmaps[..., :] = 0.01
    heatmaps[0, 3, 3, 10] = 0.02

    keypoints = decode_single_pose(heatmaps, offsets, stride=8)

    assert len(keypoints) == 17
    assert all(kpt.score > 0 for kpt in keypoints)
    assert keypoints[10].position == (24.0, 24.0)
    assert keypoints[0].position == (0.0, 0.0)


def test_invalid_inputs():
    """Malformed arrays and strides are rejected"""
    from posenet.decoding import decode_single_pose
    from posenet.core.exceptions import ValidationError

    heatmaps, offsets, _, _ = make_arrays()

    with pytest.raises(ValidationError):
        decode_single_pose(heatmaps, offsets[..., :20], stride=16)
    with pytest.raises(ValidationError):
        decode_single_pose(heatmaps, offsets, stride=0)
