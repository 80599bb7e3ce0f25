"""
Tests for pose containers, the PoseDecoder facade and post-processing
"""

import numpy as np
import pytest

from posenet.tests.helpers import make_arrays, make_outputs


def test_pose_fill_once():
    """A slot can be written while unset, never after"""
    from posenet.decoding import Keypoint, Pose
    from posenet.core.exceptions import PoseAssemblyError, ValidationError

    pose = Pose()
    assert len(pose) == 17
    assert pose.num_set == 0
    assert not pose.is_set(3)

    # A zero-score keypoint leaves the slot unset
    pose.set(Keypoint(0.0, (5.0, 5.0), 3))
    assert not pose.is_set(3)

    pose.set(Keypoint(0.6, (10.0, 12.0), 3))
    assert pose.is_set(3)
    assert pose[3].position == (10.0, 12.0)

    with pytest.raises(PoseAssemblyError):
        pose.set(Keypoint(0.7, (11.0, 12.0), 3))
    with pytest.raises(ValidationError):
        pose.set(Keypoint(0.7, (11.0, 12.0), 17))


def test_pose_conversions():
    """Array and dict views follow part id order"""
    from posenet.decoding import Keypoint, Pose

    keypoints = [Keypoint(0.5, (float(i), float(2 * i)), i) for i in range(17)]
    pose = Pose.from_keypoints(keypoints)

    arr = pose.to_array()
    assert arr.shape == (17, 3)
    np.testing.assert_allclose(arr[4], [4.0, 8.0, 0.5])

    d = pose.to_dict()
    assert d['nose'] == (0.0, 0.0, 0.5)
    assert d['right_ankle'] == (16.0, 32.0, 0.5)
    assert pose.score == pytest.approx(0.5)


def test_pose_from_keypoints_checks_order():
    """Keypoints must be listed by part id"""
    from posenet.decoding import Keypoint, Pose
    from posenet.core.exceptions import ValidationError

    with pytest.raises(ValidationError):
        Pose.from_keypoints([Keypoint(0.5, (0.0, 0.0), 1), Keypoint(0.5, (0.0, 0.0), 0)])


def test_decoder_single():
    """Single estimation returns exactly one full pose"""
    from posenet.decoding import PoseDecoder
    from posenet.core.config import DecoderConfig

    outputs = make_outputs()
    outputs.heatmaps[0, 3, 2, 0] = 0.9

    poses = PoseDecoder(DecoderConfig(estimation_type="single")).decode(outputs, stride=16)

    assert len(poses) == 1
    assert len(poses[0]) == 17
    assert poses[0][0].position == (32.0, 48.0)


def test_decoder_multi_uses_config():
    """Multi estimation honours max_poses and thresholds"""
    from posenet.decoding import ModelOutputs, PoseDecoder
    from posenet.core.config import DecoderConfig

    heatmaps, offsets, fwd, bwd = make_arrays()
    heatmaps[0, 1, 1, 0] = 0.9
    heatmaps[0, 7, 7, 0] = 0.8
    outputs = ModelOutputs(heatmaps, offsets, fwd, bwd)

    config = DecoderConfig(estimation_type="multi", max_poses=1, score_threshold=0.5, nms_radius=10)
    assert len(PoseDecoder(config).decode(outputs, stride=16)) == 1

    config = DecoderConfig(estimation_type="multi", max_poses=5, score_threshold=0.5, nms_radius=10)
    assert len(PoseDecoder(config).decode(outputs, stride=16)) == 2

    config = DecoderConfig(estimation_type="multi", max_poses=0)
    assert PoseDecoder(config).decode(outputs, stride=16) == []


def test_decoder_batch():
    """Batch decoding keeps frame order"""
    from posenet.decoding import PoseDecoder
    from posenet.core.config import DecoderConfig

    frames = [make_outputs(), make_outputs()]
    frames[1].heatmaps[0, 4, 4, 0] = 0.9

    decoder = PoseDecoder(DecoderConfig(score_threshold=0.5))
    results = decoder.decode_batch(frames, stride=16, show_progress=False)

    assert len(results) == 2
    assert results[0] == []
    assert len(results[1]) == 1


def test_scale_and_filter():
    """Positions scale to the source resolution; low scores are filtered"""
    from posenet.decoding import Keypoint, Pose, compute_source_scale, scale_pose, filter_keypoints

    assert compute_source_scale(1280, 720, 455, 256) == pytest.approx(2.8125)

    pose = Pose()
    pose.set(Keypoint(0.9, (10.0, 20.0), 0))
    pose.set(Keypoint(0.4, (30.0, 40.0), 5))

    scaled = scale_pose(pose, 2.0)
    assert scaled[0].position == (20.0, 40.0)
    assert scaled[5].position == (60.0, 80.0)
    assert pose[0].position == (10.0, 20.0)

    visible = filter_keypoints(scaled, min_confidence=0.5)
    assert set(visible) == {'nose'}
    assert visible['nose'] == (20.0, 40.0, pytest.approx(0.9))


def test_decoder_visible_keypoints():
    """The decoder filters with its configured min_confidence"""
    from posenet.decoding import Keypoint, Pose, PoseDecoder
    from posenet.core.config import DecoderConfig

    pose = Pose()
    pose.set(Keypoint(0.9, (10.0, 20.0), 0))
    pose.set(Keypoint(0.6, (30.0, 40.0), 5))

    assert set(PoseDecoder().visible_keypoints(pose)) == {'nose'}
    assert set(PoseDecoder(DecoderConfig(min_confidence=0.5)).visible_keypoints(pose)) == {'nose', 'left_shoulder'}


def test_package_exports_decoder():
    """PoseDecoder is importable from the package root"""
    import posenet
    from posenet.decoding import PoseDecoder

    assert posenet.PoseDecoder is PoseDecoder
    assert "PoseDecoder" in posenet.__all__
