"""
Tests for NPZ output loading and pose CSV handling
"""

import tempfile
from pathlib import Path

import numpy as np
import pytest

from posenet.tests.helpers import make_arrays, make_outputs


def test_save_and_load_named_outputs():
    """Named-key NPZ files load into validated ModelOutputs"""
    from posenet.io import OutputsLoader

    outputs = make_outputs()
    outputs.heatmaps[0, 2, 3, 4] = 0.75

    with tempfile.TemporaryDirectory() as tmpdir:
        npz_path = Path(tmpdir) / "frames" / "frame_0001.npz"
        OutputsLoader.save_npz(str(npz_path), outputs)
        loaded = OutputsLoader.load_npz(str(npz_path))

    assert loaded.heatmaps.shape == (1, 9, 9, 17)
    assert loaded.heatmaps[0, 2, 3, 4] == pytest.approx(0.75)


def test_load_raw_layers():
    """Raw layer files need the model type to order displacements"""
    from posenet.io import OutputsLoader
    from posenet.core.exceptions import DataLoadError

    heatmaps, offsets, fwd, bwd = make_arrays()

    with tempfile.TemporaryDirectory() as tmpdir:
        npz_path = Path(tmpdir) / "raw.npz"
        np.savez(str(npz_path), output_0=heatmaps, output_1=offsets,
                 output_2=fwd + 1.0, output_3=bwd + 2.0)

        resnet = OutputsLoader.load_npz(str(npz_path), model_type="resnet50")
        mobilenet = OutputsLoader.load_npz(str(npz_path), model_type="mobilenet")

        with pytest.raises(DataLoadError):
            OutputsLoader.load_npz(str(npz_path))

    assert np.all(resnet.displacement_fwd == 2.0)
    assert np.all(mobilenet.displacement_fwd == 1.0)


def test_load_errors():
    """Missing files, unknown keys and bad shapes raise DataLoadError"""
    from posenet.io import OutputsLoader
    from posenet.core.exceptions import DataLoadError

    with pytest.raises(DataLoadError):
        OutputsLoader.load_npz("/nonexistent/frame.npz")

    heatmaps, offsets, fwd, bwd = make_arrays()

    with tempfile.TemporaryDirectory() as tmpdir:
        unknown = Path(tmpdir) / "unknown.npz"
        np.savez(str(unknown), scores=heatmaps)
        with pytest.raises(DataLoadError):
            OutputsLoader.load_npz(str(unknown))

        mismatched = Path(tmpdir) / "mismatched.npz"
        np.savez(str(mismatched), heatmaps=heatmaps, offsets=offsets[:, :4],
                 displacement_fwd=fwd, displacement_bwd=bwd)
        with pytest.raises(DataLoadError):
            OutputsLoader.load_npz(str(mismatched))


def test_pose_csv_round_trip():
    """Pose rows are written and read back grouped by frame"""
    from posenet.decoding import Keypoint, Pose
    from posenet.io import CSVReader, CSVWriter, PoseRow

    pose = Pose()
    pose.set(Keypoint(0.9, (10.5, 20.25), 0))
    pose.set(Keypoint(0.8, (30.0, 40.0), 16))

    rows = [
        PoseRow.from_pose(pose, "frame_0000.npz", 0, 0),
        PoseRow.from_pose(pose, "frame_0000.npz", 0, 1),
        PoseRow.from_pose(pose, "frame_0001.npz", 1, 0),
    ]

    with tempfile.TemporaryDirectory() as tmpdir:
        csv_path = Path(tmpdir) / "out" / "poses.csv"
        CSVWriter.write_poses(str(csv_path), rows)
        by_frame = CSVReader.read_poses(str(csv_path))

    assert sorted(by_frame) == [0, 1]
    assert len(by_frame[0]) == 2
    row = by_frame[1][0]
    assert row.image_name == "frame_0001.npz"
    assert row.keypoints['nose'] == {'x': 10.5, 'y': 20.25, 'conf': pytest.approx(0.9)}
    assert row.keypoints['right_ankle']['conf'] == pytest.approx(0.8)
    assert row.pose_score == pytest.approx(pose.score)


def test_pose_csv_empty_and_missing():
    """An empty pose list still writes a header; missing files raise"""
    from posenet.io import CSVReader, CSVWriter
    from posenet.core.constants import CSV_POSE_COLUMNS
    from posenet.core.exceptions import DataLoadError

    with tempfile.TemporaryDirectory() as tmpdir:
        csv_path = Path(tmpdir) / "empty.csv"
        CSVWriter.write_poses(str(csv_path), [])
        header = csv_path.read_text().splitlines()[0]
        assert header.split(",") == CSV_POSE_COLUMNS
        assert CSVReader.read_poses(str(csv_path)) == {}

    with pytest.raises(DataLoadError):
        CSVReader.read_poses("/nonexistent/poses.csv")
