"""
End-to-end tests for the posenet-decode command
"""

import tempfile
from pathlib import Path

from posenet.tests.helpers import make_outputs


def test_cli_decodes_frames_to_csv():
    """Two frames with one person each produce two CSV rows"""
    from posenet.cli import main
    from posenet.io import CSVReader, OutputsLoader

    with tempfile.TemporaryDirectory() as tmpdir:
        paths = []
        for frame in range(2):
            outputs = make_outputs()
            outputs.heatmaps[0, 2 + frame, 3, 0] = 0.9
            path = Path(tmpdir) / f"frame_{frame:04d}.npz"
            OutputsLoader.save_npz(str(path), outputs)
            paths.append(str(path))

        csv_path = Path(tmpdir) / "poses.csv"
        exit_code = main(paths + [
            "--output", str(csv_path),
            "--stride", "16",
            "--score-threshold", "0.5",
            "--no-progress",
        ])

        assert exit_code == 0
        by_frame = CSVReader.read_poses(str(csv_path))

    assert sorted(by_frame) == [0, 1]
    assert by_frame[1][0].keypoints['nose']['x'] == 48.0
    assert by_frame[1][0].keypoints['nose']['y'] == 48.0


def test_cli_single_pose_with_computed_stride():
    """Without --stride the stride comes from the input height"""
    from posenet.cli import main
    from posenet.io import CSVReader, OutputsLoader

    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "frame.npz"
        outputs = make_outputs(17, 17)
        outputs.heatmaps[0, 1, 1, 0] = 0.9
        OutputsLoader.save_npz(str(path), outputs)

        csv_path = Path(tmpdir) / "poses.csv"
        exit_code = main([
            str(path), "--output", str(csv_path),
            "--estimation-type", "single", "--input-height", "257", "--no-progress",
        ])

        assert exit_code == 0
        by_frame = CSVReader.read_poses(str(csv_path))

    assert len(by_frame[0]) == 1
    assert by_frame[0][0].keypoints['nose']['x'] == 16.0


def test_cli_reports_missing_input():
    """Unreadable inputs give a non-zero exit code"""
    from posenet.cli import main

    with tempfile.TemporaryDirectory() as tmpdir:
        exit_code = main([
            str(Path(tmpdir) / "missing.npz"),
            "--output", str(Path(tmpdir) / "poses.csv"),
            "--no-progress",
        ])

    assert exit_code == 1


def test_cli_rejects_zero_stride():
    """An explicit --stride 0 is an error, not a request for the computed stride"""
    from posenet.cli import main
    from posenet.io import OutputsLoader

    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "frame.npz"
        outputs = make_outputs()
        outputs.heatmaps[0, 2, 3, 0] = 0.9
        OutputsLoader.save_npz(str(path), outputs)

        csv_path = Path(tmpdir) / "poses.csv"
        exit_code = main([
            str(path), "--output", str(csv_path), "--stride", "0", "--no-progress",
        ])

        assert exit_code == 1
        assert not csv_path.exists()
