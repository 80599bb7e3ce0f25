"""
Model output loading utilities

Unified interface for loading and saving the four PoseNet output arrays
stored in NPZ files, either under named keys or as raw ordered layers.
"""

from pathlib import Path
from typing import List, Optional

import numpy as np
from tqdm import tqdm

from ..core.constants import OUTPUT_KEYS, RAW_LAYER_KEYS
from ..core.exceptions import DataLoadError, ValidationError
from ..decoding.outputs import ModelOutputs


class OutputsLoader:
    """
    NPZ loading for PoseNet model outputs

    Handles:
    - Named arrays: heatmaps, offsets, displacement_fwd, displacement_bwd
    - Raw layers: output_0..output_3 in model order (needs model_type)
    - Error handling and validation
    """

    @staticmethod
    def load_npz(npz_path: str, model_type: Optional[str] = None) -> ModelOutputs:
        """
        Load model outputs from an NPZ file

        Args:
            npz_path: Path to NPZ file
            model_type: 'mobilenet' or 'resnet50', required for raw layer files

        Returns:
            Validated ModelOutputs

        Raises:
            DataLoadError: If the file is missing, unreadable or malformed

        Example:
            >>> from posenet.io import OutputsLoader
            >>> outputs = OutputsLoader.load_npz("frame_0001.npz")
            >>> outputs.heatmaps.shape
            (1, 17, 17, 17)
        """
        npz_path = Path(npz_path)

        if not npz_path.exists():
            raise DataLoadError(f"NPZ file not found: {npz_path}")

        try:
            with np.load(npz_path, allow_pickle=False) as data:
                arrays = {key: data[key] for key in data.files}
        except Exception as e:
            raise DataLoadError(f"Failed to load NPZ file {npz_path}: {e}")

        try:
            if all(key in arrays for key in OUTPUT_KEYS):
                return ModelOutputs(*(arrays[key] for key in OUTPUT_KEYS))

            if all(key in arrays for key in RAW_LAYER_KEYS):
                if model_type is None:
                    raise DataLoadError(
                        f"model_type is required to resolve raw output layers: {npz_path}"
                    )
                return ModelOutputs.from_layers(
                    [arrays[key] for key in RAW_LAYER_KEYS], model_type
                )
        except ValidationError as e:
            raise DataLoadError(f"Invalid model outputs in {npz_path}: {e}")

        raise DataLoadError(
            f"Expected keys {OUTPUT_KEYS} or {RAW_LAYER_KEYS}, "
            f"got {sorted(arrays)}: {npz_path}"
        )

    @staticmethod
    def save_npz(npz_path: str, outputs: ModelOutputs) -> None:
        """
        Save model outputs under named keys

        Args:
            npz_path: Output path
            outputs: Model outputs to save
        """
        npz_path = Path(npz_path)
        npz_path.parent.mkdir(parents=True, exist_ok=True)

        np.savez_compressed(
            str(npz_path),
            heatmaps=outputs.heatmaps,
            offsets=outputs.offsets,
            displacement_fwd=outputs.displacement_fwd,
            displacement_bwd=outputs.displacement_bwd,
        )

    @staticmethod
    def load_batch(
        npz_paths: List[str],
        model_type: Optional[str] = None,
        show_progress: bool = True
    ) -> List[ModelOutputs]:
        """
        Load several NPZ files, failing on the first bad file

        Args:
            npz_paths: NPZ file paths in frame order
            model_type: Passed through to load_npz
            show_progress: Show progress bar

        Returns:
            ModelOutputs per file
        """
        iterator = tqdm(npz_paths, desc="Loading outputs") if show_progress else npz_paths
        return [OutputsLoader.load_npz(path, model_type) for path in iterator]
