"""Reference arrays written by ``python -m sane_array examples``.

Other SANE implementations ship the same fixtures, so the files can be used
to check compatibility in both directions.
"""

from pathlib import Path
from typing import Dict

import numpy as np

from .record import write_sane


def example_arrays() -> Dict[str, np.ndarray]:
    """Return the fixture arrays keyed by file stem."""
    return {
        "simple": np.array([[1, 2], [3, 4]], dtype=np.int32),
        "scalar": np.array(1.0, dtype=np.float32),
        "vec": np.array([1.0], dtype=np.float32),
        "f64": np.arange(1.0, 8.0, 0.5, dtype=np.float64),
        "i8": np.arange(-5, 5, dtype=np.int8),
        "u8": np.arange(0, 5, dtype=np.uint8),
        "nested": np.arange(1, 25, dtype=np.int32).reshape(4, 3, 2),
    }


def write_examples(directory) -> Dict[str, Path]:
    """Write each fixture to ``<directory>/<name>.sane``."""
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    paths = {}
    for name, array in example_arrays().items():
        path = directory / f"{name}.sane"
        with open(path, "wb") as f:
            write_sane(f, array)
        paths[name] = path
    return paths
